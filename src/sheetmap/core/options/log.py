# src/sheetmap/core/options/log.py
"""
Log estruturado da montagem de opções.

Eventos não são texto livre: cada evento é um dicionário com `target`,
`level`, `message`, `timestamp` e campos extras. Warnings (sinais não
fatais, como uma estratégia de coluna sobrescrita) são agrupados por
propriedade.

Limites explícitos:
    - Não persiste eventos
    - Não interrompe a montagem
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class OptionsLog:
    """Coletor de eventos e warnings de um `OptionsBuilder`."""
    target: str
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "target": self.target,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, property_name: str, message: str) -> None:
        if property_name not in self.warnings:
            self.warnings[property_name] = []
        self.warnings[property_name].append(message)
        self.log(level="WARN", message=message, property=property_name)

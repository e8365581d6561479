# src/sheetmap/core/validation/validator.py
"""Validador de célula: mensagem + predicado, imutável e sem estado."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CellValidator:
    """
    Regra de validação aplicada a um único valor de célula.

    `message` é a descrição humana da falha; o motor de leitura decide
    como prefixá-la (campo, linha, coluna). `predicate` retorna True
    quando o valor é aceito.

    Vários validadores para o mesmo campo são compostos por conjunção,
    na ordem de declaração.
    """

    message: str
    predicate: Callable[[Any], bool]

    def is_valid(self, value: Any) -> bool:
        return bool(self.predicate(value))

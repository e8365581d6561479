# src/sheetmap/core/config/hashing.py
"""
Hashing canônico das opções de mapeamento.

O hash representa a identidade estrutural de um `MappingOptions` já
construído e permite comparar configurações produzidas por canais
diferentes (declarações, builder fluente, documento de opções).

Política de hashing (v1):
    - Entrada: snapshot serializável (`MappingOptions.to_dict()`)
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256

Limites explícitos:
    - Funções (predicados, mapeamentos customizados, callbacks) participam
      apenas pelo nome/mensagem registrado no snapshot
"""


import json
import hashlib
from typing import Dict, Any


def compute_options_hash(snapshot: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um snapshot de opções.

    Args:
        snapshot (Dict[str, Any]): Snapshot serializável das opções.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(snapshot, dict):
        raise TypeError(
            f"Snapshot para hashing deve ser dict, recebido: {type(snapshot).__name__}"
        )

    canonical_json = json.dumps(
        snapshot,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

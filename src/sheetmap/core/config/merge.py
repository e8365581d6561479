# src/sheetmap/core/config/merge.py
"""
Deep-merge de documentos de opções.

Um documento de opções pode ser dividido em uma base compartilhada
(defaults) e um documento local que ajusta apenas alguns campos.
Este módulo resolve o documento efetivo a partir dos dois.

Política de merge (v1):
    - dict → merge recursivo por chave (ex.: `properties.<campo>`)
    - list → sobrescrita total (ex.: `map_from_columns`, `should_be_one_of`)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída
    - Conflitos estruturais interrompem o merge

Limites explícitos:
    - Não carrega arquivos
    - Não interpreta declarações (isso é papel de `options.document`)
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _same_kind(base_value: Any, override_value: Any) -> bool:
    # int e float são intercambiáveis em limites numéricos (ex.: 0 vs 0.5)
    numeric = (int, float)
    if isinstance(base_value, bool) or isinstance(override_value, bool):
        return type(base_value) is type(override_value)
    if isinstance(base_value, numeric) and isinstance(override_value, numeric):
        return True
    return type(base_value) is type(override_value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois documentos de opções.

    Args:
        base (Dict[str, Any]): Documento base (defaults).
        override (Dict[str, Any]): Ajustes locais.

    Returns:
        Dict[str, Any]: Novo documento resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result or result[key] is None:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # None no override desliga explicitamente a chave herdada
        if override_value is not None and not _same_kind(base_value, override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result

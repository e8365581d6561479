# src/sheetmap/core/validation/factory.py
"""
Fábrica de validadores de célula.

Cada função retorna um `CellValidator` novo, sem estado compartilhado
entre chamadas.

Política numérica (v1):
    - o valor é convertido com `pandas.to_numeric(errors="coerce")`
    - valores ausentes (None / NaN) são aceitos: presença é verificada
      pela regra de campo obrigatório, não pelos limites
    - valores não numéricos falham, inclusive coleções (listas de
      `map_from_columns`), independentemente do tamanho

Política de pertinência (v1):
    - igualdade de valor (`==`), na ordem declarada
    - aceita qualquer iterável, tipado ou não (declarações entregam
      tuplas sem tipo)
"""

from __future__ import annotations

from typing import Any, Iterable

import pandas as pd

from .validator import CellValidator


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    # coleções (ex.: campos de `map_from_columns`) nunca são ausentes
    if not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if not pd.api.types.is_scalar(value):
        return None
    try:
        number = pd.to_numeric(value, errors="coerce")
        if _is_missing(number):
            return None
        return float(number)
    except (TypeError, ValueError):
        return None


def create_less_than(max_value: float) -> CellValidator:
    def predicate(value: Any) -> bool:
        if _is_missing(value):
            return True
        number = _as_number(value)
        return number is not None and number < max_value

    return CellValidator(message=f"should be less than {max_value}", predicate=predicate)


def create_greater_than(min_value: float) -> CellValidator:
    def predicate(value: Any) -> bool:
        if _is_missing(value):
            return True
        number = _as_number(value)
        return number is not None and number > min_value

    return CellValidator(message=f"should be greater than {min_value}", predicate=predicate)


def create_should_be_one_of(allowed_values: Iterable[Any]) -> CellValidator:
    """
    Cria um validador de pertinência.

    `allowed_values` é materializado em tupla na criação, de modo que
    geradores e coleções mutáveis do chamador não afetam o validador.
    """
    allowed = tuple(allowed_values)

    def predicate(value: Any) -> bool:
        return any(value == candidate for candidate in allowed)

    rendered = ", ".join(repr(v) for v in allowed)
    return CellValidator(message=f"should be one of [{rendered}]", predicate=predicate)

# tests/core/validation/test_validator_factory.py
"""
Testes da fábrica de validadores de célula.

Os testes asseguram que:
- limites numéricos aceitam valores ausentes (None / NaN)
- valores não numéricos falham nos limites
- strings numéricas são convertidas antes da comparação
- `should_be_one_of` materializa o iterável na criação

Limites explícitos:
    - Não valida o registro dos validadores nas opções
"""

import math
from dataclasses import FrozenInstanceError

import pytest

try:
    import pandas as pd

    from sheetmap.core.validation import (
        CellValidator,
        create_greater_than,
        create_less_than,
        create_should_be_one_of,
    )
except Exception as e:  # noqa: BLE001
    CellValidator = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing validation modules. Implement:\n"
            "- src/sheetmap/core/validation/validator.py (CellValidator)\n"
            "- src/sheetmap/core/validation/factory.py (create_*)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_less_than_is_strict():
    _require_imports()
    rule = create_less_than(10)
    assert rule.message == "should be less than 10"
    assert rule.is_valid(9.99)
    assert not rule.is_valid(10)
    assert not rule.is_valid(11)


def test_greater_than_is_strict():
    _require_imports()
    rule = create_greater_than(0)
    assert rule.message == "should be greater than 0"
    assert rule.is_valid(1)
    assert not rule.is_valid(0)


@pytest.mark.parametrize("missing", [None, float("nan"), math.nan])
def test_missing_values_pass_numeric_bounds(missing):
    """
    Verifica que ausência não é falha de limite: a presença é papel da
    regra de campo obrigatório.
    """
    _require_imports()
    assert create_less_than(5).is_valid(missing)
    assert create_greater_than(5).is_valid(missing)


def test_pandas_missing_marker_passes():
    _require_imports()
    assert create_greater_than(0).is_valid(pd.NA)


def test_numeric_strings_are_coerced():
    _require_imports()
    assert create_less_than(100).is_valid("42")
    assert not create_less_than(100).is_valid("420")


@pytest.mark.parametrize("value", ["abc", [1, 2], {"a": 1}])
def test_non_numeric_values_fail_bounds(value):
    _require_imports()
    assert not create_less_than(100).is_valid(value)
    assert not create_greater_than(-100).is_valid(value)


def test_should_be_one_of_materializes_generator():
    """
    Verifica que o iterável é consumido uma única vez, na criação, e que
    o validador continua funcionando em chamadas sucessivas.
    """
    _require_imports()
    rule = create_should_be_one_of(x for x in ("a", "b"))
    assert rule.is_valid("a")
    assert rule.is_valid("b")
    assert rule.is_valid("a")
    assert not rule.is_valid("c")
    assert rule.message == "should be one of ['a', 'b']"


def test_should_be_one_of_ignores_later_caller_mutation():
    _require_imports()
    allowed = [1, 2]
    rule = create_should_be_one_of(allowed)
    allowed.append(3)
    assert not rule.is_valid(3)


def test_should_be_one_of_uses_equality():
    _require_imports()
    rule = create_should_be_one_of([1, 2])
    assert rule.is_valid(1.0)
    assert not rule.is_valid("1")


def test_cell_validator_is_immutable():
    _require_imports()
    rule = CellValidator(message="m", predicate=bool)
    with pytest.raises(FrozenInstanceError):
        rule.message = "other"


@pytest.mark.parametrize("value", [[None], [5], [float("nan")]])
def test_single_element_collections_are_not_missing(value):
    """
    Verifica que coleções de um elemento são tratadas como as demais
    coleções: nunca ausentes, sempre reprovadas pelos limites.
    """
    _require_imports()
    assert not create_less_than(100).is_valid(value)
    assert not create_greater_than(-100).is_valid(value)

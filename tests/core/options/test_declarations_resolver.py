# tests/core/options/test_declarations_resolver.py
"""
Testes do replay de declarações.

Declarações no tipo (decorator `@sheet`, `Annotated[...]` e
`field(metadata=...)`) são reproduzidas sobre a mesma superfície de
mutação do builder fluente. Os testes asseguram que:
- cada kind de classe e de campo chega à coleção correta
- o resultado de declarações e de chamadas fluentes equivalentes é idêntico
- declarações rodam depois das chamadas fluentes
- declarações no nível errado são rejeitadas

Limites explícitos:
    - Não valida documentos de opções (ver test_options_document.py)
"""

from dataclasses import dataclass
from typing import Annotated

import pytest

try:
    from sheetmap.core.config.errors import ConfigError, UnknownDeclarationError
    from sheetmap.core.options import declarations as d
    from sheetmap.core.options.builder import OptionsBuilder
    from sheetmap.core.options.declarations import (
        DeclarationKind,
        class_declarations,
        declared_properties,
        field_declarations,
    )
    from sheetmap.core.options.types import BlankRowBehaviour, ExceptionHandlingBehaviour
    from tests.fixtures.targets import DerivedRow, Order, Product, Reading
except Exception as e:  # noqa: BLE001
    OptionsBuilder = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing declarations/resolver modules. Implement:\n"
            "- src/sheetmap/core/options/declarations.py (Declaration, sheet)\n"
            "- src/sheetmap/core/options/resolver.py (resolve_declarations)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_declared_properties_skip_classvars():
    _require_imports()
    assert declared_properties(Order) == [
        "row", "order_id", "customer", "amount", "status", "tags", "notes", "region",
    ]
    assert declared_properties(Reading) == ["sensor", "value", "unit"]


def test_field_declarations_collect_annotated_and_metadata():
    _require_imports()
    found = field_declarations(Order)
    assert [x.kind for x in found["order_id"]] == [
        DeclarationKind.USES_COLUMN_LETTER,
        DeclarationKind.REQUIRED,
        DeclarationKind.UNIQUE,
    ]
    assert [x.kind for x in found["region"]] == [DeclarationKind.OPTIONAL]
    assert found["tags"][0].args == ("Tag 1", "Tag 2", "Tag 3")


def test_class_declarations_follow_mro_and_stacking_order():
    _require_imports()
    kinds = [x.kind for x in class_declarations(DerivedRow)]
    assert kinds == [
        DeclarationKind.STARTING_FROM_ROW,
        DeclarationKind.HEADER_ON_ROW,
        DeclarationKind.USING_HEADER_NAMES,
    ]


def test_order_declarations_replayed(order_builder):
    """
    Verifica que todas as declarações de `Order` chegam às coleções e
    escalares corretos de `MappingOptions` após o build.
    """
    _require_imports()
    options = order_builder.build()

    assert options.start_row == 3
    assert options.header_row == 2
    assert options.worksheet_name == "Orders" and options.worksheet_number is None
    assert options.exception_handling_behaviour is ExceptionHandlingBehaviour.AGGREGATE_EXCEPTIONS
    assert options.exception_list == []
    assert options.blank_row_behaviour is BlankRowBehaviour.IGNORE
    assert options.relaxed_number_matching is True

    assert options.row_number_property == "row"
    assert options.custom_header_numbers == {"order_id": 1, "amount": 3}
    assert options.custom_header_names == {"customer": "Customer Name"}
    assert options.collection_configurations["tags"].column_names == ("Tag 1", "Tag 2", "Tag 3")
    assert options.unmapped_properties == frozenset({"notes"})

    assert "order_id" in options.required_fields
    assert "order_id" in options.unique_properties
    assert "order_id" not in options.optional_properties
    assert "region" in options.optional_properties

    amount_rules = options.validations["amount"]
    assert [r.message for r in amount_rules] == ["should be greater than 0.0", "should be less than 10000.0"]
    status_rule = options.validations["status"][0]
    assert status_rule.is_valid("open") and not status_rule.is_valid("pending")


def test_every_declared_field_has_validations_entry(order_builder):
    _require_imports()
    options = order_builder.build()
    assert set(options.validations) == set(declared_properties(Order))


def test_plain_class_declarations():
    _require_imports()
    options = OptionsBuilder(Reading).build()
    assert options.custom_header_numbers == {"sensor": 0}
    rules = options.validations["value"]
    assert rules[0].is_valid(20) and not rules[0].is_valid(-50)
    assert rules[1].is_valid(20) and not rules[1].is_valid(200)
    assert options.optional_properties == frozenset({"sensor", "value", "unit"})


def test_inherited_class_declarations():
    _require_imports()
    options = OptionsBuilder(DerivedRow).build()
    assert options.start_row == 2
    assert options.header_row == 1
    assert options.use_header_names is False
    assert options.properties == ("key", "extra")
    assert "extra" not in options.optional_properties


def test_declarations_equal_fluent_configuration():
    """
    Verifica que declarações e chamadas fluentes equivalentes produzem
    opções estruturalmente idênticas (mesmo snapshot, mesmo hash).
    """
    _require_imports()

    declared = OptionsBuilder(Order).build()

    @dataclass
    class FluentOrder:
        row: int
        order_id: str
        customer: str
        amount: float
        status: str
        tags: list
        notes: str
        region: str = ""

    fluent = (
        OptionsBuilder(FluentOrder)
        .starting_from_row(3)
        .header_on_row(2)
        .using_sheet("Orders")
        .aggregate_exceptions()
        .blank_row_behaviour(BlankRowBehaviour.IGNORE)
        .relaxed_number_matching(True)
        .property("row").maps_to_row_number()
        .property("order_id").uses_column_letter("B")
        .property("order_id").is_required()
        .property("order_id").should_be_unique()
        .property("customer").uses_column_named("Customer Name")
        .property("amount").uses_column_number(4)
        .property("amount").should_be_greater_than(0)
        .property("amount").should_be_less_than(10000)
        .property("status").should_be_one_of("open", "closed")
        .property("tags").map_from_columns("Tag 1", "Tag 2", "Tag 3")
        .property("notes").ignore()
        .property("region").optional()
        .build()
    )

    left = declared.to_dict()
    right = fluent.to_dict()
    left.pop("target")
    right.pop("target")
    assert left == right


def test_declarations_run_after_fluent_calls(order_builder):
    """
    Verifica a ordem de replay: declarações rodam no build, depois das
    chamadas fluentes, então sobrescrevem estratégias de coluna e
    escalares, mas acumulam validadores.
    """
    _require_imports()
    order_builder.starting_from_row(10)
    order_builder.property("customer").uses_column_number(9)
    order_builder.property("amount").should_be_greater_than(-5)
    options = order_builder.build()

    assert options.start_row == 3
    assert options.custom_header_names["customer"] == "Customer Name"
    assert "customer" not in options.custom_header_numbers
    assert "customer" in order_builder.warnings
    assert len(options.validations["amount"]) == 3


def test_sheet_rejects_field_level_declarations():
    _require_imports()
    with pytest.raises(UnknownDeclarationError):
        d.sheet(d.required())


def test_field_rejects_class_level_declarations():
    _require_imports()

    @dataclass
    class Broken:
        name: Annotated[str, d.starting_from_row(2)]

    with pytest.raises(UnknownDeclarationError):
        OptionsBuilder(Broken).build()


def test_product_without_declarations_builds_defaults(product_builder):
    _require_imports()
    options = product_builder.build()
    assert options.custom_header_numbers == {}
    assert options.properties == ("sku", "name", "price", "quantity", "category")
    assert Product.__name__ in options.to_dict()["target"]


def test_integer_bounds_equal_across_channels():
    """
    Verifica que o mesmo limite inteiro, declarado ou fluente, produz o
    mesmo snapshot de validações e o mesmo fingerprint.
    """
    _require_imports()

    @dataclass
    class DeclaredBounds:
        score: Annotated[float, d.should_be_greater_than(0), d.should_be_less_than(100)]

    @dataclass
    class FluentBounds:
        score: float

    declared = OptionsBuilder(DeclaredBounds).build()
    fluent = (
        OptionsBuilder(FluentBounds)
        .property("score").should_be_greater_than(0)
        .property("score").should_be_less_than(100)
        .build()
    )
    left = declared.to_dict()
    right = fluent.to_dict()
    assert left["validations"] == right["validations"]
    assert left["validations"]["score"] == ["should be greater than 0.0", "should be less than 100.0"]
    left.pop("target")
    right.pop("target")
    assert left == right


@pytest.mark.parametrize(
    "make_declaration",
    [
        lambda: d.starting_from_row("x"),
        lambda: d.header_on_row(1.5),
        lambda: d.ending_with_row(None),
        lambda: d.using_sheet(1.5),
        lambda: d.blank_row_behaviour("explode"),
    ],
)
def test_invalid_class_declaration_values_raise_config_error(make_declaration):
    _require_imports()

    @d.sheet(make_declaration())
    @dataclass
    class Target:
        code: str

    with pytest.raises(ConfigError):
        OptionsBuilder(Target).build()


def test_invalid_field_bound_declaration_raises_config_error():
    _require_imports()

    @dataclass
    class Target:
        amount: Annotated[float, d.should_be_less_than("abc")]

    with pytest.raises(ConfigError):
        OptionsBuilder(Target).build()

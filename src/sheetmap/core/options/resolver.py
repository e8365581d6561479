# src/sheetmap/core/options/resolver.py
"""
Resolver de declarações.

Reproduz declarações (`options.declarations.Declaration`) sobre o mesmo
`MappingOptions` manipulado pelo builder fluente, usando as mesmas
funções de mutação. Não existe representação paralela de "config por
declaração": depois do replay, uma regra declarada e uma regra fluente
são indistinguíveis.

Ordem de replay:
    1. declarações de classe (bases → classe concreta)
    2. declarações de campo, campo a campo em ordem de declaração

`should_be_one_of` recebe os valores como tupla sem tipo; é o único
caminho não tipado e vai direto para a fábrica de validadores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..config.errors import UnknownDeclarationError
from . import property_configuration as pc
from .declarations import (
    Declaration,
    DeclarationKind,
    class_declarations,
    field_declarations,
)

if TYPE_CHECKING:  # pragma: no cover
    from .builder import OptionsBuilder


def apply_class_declaration(builder: "OptionsBuilder", declaration: Declaration) -> None:
    kind, args = declaration.kind, declaration.args

    if kind is DeclarationKind.ALL_PROPERTIES_MUST_BE_MAPPED_TO_COLUMNS:
        builder.all_properties_must_be_mapped_to_columns(bool(args[0]))
    elif kind is DeclarationKind.ALL_COLUMNS_MUST_BE_MAPPED_TO_PROPERTIES:
        builder.all_columns_must_be_mapped_to_properties(bool(args[0]))
    elif kind is DeclarationKind.USING_HEADER_NAMES:
        builder.using_header_names(bool(args[0]))
    elif kind is DeclarationKind.STARTING_FROM_ROW:
        builder.starting_from_row(args[0])
    elif kind is DeclarationKind.USING_SHEET:
        builder.using_sheet(args[0])
    elif kind is DeclarationKind.HEADER_ON_ROW:
        builder.header_on_row(args[0])
    elif kind is DeclarationKind.ENDING_WITH_ROW:
        builder.ending_with_row(args[0])
    elif kind is DeclarationKind.AGGREGATE_EXCEPTIONS:
        builder.aggregate_exceptions()
    elif kind is DeclarationKind.WITH_BLANK_ROW_BEHAVIOUR:
        builder.blank_row_behaviour(args[0])
    elif kind is DeclarationKind.RELAXED_NUMBER_MATCHING:
        builder.relaxed_number_matching(bool(args[0]))
    else:
        raise UnknownDeclarationError(f"Not a class-level declaration: {declaration!r}")


def apply_field_declaration(
    builder: "OptionsBuilder",
    property_name: str,
    declaration: Declaration,
) -> None:
    options, log = builder._options, builder._log
    kind, args = declaration.kind, declaration.args

    # mesma garantia do construtor de PropertyConfiguration
    options.ensure_mutable()
    options.validations.setdefault(property_name, [])

    if kind is DeclarationKind.USES_COLUMN_NUMBER:
        pc.uses_column_number(args[0], property_name, options, log)
    elif kind is DeclarationKind.USES_COLUMN_LETTER:
        pc.uses_column_letter(args[0], property_name, options, log)
    elif kind is DeclarationKind.OPTIONAL:
        pc.optional(bool(args[0]) if args else True, property_name, options)
    elif kind is DeclarationKind.MAP_FROM_COLUMNS:
        pc.map_from_columns(args, property_name, options, log)
    elif kind is DeclarationKind.USES_COLUMN_NAMED:
        pc.uses_column_named(args[0], property_name, options, log)
    elif kind is DeclarationKind.IGNORE:
        pc.ignore(property_name, options, log)
    elif kind is DeclarationKind.MAPS_TO_ROW_NUMBER:
        pc.maps_to_row_number(property_name, options, log)
    elif kind is DeclarationKind.SHOULD_BE_LESS_THAN:
        pc.should_be_less_than(args[0], property_name, options)
    elif kind is DeclarationKind.SHOULD_BE_GREATER_THAN:
        pc.should_be_greater_than(args[0], property_name, options)
    elif kind is DeclarationKind.REQUIRED:
        pc.required(property_name, options)
    elif kind is DeclarationKind.SHOULD_BE_ONE_OF:
        pc.should_be_one_of(args, property_name, options)
    elif kind is DeclarationKind.UNIQUE:
        pc.unique(property_name, options)
    else:
        raise UnknownDeclarationError(
            f"Not a field-level declaration for '{property_name}': {declaration!r}"
        )


def apply_declarations(
    builder: "OptionsBuilder",
    class_level: Iterable[Declaration],
    field_level: "dict[str, Iterable[Declaration]]",
    *,
    source: str,
) -> int:
    """Aplica declarações já enumeradas; retorna quantas foram aplicadas."""
    applied = 0
    for declaration in class_level:
        apply_class_declaration(builder, declaration)
        applied += 1

    for property_name, declarations in field_level.items():
        for declaration in declarations:
            apply_field_declaration(builder, property_name, declaration)
            applied += 1

    builder._log.log(level="INFO", message=f"{source} declarations applied", count=applied)
    return applied


def resolve_declarations(builder: "OptionsBuilder") -> int:
    """Reproduz as declarações do tipo alvo do builder."""
    target = builder.target
    return apply_declarations(
        builder,
        class_declarations(target),
        field_declarations(target),
        source="type",
    )

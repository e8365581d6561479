# src/sheetmap/core/options/declarations.py
"""
Metadados declarados no tipo alvo.

Declarações são variantes rotuladas: um `kind` e uma tupla ordenada de
argumentos sem tipo. Elas não configuram nada sozinhas; o resolver
(`options.resolver`) as reproduz sobre a mesma superfície de mutação
usada pelo builder fluente.

Onde declarar:
    - nível de classe: decorator `@sheet(...)`

          @sheet(starting_from_row(2), using_sheet("Vendas"))
          @dataclass
          class Venda: ...

    - nível de campo: extras de `typing.Annotated`

          preco: Annotated[float, uses_column_letter("C"), should_be_greater_than(0)]

      ou metadata de `dataclasses.field`:

          preco: float = field(metadata={"sheetmap": [required()]})

Invariantes:
    - Declarações são imutáveis
    - Declarações de classe e de campo não se misturam (`sheet()` rejeita
      declarações de campo)
    - A ordem de declaração é preservada

Limites explícitos:
    - Não aplica nada em `MappingOptions`
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple, Union

from ..config.errors import UnknownDeclarationError
from .types import BlankRowBehaviour


METADATA_KEY = "sheetmap"
_CLASS_ATTRIBUTE = "__sheetmap_declarations__"


class DeclarationKind(str, Enum):
    # nível de classe
    ALL_PROPERTIES_MUST_BE_MAPPED_TO_COLUMNS = "all_properties_must_be_mapped_to_columns"
    ALL_COLUMNS_MUST_BE_MAPPED_TO_PROPERTIES = "all_columns_must_be_mapped_to_properties"
    USING_HEADER_NAMES = "using_header_names"
    STARTING_FROM_ROW = "starting_from_row"
    USING_SHEET = "using_sheet"
    HEADER_ON_ROW = "header_on_row"
    ENDING_WITH_ROW = "ending_with_row"
    AGGREGATE_EXCEPTIONS = "aggregate_exceptions"
    WITH_BLANK_ROW_BEHAVIOUR = "blank_row_behaviour"
    RELAXED_NUMBER_MATCHING = "relaxed_number_matching"

    # nível de campo
    USES_COLUMN_NUMBER = "uses_column_number"
    USES_COLUMN_LETTER = "uses_column_letter"
    OPTIONAL = "optional"
    MAP_FROM_COLUMNS = "map_from_columns"
    USES_COLUMN_NAMED = "uses_column_named"
    IGNORE = "ignore"
    MAPS_TO_ROW_NUMBER = "maps_to_row_number"
    SHOULD_BE_LESS_THAN = "should_be_less_than"
    SHOULD_BE_GREATER_THAN = "should_be_greater_than"
    REQUIRED = "required"
    SHOULD_BE_ONE_OF = "should_be_one_of"
    UNIQUE = "unique"


CLASS_LEVEL_KINDS = frozenset(
    {
        DeclarationKind.ALL_PROPERTIES_MUST_BE_MAPPED_TO_COLUMNS,
        DeclarationKind.ALL_COLUMNS_MUST_BE_MAPPED_TO_PROPERTIES,
        DeclarationKind.USING_HEADER_NAMES,
        DeclarationKind.STARTING_FROM_ROW,
        DeclarationKind.USING_SHEET,
        DeclarationKind.HEADER_ON_ROW,
        DeclarationKind.ENDING_WITH_ROW,
        DeclarationKind.AGGREGATE_EXCEPTIONS,
        DeclarationKind.WITH_BLANK_ROW_BEHAVIOUR,
        DeclarationKind.RELAXED_NUMBER_MATCHING,
    }
)

FIELD_LEVEL_KINDS = frozenset(set(DeclarationKind) - CLASS_LEVEL_KINDS)


@dataclass(frozen=True)
class Declaration:
    """Declaração rotulada: `kind` + argumentos posicionais sem tipo."""
    kind: DeclarationKind
    args: Tuple[Any, ...] = ()

    @property
    def is_class_level(self) -> bool:
        return self.kind in CLASS_LEVEL_KINDS


# ---------------------------------------------------------------------------
# Construtores: nível de classe
# ---------------------------------------------------------------------------

def all_properties_must_be_mapped_to_columns(value: bool = True) -> Declaration:
    return Declaration(DeclarationKind.ALL_PROPERTIES_MUST_BE_MAPPED_TO_COLUMNS, (value,))


def all_columns_must_be_mapped_to_properties(value: bool = True) -> Declaration:
    return Declaration(DeclarationKind.ALL_COLUMNS_MUST_BE_MAPPED_TO_PROPERTIES, (value,))


def using_header_names(value: bool = True) -> Declaration:
    return Declaration(DeclarationKind.USING_HEADER_NAMES, (value,))


def starting_from_row(row: int) -> Declaration:
    return Declaration(DeclarationKind.STARTING_FROM_ROW, (row,))


def using_sheet(sheet: Union[int, str]) -> Declaration:
    return Declaration(DeclarationKind.USING_SHEET, (sheet,))


def header_on_row(row: int) -> Declaration:
    return Declaration(DeclarationKind.HEADER_ON_ROW, (row,))


def ending_with_row(row: int) -> Declaration:
    return Declaration(DeclarationKind.ENDING_WITH_ROW, (row,))


def aggregate_exceptions() -> Declaration:
    return Declaration(DeclarationKind.AGGREGATE_EXCEPTIONS)


def blank_row_behaviour(behaviour: BlankRowBehaviour) -> Declaration:
    return Declaration(DeclarationKind.WITH_BLANK_ROW_BEHAVIOUR, (behaviour,))


def relaxed_number_matching(value: bool = True) -> Declaration:
    return Declaration(DeclarationKind.RELAXED_NUMBER_MATCHING, (value,))


# ---------------------------------------------------------------------------
# Construtores: nível de campo
# ---------------------------------------------------------------------------

def uses_column_number(column_number: int) -> Declaration:
    return Declaration(DeclarationKind.USES_COLUMN_NUMBER, (column_number,))


def uses_column_letter(column_letter: str) -> Declaration:
    return Declaration(DeclarationKind.USES_COLUMN_LETTER, (column_letter,))


def uses_column_named(column_name: str) -> Declaration:
    return Declaration(DeclarationKind.USES_COLUMN_NAMED, (column_name,))


def map_from_columns(*column_names: str) -> Declaration:
    return Declaration(DeclarationKind.MAP_FROM_COLUMNS, tuple(column_names))


def optional(value: bool = True) -> Declaration:
    return Declaration(DeclarationKind.OPTIONAL, (value,))


def ignore() -> Declaration:
    return Declaration(DeclarationKind.IGNORE)


def maps_to_row_number() -> Declaration:
    return Declaration(DeclarationKind.MAPS_TO_ROW_NUMBER)


def should_be_less_than(max_value: float) -> Declaration:
    return Declaration(DeclarationKind.SHOULD_BE_LESS_THAN, (max_value,))


def should_be_greater_than(min_value: float) -> Declaration:
    return Declaration(DeclarationKind.SHOULD_BE_GREATER_THAN, (min_value,))


def required() -> Declaration:
    return Declaration(DeclarationKind.REQUIRED)


def should_be_one_of(*allowed_values: Any) -> Declaration:
    return Declaration(DeclarationKind.SHOULD_BE_ONE_OF, tuple(allowed_values))


def unique() -> Declaration:
    return Declaration(DeclarationKind.UNIQUE)


# ---------------------------------------------------------------------------
# Anexar / enumerar declarações
# ---------------------------------------------------------------------------

def sheet(*declarations: Declaration) -> Callable[[type], type]:
    """
    Decorator de classe que anexa declarações de nível de classe.

    Decorators empilhados preservam a ordem de leitura (de cima para baixo).

    Raises:
        UnknownDeclarationError: se alguma declaração não for de classe.
    """
    for declaration in declarations:
        if not isinstance(declaration, Declaration) or not declaration.is_class_level:
            raise UnknownDeclarationError(
                f"@sheet accepts class-level declarations only, got {declaration!r}"
            )

    def decorate(cls: type) -> type:
        own = cls.__dict__.get(_CLASS_ATTRIBUTE, ())
        setattr(cls, _CLASS_ATTRIBUTE, tuple(declarations) + tuple(own))
        return cls

    return decorate


def class_declarations(target: type) -> List[Declaration]:
    """Declarações de classe, das bases para a classe concreta."""
    collected: List[Declaration] = []
    for klass in reversed(target.__mro__):
        collected.extend(klass.__dict__.get(_CLASS_ATTRIBUTE, ()))
    return collected


def _type_hints(target: type) -> Dict[str, Any]:
    return typing.get_type_hints(target, include_extras=True)


def declared_properties(target: type) -> List[str]:
    """
    Campos declarados do tipo alvo, em ordem de declaração.

    Dataclasses usam `dataclasses.fields`; demais classes usam as
    anotações de tipo (excluindo `ClassVar`).
    """
    if dataclasses.is_dataclass(target):
        return [f.name for f in dataclasses.fields(target)]

    names: List[str] = []
    for name, hint in _type_hints(target).items():
        if typing.get_origin(hint) is typing.ClassVar:
            continue
        if name.startswith("__"):
            continue
        names.append(name)
    return names


def field_declarations(target: type) -> Dict[str, List[Declaration]]:
    """
    Declarações de campo por propriedade, em ordem de declaração.

    Para cada campo: extras de `Annotated` primeiro, depois
    `field(metadata={"sheetmap": [...]})`.
    """
    hints = _type_hints(target)
    dataclass_fields = (
        {f.name: f for f in dataclasses.fields(target)} if dataclasses.is_dataclass(target) else {}
    )

    result: Dict[str, List[Declaration]] = {}
    for name in declared_properties(target):
        found: List[Declaration] = []

        hint = hints.get(name)
        if hint is not None and typing.get_origin(hint) is typing.Annotated:
            found.extend(m for m in hint.__metadata__ if isinstance(m, Declaration))

        f = dataclass_fields.get(name)
        if f is not None:
            declared = f.metadata.get(METADATA_KEY, ())
            if isinstance(declared, Declaration):
                declared = (declared,)
            found.extend(declared)

        for declaration in found:
            if not isinstance(declaration, Declaration) or declaration.is_class_level:
                raise UnknownDeclarationError(
                    f"'{target.__name__}.{name}' accepts field-level declarations only, "
                    f"got {declaration!r}"
                )

        result[name] = found
    return result

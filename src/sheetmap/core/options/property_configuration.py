# src/sheetmap/core/options/property_configuration.py
"""
Superfície de mutação por campo.

Este módulo concentra as **únicas** funções que alteram as coleções por
campo de um `MappingOptions`. Todos os canais de configuração passam por
elas:
    - builder fluente (`PropertyConfiguration`, abaixo)
    - replay de declarações (`options.resolver`)
    - documentos de opções (`options.document`, via resolver)

Assim, uma regra aplicada por declaração é indistinguível da mesma regra
aplicada pelo builder.

Decisões:
    - Erros de configuração são levantados no ponto de chamada
    - Estratégias de coluna são exclusivas: a última escrita vence, a
      anterior é removida e a troca é registrada como warning
    - `maps_to_row_number` conta como estratégia de coluna
    - Limites numéricos são validados e normalizados para `float` aqui,
      então todos os canais produzem o mesmo validador
    - `optional(True/False)` é um toggle simétrico entre
      `optional_properties` e `explicitly_required_properties`
    - `required` também registra obrigatoriedade explícita, para que o
      default de opcionalidade nunca a sobrescreva

Limites explícitos:
    - Não executa validadores
    - Não resolve colunas contra um cabeçalho real
"""

from __future__ import annotations

import numbers
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional

from ..config.errors import ConfigError, InvalidColumnNumberError
from ..validation.factory import (
    create_greater_than,
    create_less_than,
    create_should_be_one_of,
)
from ..validation.validator import CellValidator
from .columns import column_letter_to_number, column_number_to_letter
from .log import OptionsLog
from .options import MappingOptions
from .types import CollectionConfiguration

if TYPE_CHECKING:  # pragma: no cover
    from .builder import OptionsBuilder


_COLLECTION_TYPES = (list, tuple, set, frozenset)


# ---------------------------------------------------------------------------
# Helpers internos
# ---------------------------------------------------------------------------

def _describe_strategy(options: MappingOptions, property_name: str) -> Optional[str]:
    if options.row_number_property == property_name:
        return "row number"
    if property_name in options.custom_header_numbers:
        index = options.custom_header_numbers[property_name]
        return f"column {column_number_to_letter(index + 1)} (index {index})"
    if property_name in options.custom_header_names:
        return f"column named {options.custom_header_names[property_name]!r}"
    if property_name in options.collection_configurations:
        names = list(options.collection_configurations[property_name].column_names)
        return f"columns {names}"
    if property_name in options.unmapped_properties:
        return "ignored"
    return None


def _clear_strategy(options: MappingOptions, property_name: str) -> None:
    if options.row_number_property == property_name:
        options.row_number_property = None
    options.custom_header_numbers.pop(property_name, None)
    options.custom_header_names.pop(property_name, None)
    options.collection_configurations.pop(property_name, None)
    options.unmapped_properties.discard(property_name)


def _set_strategy(
    options: MappingOptions,
    property_name: str,
    apply: Callable[[], None],
    log: Optional[OptionsLog],
) -> None:
    options.ensure_mutable()
    previous = _describe_strategy(options, property_name)
    _clear_strategy(options, property_name)
    apply()
    current = _describe_strategy(options, property_name)
    if log is not None and previous is not None and previous != current:
        log.add_warning(
            property_name=property_name,
            message=f"'{property_name}': {previous} replaced by {current}",
        )


def _validators(options: MappingOptions, property_name: str) -> List[CellValidator]:
    options.ensure_mutable()
    return options.validations.setdefault(property_name, [])


def _require_bound(value: Any, what: str, property_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigError(
            f"{what} for '{property_name}' expects a number, got {value!r}"
        )
    return float(value)


def _collect(values: tuple) -> tuple:
    # f(1, 2, 3) e f([1, 2, 3]) são equivalentes
    if len(values) == 1 and isinstance(values[0], _COLLECTION_TYPES):
        return tuple(values[0])
    return values


# ---------------------------------------------------------------------------
# Estratégias de coluna
# ---------------------------------------------------------------------------

def uses_column_number(
    column_number: int,
    property_name: str,
    options: MappingOptions,
    log: Optional[OptionsLog] = None,
) -> None:
    if isinstance(column_number, bool) or not isinstance(column_number, int):
        raise InvalidColumnNumberError(
            f"Unable to map '{property_name}' to column {column_number!r}. "
            "uses_column_number expects an integer"
        )
    if column_number < 1:
        raise InvalidColumnNumberError(
            f"Unable to map '{property_name}' to column {column_number}. "
            "uses_column_number expects a 1-based column number"
        )

    def apply() -> None:
        options.custom_header_numbers[property_name] = column_number - 1

    _set_strategy(options, property_name, apply, log)


def uses_column_letter(
    column_letter: str,
    property_name: str,
    options: MappingOptions,
    log: Optional[OptionsLog] = None,
) -> None:
    uses_column_number(column_letter_to_number(column_letter), property_name, options, log)


def uses_column_named(
    column_name: str,
    property_name: str,
    options: MappingOptions,
    log: Optional[OptionsLog] = None,
) -> None:
    if not isinstance(column_name, str) or not column_name.strip():
        raise ConfigError(f"Unable to map '{property_name}': column name must be a non-empty string")

    def apply() -> None:
        options.custom_header_names[property_name] = column_name

    _set_strategy(options, property_name, apply, log)


def map_from_columns(
    column_names: Iterable[str],
    property_name: str,
    options: MappingOptions,
    log: Optional[OptionsLog] = None,
) -> None:
    names = tuple(str(name) for name in column_names)
    if not names:
        raise ConfigError(f"Unable to map '{property_name}': map_from_columns requires at least one column")

    def apply() -> None:
        options.collection_configurations[property_name] = CollectionConfiguration(
            property_name=property_name,
            column_names=names,
        )

    _set_strategy(options, property_name, apply, log)


def ignore(property_name: str, options: MappingOptions, log: Optional[OptionsLog] = None) -> None:
    _set_strategy(options, property_name, lambda: options.unmapped_properties.add(property_name), log)


def maps_to_row_number(
    property_name: str,
    options: MappingOptions,
    log: Optional[OptionsLog] = None,
) -> None:
    options.ensure_mutable()
    previous = options.row_number_property
    if log is not None and previous is not None and previous != property_name:
        log.add_warning(
            property_name=previous,
            message=f"row number moved from '{previous}' to '{property_name}'",
        )

    def apply() -> None:
        options.row_number_property = property_name

    _set_strategy(options, property_name, apply, log)


# ---------------------------------------------------------------------------
# Obrigatoriedade / unicidade
# ---------------------------------------------------------------------------

def optional(is_optional: bool, property_name: str, options: MappingOptions) -> None:
    options.ensure_mutable()
    if is_optional:
        options.optional_properties.add(property_name)
        options.explicitly_required_properties.discard(property_name)
    else:
        options.optional_properties.discard(property_name)
        options.explicitly_required_properties.add(property_name)


def required(property_name: str, options: MappingOptions) -> None:
    options.ensure_mutable()
    options.required_fields.add(property_name)
    optional(False, property_name, options)


def unique(property_name: str, options: MappingOptions) -> None:
    options.ensure_mutable()
    options.unique_properties.add(property_name)


# ---------------------------------------------------------------------------
# Validadores e mapeamentos
# ---------------------------------------------------------------------------

def should_be_less_than(max_value: float, property_name: str, options: MappingOptions) -> None:
    bound = _require_bound(max_value, "should_be_less_than", property_name)
    _validators(options, property_name).append(create_less_than(bound))


def should_be_greater_than(min_value: float, property_name: str, options: MappingOptions) -> None:
    bound = _require_bound(min_value, "should_be_greater_than", property_name)
    _validators(options, property_name).append(create_greater_than(bound))


def should_be_one_of(allowed_values: Iterable[Any], property_name: str, options: MappingOptions) -> None:
    _validators(options, property_name).append(create_should_be_one_of(allowed_values))


def uses_custom_validator(
    predicate: Callable[[Any], bool],
    message: str,
    property_name: str,
    options: MappingOptions,
) -> None:
    if not callable(predicate):
        raise ConfigError(f"Custom validator for '{property_name}' must be callable")
    _validators(options, property_name).append(CellValidator(message=message, predicate=predicate))


def uses_custom_mapping(
    mapping: Callable[[Any], Any],
    property_name: str,
    options: MappingOptions,
) -> None:
    options.ensure_mutable()
    if not callable(mapping):
        raise ConfigError(f"Custom mapping for '{property_name}' must be callable")
    options.custom_mappings[property_name] = mapping


# ---------------------------------------------------------------------------
# Superfície fluente
# ---------------------------------------------------------------------------

class PropertyConfiguration:
    """
    Configuração fluente de um único campo.

    Criada por `OptionsBuilder.property(name)`. Cada método delega para a
    função de módulo correspondente e devolve o builder, permitindo:

        builder.property("price").should_be_greater_than(0) \\
               .property("price").should_be_less_than(100)
    """

    def __init__(self, builder: "OptionsBuilder", property_name: str) -> None:
        self._builder = builder
        self._options = builder._options
        self._log = builder._log
        self._property_name = property_name
        _validators(self._options, property_name)

    @property
    def property_name(self) -> str:
        return self._property_name

    # column strategies
    def uses_column_number(self, column_number: int) -> "OptionsBuilder":
        uses_column_number(column_number, self._property_name, self._options, self._log)
        return self._builder

    def uses_column_letter(self, column_letter: str) -> "OptionsBuilder":
        uses_column_letter(column_letter, self._property_name, self._options, self._log)
        return self._builder

    def uses_column_named(self, column_name: str) -> "OptionsBuilder":
        uses_column_named(column_name, self._property_name, self._options, self._log)
        return self._builder

    def map_from_columns(self, *column_names: str) -> "OptionsBuilder":
        map_from_columns(_collect(column_names), self._property_name, self._options, self._log)
        return self._builder

    def ignore(self) -> "OptionsBuilder":
        ignore(self._property_name, self._options, self._log)
        return self._builder

    def maps_to_row_number(self) -> "OptionsBuilder":
        maps_to_row_number(self._property_name, self._options, self._log)
        return self._builder

    # requiredness
    def optional(self, is_optional: bool = True) -> "OptionsBuilder":
        optional(is_optional, self._property_name, self._options)
        return self._builder

    def is_required(self) -> "OptionsBuilder":
        required(self._property_name, self._options)
        return self._builder

    def should_be_unique(self) -> "OptionsBuilder":
        unique(self._property_name, self._options)
        return self._builder

    # validators
    def should_be_greater_than(self, min_value: float) -> "OptionsBuilder":
        should_be_greater_than(min_value, self._property_name, self._options)
        return self._builder

    def should_be_less_than(self, max_value: float) -> "OptionsBuilder":
        should_be_less_than(max_value, self._property_name, self._options)
        return self._builder

    def should_be_one_of(self, *allowed_values: Any) -> "OptionsBuilder":
        should_be_one_of(_collect(allowed_values), self._property_name, self._options)
        return self._builder

    def uses_custom_validator(self, predicate: Callable[[Any], bool], message: str) -> "OptionsBuilder":
        uses_custom_validator(predicate, message, self._property_name, self._options)
        return self._builder

    def uses_custom_mapping(self, mapping: Callable[[Any], Any]) -> "OptionsBuilder":
        uses_custom_mapping(mapping, self._property_name, self._options)
        return self._builder

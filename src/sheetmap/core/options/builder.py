# src/sheetmap/core/options/builder.py
"""
Builder de opções de mapeamento.

O `OptionsBuilder` é a raiz de orquestração: mantém o `MappingOptions`
em montagem, expõe a superfície fluente, reproduz as declarações do tipo
alvo e aplica o default de opcionalidade antes de congelar o resultado.

Estados:
    - aberto: chamadas fluentes, `property(...)` e documentos são aceitos
    - construído: terminal; qualquer mutação levanta `OptionsFrozenError`

`build()` executa, nesta ordem:
    1. replay das declarações do tipo (classe, depois campos)
    2. default de opcionalidade, em duas passadas fixas:
         a. todo campo declarado ausente de `optional_properties` é adicionado
         b. todo campo em `explicitly_required_properties` é removido
       A passada (b) roda sempre depois de (a), sobre um conjunto já
       finalizado, então obrigatoriedade explícita vence o default
       independentemente da ordem dos campos.
    3. `freeze()` e retorno

Um segundo `build()` devolve o mesmo objeto congelado, sem reaplicar nada.

Precedência entre canais:
    Declarações rodam depois de todas as chamadas fluentes. Para
    configurações que sobrescrevem (estratégia de coluna, escalares), a
    declaração prevalece; para configurações acumulativas (validadores,
    conjuntos), ambas se somam. O toggle `optional` segue a última escrita.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, MutableSequence, Optional, Union

from ..config.errors import ConfigError, UnknownPropertyError
from .declarations import declared_properties
from .document import apply_options_document
from .log import OptionsLog
from .options import MappingOptions
from .property_configuration import PropertyConfiguration
from .resolver import resolve_declarations
from .types import BlankRowBehaviour, ExceptionHandlingBehaviour


def _require_row(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{what} expects a 1-based row number, got {value!r}")
    return value


class OptionsBuilder:
    """Montagem fluente + declarativa de `MappingOptions` para `target`."""

    def __init__(self, target: type) -> None:
        if not isinstance(target, type):
            raise ConfigError(f"OptionsBuilder target must be a class, got {target!r}")

        self._target = target
        self._properties = tuple(declared_properties(target))
        self._options = MappingOptions(
            target=target,
            properties=self._properties,
            all_properties_optional_by_default=True,
            ignore_columns_without_matching_properties=True,
        )
        self._log = OptionsLog(target=target.__qualname__)
        self._built = False

    @classmethod
    def for_type(cls, target: type) -> "OptionsBuilder":
        return cls(target)

    # -----------------------------
    # Introspection
    # -----------------------------
    @property
    def target(self) -> type:
        return self._target

    @property
    def properties(self) -> tuple:
        return self._properties

    @property
    def events(self) -> List[dict]:
        return self._log.events

    @property
    def warnings(self) -> dict:
        return self._log.warnings

    @property
    def is_built(self) -> bool:
        return self._built

    def _ensure_open(self) -> None:
        self._options.ensure_mutable()

    # -----------------------------
    # Rows / sheet
    # -----------------------------
    def starting_from_row(self, start_row: int) -> "OptionsBuilder":
        self._ensure_open()
        self._options.start_row = _require_row(start_row, "starting_from_row")
        return self

    def ending_with_row(self, end_row: int) -> "OptionsBuilder":
        self._ensure_open()
        self._options.end_row = _require_row(end_row, "ending_with_row")
        return self

    def header_on_row(self, header_row: int) -> "OptionsBuilder":
        self._ensure_open()
        self._options.header_row = _require_row(header_row, "header_on_row")
        return self

    def using_sheet(self, sheet: Union[int, str]) -> "OptionsBuilder":
        """Seleciona a planilha por índice 0-based ou por nome (exclusivos)."""
        self._ensure_open()
        if isinstance(sheet, bool):
            raise ConfigError(f"using_sheet expects an index or a name, got {sheet!r}")
        if isinstance(sheet, int):
            if sheet < 0:
                raise ConfigError(f"using_sheet expects a 0-based sheet index, got {sheet}")
            self._options.worksheet_name = None
            self._options.worksheet_number = sheet
        elif isinstance(sheet, str) and sheet.strip():
            self._options.worksheet_name = sheet
            self._options.worksheet_number = None
        else:
            raise ConfigError(f"using_sheet expects an index or a non-empty name, got {sheet!r}")
        return self

    def using_header_names(self, use_header_names: bool) -> "OptionsBuilder":
        self._ensure_open()
        self._options.use_header_names = bool(use_header_names)
        return self

    def blank_row_behaviour(self, behaviour: Union[BlankRowBehaviour, str]) -> "OptionsBuilder":
        self._ensure_open()
        try:
            self._options.blank_row_behaviour = BlankRowBehaviour(behaviour)
        except ValueError as e:
            raise ConfigError(f"Unknown blank row behaviour: {behaviour!r}") from e
        return self

    def relaxed_number_matching(self, relaxed: bool) -> "OptionsBuilder":
        self._ensure_open()
        self._options.relaxed_number_matching = bool(relaxed)
        return self

    def all_columns_must_be_mapped_to_properties(self, value: bool) -> "OptionsBuilder":
        self._ensure_open()
        self._options.ignore_columns_without_matching_properties = not value
        return self

    def all_properties_must_be_mapped_to_columns(self, value: bool) -> "OptionsBuilder":
        self._ensure_open()
        self._options.all_properties_optional_by_default = not value
        return self

    def on_reading_header_row(
        self,
        callback: Callable[[Mapping[int, str]], None],
    ) -> "OptionsBuilder":
        self._ensure_open()
        if not callable(callback):
            raise ConfigError("on_reading_header_row expects a callable")
        self._options.on_reading_header_row = callback
        return self

    # -----------------------------
    # Exception handling
    # -----------------------------
    def aggregate_exceptions(self) -> "OptionsBuilder":
        self._ensure_open()
        self._options.exception_handling_behaviour = ExceptionHandlingBehaviour.AGGREGATE_EXCEPTIONS
        self._options.exception_list = []
        return self

    def output_exceptions_to(self, sink: MutableSequence[Exception]) -> "OptionsBuilder":
        self._ensure_open()
        if not isinstance(sink, MutableSequence):
            raise ConfigError(
                f"output_exceptions_to expects a mutable list, got {type(sink).__name__}"
            )
        self._options.exception_handling_behaviour = ExceptionHandlingBehaviour.LOG_EXCEPTIONS
        self._options.exception_list = sink
        return self

    def throw_on_first_exception(self) -> "OptionsBuilder":
        self._ensure_open()
        self._options.exception_handling_behaviour = (
            ExceptionHandlingBehaviour.THROW_ON_FIRST_EXCEPTION
        )
        self._options.exception_list = None
        return self

    # -----------------------------
    # Per-property / documents
    # -----------------------------
    def property(self, property_name: str) -> PropertyConfiguration:
        self._ensure_open()
        if property_name not in self._properties:
            raise UnknownPropertyError(
                f"{self._target.__qualname__} has no property '{property_name}' "
                f"(known: {', '.join(self._properties) or '-'})"
            )
        return PropertyConfiguration(self, property_name)

    def with_document(self, document: Mapping[str, Any]) -> "OptionsBuilder":
        """Aplica um documento de opções agora, na ordem das chamadas fluentes."""
        apply_options_document(self, document)
        return self

    # -----------------------------
    # Build
    # -----------------------------
    def _apply_default_optionality(self) -> None:
        options = self._options
        if not options.all_properties_optional_by_default:
            self._log.log(level="INFO", message="default optionality disabled")
            return

        added = [p for p in self._properties if p not in options.optional_properties]
        options.optional_properties.update(added)

        removed = sorted(options.explicitly_required_properties & options.optional_properties)
        options.optional_properties.difference_update(removed)

        self._log.log(
            level="INFO",
            message="default optionality applied",
            added=added,
            kept_required=removed,
        )

    def build(self) -> MappingOptions:
        if self._built:
            return self._options

        resolve_declarations(self)
        self._apply_default_optionality()
        self._options.freeze()
        self._built = True

        self._log.log(level="INFO", message="options built", fingerprint=self._options.fingerprint())
        return self._options


def build_options(target: type, configure: Optional[Callable[[OptionsBuilder], Any]] = None) -> MappingOptions:
    """Atalho: cria o builder, aplica `configure(builder)` e constrói."""
    builder = OptionsBuilder(target)
    if configure is not None:
        configure(builder)
    return builder.build()

# src/sheetmap/core/options/options.py
"""
Configuração agregada de mapeamento (`MappingOptions`).

Este módulo define o objeto entregue ao motor de leitura: para cada
campo do tipo alvo, de onde vem o valor e quais regras ele deve cumprir,
além das opções escalares da planilha.

Ciclo de vida:
    - mutável apenas durante a montagem (builder fluente + replay de
      declarações + documento de opções)
    - `freeze()` é a única transição para somente leitura

Estratégias de coluna (mutuamente exclusivas por campo):
    - custom_header_numbers     → índice 0-based fixo
    - custom_header_names       → texto de cabeçalho fixo
    - collection_configurations → agregado de colunas nomeadas
    - unmapped_properties       → campo ignorado
    - row_number_property       → número da linha (um único campo)

Conjuntos de obrigatoriedade (independentes durante a montagem):
    - required_fields                → valor da célula deve estar presente
    - optional_properties            → coluna pode faltar na planilha
    - explicitly_required_properties → decisão explícita de não-opcional
    - unique_properties              → valor não se repete entre linhas

Invariantes:
    - Um campo aparece em no máximo uma estratégia de coluna
    - Após `freeze()`, nenhum atributo ou coleção pode ser alterado

Limites explícitos:
    - Não lê planilhas
    - Não executa validadores
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from ..config.errors import OptionsFrozenError
from ..config.hashing import compute_options_hash
from ..validation.validator import CellValidator
from .types import BlankRowBehaviour, CollectionConfiguration, ExceptionHandlingBehaviour


@dataclass
class MappingOptions:
    """
    Opções de mapeamento de linhas tabulares para instâncias de `target`.

    Os nomes de atributos espelham as coleções consumidas pelo motor de
    leitura. Linhas são 1-based; `header_row = 0` indica ausência de
    cabeçalho explícito antes de `start_row`.
    """
    target: type
    properties: Tuple[str, ...] = ()

    custom_header_numbers: Dict[str, int] = field(default_factory=dict)
    custom_header_names: Dict[str, str] = field(default_factory=dict)
    collection_configurations: Dict[str, CollectionConfiguration] = field(default_factory=dict)
    unmapped_properties: Set[str] = field(default_factory=set)
    row_number_property: Optional[str] = None

    validations: Dict[str, List[CellValidator]] = field(default_factory=dict)
    required_fields: Set[str] = field(default_factory=set)
    optional_properties: Set[str] = field(default_factory=set)
    explicitly_required_properties: Set[str] = field(default_factory=set)
    unique_properties: Set[str] = field(default_factory=set)
    custom_mappings: Dict[str, Callable[[Any], Any]] = field(default_factory=dict)

    start_row: int = 1
    end_row: Optional[int] = None
    header_row: int = 0
    worksheet_number: Optional[int] = 0
    worksheet_name: Optional[str] = None
    use_header_names: bool = True
    blank_row_behaviour: BlankRowBehaviour = BlankRowBehaviour.THROW_EXCEPTION
    exception_handling_behaviour: ExceptionHandlingBehaviour = (
        ExceptionHandlingBehaviour.THROW_ON_FIRST_EXCEPTION
    )
    exception_list: Optional[List[Exception]] = None
    relaxed_number_matching: bool = False
    all_properties_optional_by_default: bool = True
    ignore_columns_without_matching_properties: bool = True
    on_reading_header_row: Optional[Callable[[Mapping[int, str]], None]] = None

    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise OptionsFrozenError(
                f"MappingOptions for {self.target.__name__} is frozen; cannot set '{name}'"
            )
        object.__setattr__(self, name, value)

    # -----------------------------
    # Lifecycle
    # -----------------------------
    @property
    def frozen(self) -> bool:
        return self._frozen

    def ensure_mutable(self) -> None:
        if self._frozen:
            raise OptionsFrozenError(
                f"MappingOptions for {self.target.__name__} is frozen; build() already ran"
            )

    def freeze(self) -> "MappingOptions":
        """Converte todas as coleções em visões somente leitura. Idempotente."""
        if self._frozen:
            return self

        self.custom_header_numbers = MappingProxyType(dict(self.custom_header_numbers))
        self.custom_header_names = MappingProxyType(dict(self.custom_header_names))
        self.collection_configurations = MappingProxyType(dict(self.collection_configurations))
        self.unmapped_properties = frozenset(self.unmapped_properties)
        self.validations = MappingProxyType(
            {name: tuple(validators) for name, validators in self.validations.items()}
        )
        self.required_fields = frozenset(self.required_fields)
        self.optional_properties = frozenset(self.optional_properties)
        self.explicitly_required_properties = frozenset(self.explicitly_required_properties)
        self.unique_properties = frozenset(self.unique_properties)
        self.custom_mappings = MappingProxyType(dict(self.custom_mappings))
        # exception_list é um sink do chamador: permanece a mesma lista

        object.__setattr__(self, "_frozen", True)
        return self

    # -----------------------------
    # Queries
    # -----------------------------
    def column_strategy(self, property_name: str) -> Optional[str]:
        """Nome da estratégia de coluna configurada para o campo, se houver."""
        if property_name in self.custom_header_numbers:
            return "number"
        if property_name in self.custom_header_names:
            return "name"
        if property_name in self.collection_configurations:
            return "columns"
        if property_name in self.unmapped_properties:
            return "ignored"
        return None

    def is_optional(self, property_name: str) -> bool:
        return property_name in self.optional_properties

    def validators_for(self, property_name: str) -> Tuple[CellValidator, ...]:
        return tuple(self.validations.get(property_name, ()))

    # -----------------------------
    # Traceability
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Snapshot serializável; funções entram apenas por mensagem/nome."""
        return {
            "target": f"{self.target.__module__}.{self.target.__qualname__}",
            "properties": list(self.properties),
            "custom_header_numbers": dict(self.custom_header_numbers),
            "custom_header_names": dict(self.custom_header_names),
            "collection_configurations": {
                name: list(cfg.column_names)
                for name, cfg in self.collection_configurations.items()
            },
            "unmapped_properties": sorted(self.unmapped_properties),
            "row_number_property": self.row_number_property,
            "validations": {
                name: [v.message for v in validators]
                for name, validators in self.validations.items()
            },
            "required_fields": sorted(self.required_fields),
            "optional_properties": sorted(self.optional_properties),
            "explicitly_required_properties": sorted(self.explicitly_required_properties),
            "unique_properties": sorted(self.unique_properties),
            "custom_mappings": {
                name: getattr(fn, "__qualname__", repr(fn))
                for name, fn in self.custom_mappings.items()
            },
            "start_row": self.start_row,
            "end_row": self.end_row,
            "header_row": self.header_row,
            "worksheet_number": self.worksheet_number,
            "worksheet_name": self.worksheet_name,
            "use_header_names": self.use_header_names,
            "blank_row_behaviour": self.blank_row_behaviour.value,
            "exception_handling_behaviour": self.exception_handling_behaviour.value,
            "relaxed_number_matching": self.relaxed_number_matching,
            "all_properties_optional_by_default": self.all_properties_optional_by_default,
            "ignore_columns_without_matching_properties": (
                self.ignore_columns_without_matching_properties
            ),
        }

    def fingerprint(self) -> str:
        return compute_options_hash(self.to_dict())

# src/sheetmap/core/options/resolution.py
"""
Resolução da coluna de origem de cada campo contra um cabeçalho real.

O motor de leitura entrega o cabeçalho como mapeamento
`{índice 0-based: texto}`; este módulo decide, por campo, de onde o
valor vem, usando exatamente uma das estratégias:

    - índice fixo (`uses_column_number` / `uses_column_letter`)
    - nome fixo (`uses_column_named`)
    - agregado de colunas nomeadas (`map_from_columns`)
    - número da linha (`maps_to_row_number`)
    - ignorado (`ignore`)

Sem estratégia explícita:
    - com nomes de cabeçalho habilitados, o campo casa com a coluna cujo
      texto é igual ao nome do campo
    - sem nomes de cabeçalho, o campo usa a posição de declaração

Casamento de nomes: texto com espaços externos removidos, sensível a
maiúsculas; a primeira coluna que casa vence.

Limites explícitos:
    - Não lê células nem converte valores
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from .options import MappingOptions


class SourceKind(str, Enum):
    INDEX = "index"
    COLUMNS = "columns"
    ROW_NUMBER = "row_number"
    IGNORED = "ignored"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class FieldSource:
    property_name: str
    kind: SourceKind
    indexes: Tuple[int, ...] = ()
    missing: Tuple[str, ...] = ()

    @property
    def index(self) -> Optional[int]:
        if self.kind is SourceKind.INDEX:
            return self.indexes[0]
        return None

    @property
    def is_resolved(self) -> bool:
        return self.kind is not SourceKind.UNRESOLVED


def header_row_from_frame(frame: pd.DataFrame) -> Dict[int, str]:
    """Cabeçalho a partir das colunas de um DataFrame (colunas nulas omitidas)."""
    return header_row_from_values(list(frame.columns))


def header_row_from_values(values: Iterable[object]) -> Dict[int, str]:
    header: Dict[int, str] = {}
    for i, value in enumerate(values):
        if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
            continue
        header[i] = str(value)
    return header


def _find(header_row: Mapping[int, str], name: str) -> Optional[int]:
    wanted = name.strip()
    for index in sorted(header_row):
        if str(header_row[index]).strip() == wanted:
            return index
    return None


def resolve_field_source(
    options: MappingOptions,
    property_name: str,
    header_row: Mapping[int, str],
) -> FieldSource:
    if options.row_number_property == property_name:
        return FieldSource(property_name, SourceKind.ROW_NUMBER)

    if property_name in options.unmapped_properties:
        return FieldSource(property_name, SourceKind.IGNORED)

    if property_name in options.custom_header_numbers:
        return FieldSource(
            property_name,
            SourceKind.INDEX,
            (options.custom_header_numbers[property_name],),
        )

    if property_name in options.custom_header_names:
        column_name = options.custom_header_names[property_name]
        index = _find(header_row, column_name)
        if index is None:
            return FieldSource(property_name, SourceKind.UNRESOLVED, missing=(column_name,))
        return FieldSource(property_name, SourceKind.INDEX, (index,))

    if property_name in options.collection_configurations:
        found: List[int] = []
        missing: List[str] = []
        for column_name in options.collection_configurations[property_name].column_names:
            index = _find(header_row, column_name)
            if index is None:
                missing.append(column_name)
            else:
                found.append(index)
        if not found:
            return FieldSource(property_name, SourceKind.UNRESOLVED, missing=tuple(missing))
        return FieldSource(property_name, SourceKind.COLUMNS, tuple(found), tuple(missing))

    if options.use_header_names:
        index = _find(header_row, property_name)
        if index is None:
            return FieldSource(property_name, SourceKind.UNRESOLVED, missing=(property_name,))
        return FieldSource(property_name, SourceKind.INDEX, (index,))

    if property_name in options.properties:
        return FieldSource(property_name, SourceKind.INDEX, (options.properties.index(property_name),))

    return FieldSource(property_name, SourceKind.UNRESOLVED)


def resolve_all(options: MappingOptions, header_row: Mapping[int, str]) -> Dict[str, FieldSource]:
    return {name: resolve_field_source(options, name, header_row) for name in options.properties}


def unmatched_columns(options: MappingOptions, header_row: Mapping[int, str]) -> List[str]:
    """Colunas do cabeçalho que nenhum campo consome, em ordem de coluna."""
    claimed = set()
    for source in resolve_all(options, header_row).values():
        claimed.update(source.indexes)
    return [header_row[i] for i in sorted(header_row) if i not in claimed]


def unresolved_required_properties(
    options: MappingOptions,
    header_row: Mapping[int, str],
) -> List[str]:
    """Campos não opcionais sem coluna de origem no cabeçalho."""
    return [
        name
        for name, source in resolve_all(options, header_row).items()
        if not source.is_resolved and not options.is_optional(name)
    ]

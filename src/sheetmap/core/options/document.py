# src/sheetmap/core/options/document.py
"""
Documentos de opções como terceiro canal de configuração.

Um documento (carregado por `config.loader.load_options_document` ou
montado em memória) é convertido em `Declaration`s e reproduzido pelo
mesmo resolver usado para as declarações do tipo. Portanto um documento
é indistinguível de declarações equivalentes.

Formato (v1):

    sheet:
      <kind de classe>: <valor>
    properties:
      <campo>:
        <kind de campo>: <valor>

Conversão de valores:
    - kinds sem argumento (`aggregate_exceptions`, `ignore`, `required`,
      `unique`, `maps_to_row_number`): `true` aplica, `false` não aplica
    - kinds booleanos (`using_header_names`, `relaxed_number_matching`,
      `optional`, `all_*_must_be_mapped_*`): o valor deve ser `true/false`
    - `map_from_columns` / `should_be_one_of`: lista → argumentos em ordem
    - demais kinds: o valor é o único argumento
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from ..config.errors import (
    ConfigError,
    InvalidConfigRootTypeError,
    UnknownDeclarationError,
    UnknownPropertyError,
)
from .declarations import (
    CLASS_LEVEL_KINDS,
    FIELD_LEVEL_KINDS,
    Declaration,
    DeclarationKind,
)
from .resolver import apply_declarations

if TYPE_CHECKING:  # pragma: no cover
    from .builder import OptionsBuilder


_FLAG_KINDS = frozenset(
    {
        DeclarationKind.AGGREGATE_EXCEPTIONS,
        DeclarationKind.IGNORE,
        DeclarationKind.REQUIRED,
        DeclarationKind.UNIQUE,
        DeclarationKind.MAPS_TO_ROW_NUMBER,
    }
)

_BOOL_ARG_KINDS = frozenset(
    {
        DeclarationKind.ALL_PROPERTIES_MUST_BE_MAPPED_TO_COLUMNS,
        DeclarationKind.ALL_COLUMNS_MUST_BE_MAPPED_TO_PROPERTIES,
        DeclarationKind.USING_HEADER_NAMES,
        DeclarationKind.RELAXED_NUMBER_MATCHING,
        DeclarationKind.OPTIONAL,
    }
)

_VARIADIC_KINDS = frozenset(
    {
        DeclarationKind.MAP_FROM_COLUMNS,
        DeclarationKind.SHOULD_BE_ONE_OF,
    }
)


def _kind(key: str, allowed: frozenset, where: str) -> DeclarationKind:
    try:
        kind = DeclarationKind(key)
    except ValueError as e:
        raise UnknownDeclarationError(f"Unknown declaration '{key}' in {where}") from e
    if kind not in allowed:
        raise UnknownDeclarationError(f"Declaration '{key}' is not allowed in {where}")
    return kind


def _to_declaration(kind: DeclarationKind, value: Any, where: str) -> Optional[Declaration]:
    if kind in _FLAG_KINDS:
        if not isinstance(value, bool):
            raise ConfigError(f"'{kind.value}' in {where} expects true/false, got {value!r}")
        return Declaration(kind) if value else None

    if kind in _BOOL_ARG_KINDS:
        if not isinstance(value, bool):
            raise ConfigError(f"'{kind.value}' in {where} expects true/false, got {value!r}")
        return Declaration(kind, (value,))

    if kind in _VARIADIC_KINDS:
        if isinstance(value, (list, tuple)):
            return Declaration(kind, tuple(value))
        return Declaration(kind, (value,))

    return Declaration(kind, (value,))


def _section(document: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = document.get(name) or {}
    if not isinstance(section, Mapping):
        raise InvalidConfigRootTypeError(
            f"Seção '{name}' deve ser dict, recebido: {type(section).__name__}"
        )
    return section


def document_declarations(
    document: Mapping[str, Any],
    properties: tuple,
) -> "tuple[List[Declaration], Dict[str, List[Declaration]]]":
    """
    Converte um documento em declarações (classe, campos).

    Raises:
        InvalidConfigRootTypeError: raiz/seção não é dict.
        UnknownDeclarationError: chave desconhecida ou no nível errado.
        UnknownPropertyError: campo inexistente no tipo alvo.
    """
    if not isinstance(document, Mapping):
        raise InvalidConfigRootTypeError(
            f"Documento de opções deve ser dict, recebido: {type(document).__name__}"
        )

    extra = set(document) - {"sheet", "properties"}
    if extra:
        raise UnknownDeclarationError(f"Unknown document sections: {sorted(extra)}")

    class_level: List[Declaration] = []
    for key, value in _section(document, "sheet").items():
        declaration = _to_declaration(_kind(key, CLASS_LEVEL_KINDS, "sheet"), value, "sheet")
        if declaration is not None:
            class_level.append(declaration)

    field_level: Dict[str, List[Declaration]] = {}
    for property_name, entries in _section(document, "properties").items():
        if property_name not in properties:
            raise UnknownPropertyError(f"Document references unknown property '{property_name}'")
        where = f"properties.{property_name}"
        if entries is None:
            entries = {}
        if not isinstance(entries, Mapping):
            raise InvalidConfigRootTypeError(
                f"Seção '{where}' deve ser dict, recebido: {type(entries).__name__}"
            )

        declarations: List[Declaration] = []
        for key, value in entries.items():
            declaration = _to_declaration(_kind(key, FIELD_LEVEL_KINDS, where), value, where)
            if declaration is not None:
                declarations.append(declaration)
        field_level[property_name] = declarations

    return class_level, field_level


def apply_options_document(builder: "OptionsBuilder", document: Mapping[str, Any]) -> int:
    """Reproduz um documento de opções sobre o builder; retorna o total aplicado."""
    class_level, field_level = document_declarations(document, builder.properties)
    return apply_declarations(builder, class_level, field_level, source="document")

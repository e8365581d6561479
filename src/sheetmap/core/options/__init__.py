# src/sheetmap/core/options/__init__.py
"""
# Opções de mapeamento — SheetMap

Este pacote monta, a partir de três canais, um único `MappingOptions`
consumido pelo motor de leitura:

- **builder fluente** (`OptionsBuilder`, `PropertyConfiguration`)
- **declarações no tipo** (`@sheet(...)`, `Annotated[...]`, `field(metadata=...)`)
- **documentos de opções** (YAML/JSON, via `with_document`)

## Componentes

- **options**: `MappingOptions` (configuração agregada, congelável)
- **property_configuration**: a superfície de mutação única por campo
- **declarations** / **resolver**: metadados rotulados e seu replay
- **builder**: orquestração, default de opcionalidade e congelamento
- **document**: conversão de documentos em declarações
- **resolution**: coluna de origem de cada campo contra um cabeçalho

## Invariantes

- Todos os canais escrevem nas mesmas coleções pelas mesmas funções
- Um campo tem no máximo uma estratégia de coluna
- Após `build()`, as opções são somente leitura
"""

from .builder import OptionsBuilder, build_options
from .declarations import Declaration, DeclarationKind, sheet
from .log import OptionsLog
from .options import MappingOptions
from .property_configuration import PropertyConfiguration
from .resolution import FieldSource, SourceKind, resolve_field_source
from .types import BlankRowBehaviour, CollectionConfiguration, ExceptionHandlingBehaviour

__all__ = [
    "OptionsBuilder",
    "build_options",
    "Declaration",
    "DeclarationKind",
    "sheet",
    "OptionsLog",
    "MappingOptions",
    "PropertyConfiguration",
    "FieldSource",
    "SourceKind",
    "resolve_field_source",
    "BlankRowBehaviour",
    "CollectionConfiguration",
    "ExceptionHandlingBehaviour",
]

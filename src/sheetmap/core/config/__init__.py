# src/sheetmap/core/config/__init__.py
"""
Camada de configuração do SheetMap.

Este pacote reúne o que é transversal à montagem das opções de
mapeamento:
    - hierarquia de erros de configuração (`errors`)
    - carregamento de documentos de opções YAML/JSON (`loader`)
    - deep-merge determinístico defaults + ajustes locais (`merge`)
    - hash canônico das opções construídas (`hashing`)

Limites explícitos:
    - Não interpreta declarações
    - Não lê planilhas
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidColumnLetterError,
    InvalidColumnNumberError,
    InvalidConfigRootTypeError,
    OptionsFrozenError,
    UnknownDeclarationError,
    UnknownPropertyError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_options_hash  # noqa: F401
from .loader import load_options_document  # noqa: F401
from .merge import deep_merge  # noqa: F401

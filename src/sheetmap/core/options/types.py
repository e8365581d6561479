# src/sheetmap/core/options/types.py
"""
Tipos canônicos das opções de mapeamento.

Componentes principais:
    - BlankRowBehaviour          → reação do motor de leitura a linhas vazias
    - ExceptionHandlingBehaviour → política de falhas de linha
    - CollectionConfiguration    → campo alimentado por várias colunas nomeadas

Os enums são `str` para facilitar serialização (snapshot/hash) e uso
direto em documentos de opções YAML/JSON.

Limites explícitos:
    - Nenhuma lógica de leitura vive neste módulo
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class BlankRowBehaviour(str, Enum):
    """
    Comportamento do motor de leitura diante de uma linha vazia.

    Estados definidos:
        - THROW_EXCEPTION: a linha vazia é tratada como falha de linha
        - IGNORE: a linha é pulada
        - CREATE_ENTITY: cria uma instância com todos os campos ausentes
        - STOP_READING: encerra a leitura na primeira linha vazia
    """
    THROW_EXCEPTION = "throw_exception"
    IGNORE = "ignore"
    CREATE_ENTITY = "create_entity"
    STOP_READING = "stop_reading"


class ExceptionHandlingBehaviour(str, Enum):
    """
    Política do motor de leitura para falhas de linha.

    Estados definidos:
        - THROW_ON_FIRST_EXCEPTION: interrompe na primeira falha
        - AGGREGATE_EXCEPTIONS: acumula em lista própria e levanta ao final
        - LOG_EXCEPTIONS: registra na lista fornecida pelo chamador e segue
    """
    THROW_ON_FIRST_EXCEPTION = "throw_on_first_exception"
    AGGREGATE_EXCEPTIONS = "aggregate_exceptions"
    LOG_EXCEPTIONS = "log_exceptions"


@dataclass(frozen=True)
class CollectionConfiguration:
    """Campo agregado: `column_names` preserva a ordem declarada."""
    property_name: str
    column_names: Tuple[str, ...]

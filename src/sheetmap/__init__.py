# src/sheetmap/__init__.py
"""
SheetMap — configuração de mapeamento de linhas tabulares para objetos.

Descreve, uma única vez, como cada linha de uma planilha se transforma
em uma instância do tipo alvo: qual coluna alimenta qual campo, quais
validadores cada campo deve cumprir, quais campos são obrigatórios,
opcionais, únicos ou ignorados, e como o motor de leitura deve reagir a
falhas.

Arquitetura em alto nível:
    - core.validation → validadores de célula
    - core.options    → builder fluente, declarações e `MappingOptions`
    - core.config     → erros, documentos de opções, merge e hashing

Limites explícitos:
    - Não lê arquivos de planilha
    - Não converte valores de célula nem instancia objetos
"""

from .core.options import (
    BlankRowBehaviour,
    ExceptionHandlingBehaviour,
    MappingOptions,
    OptionsBuilder,
    build_options,
    sheet,
)
from .core.options import declarations as declare

__all__ = [
    "BlankRowBehaviour",
    "ExceptionHandlingBehaviour",
    "MappingOptions",
    "OptionsBuilder",
    "build_options",
    "sheet",
    "declare",
]

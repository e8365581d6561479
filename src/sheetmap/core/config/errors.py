# src/sheetmap/core/config/errors.py
"""
Exceções canônicas da camada de configuração do SheetMap.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a montagem das opções de mapeamento (builder fluente, declarações e
documentos de opções) e durante o carregamento de documentos em disco.

As exceções aqui definidas representam **erros de configuração**, e não
falhas de validação de linhas. Falhas de linha pertencem ao motor de
leitura, que apenas consome as regras produzidas aqui.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de configuração são levantados no ponto de chamada do mutator
    - Nenhum erro é adiado para `build()` ou para o processamento de linhas

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de validação de célula

Limites explícitos:
    - Não executa leitura de planilhas
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do SheetMap.

    Todas as exceções levantadas durante a montagem das opções e o
    carregamento de documentos de opções herdam desta classe, permitindo
    captura genérica de falhas de configuração.
    """


class InvalidColumnNumberError(ConfigError):
    """
    Número de coluna inválido.

    `uses_column_number` espera um número de coluna 1-based; qualquer
    valor menor que 1 é rejeitado imediatamente.
    """


class InvalidColumnLetterError(ConfigError):
    """Referência de coluna em letras inválida (ex.: vazia ou com dígitos)."""


class UnknownPropertyError(ConfigError):
    """
    Propriedade inexistente no tipo alvo.

    Levantada quando o builder fluente ou um documento de opções
    referencia um campo que o tipo alvo não declara.
    """


class UnknownDeclarationError(ConfigError):
    """Declaração com `kind` desconhecido ou aplicada no nível errado."""


class OptionsFrozenError(ConfigError):
    """
    Tentativa de mutação após `build()`.

    Após o build as opções são somente leitura; o builder também rejeita
    novas chamadas fluentes.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o documento de opções base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O documento de defaults é obrigatório
        - Não há tentativa de inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de documento não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do documento
    (ou de uma de suas seções) não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"sheet": {"starting_from_row": 2}}
        - override: {"sheet": "Dados"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """

# tests/conftest.py
"""
Fixtures compartilhados para testes do SheetMap.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de opções (defaults + local) em YAML
- builders novos para os tipos alvo de `tests/fixtures/targets.py`
- um cabeçalho de planilha determinístico

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Documentos são fornecidos como string para evitar I/O implícito
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture lê planilhas reais
    - Cada fixture de builder retorna uma instância nova

Limites explícitos:
    - Não valida semântica das opções (isso é papel dos testes)
"""

import pytest


# =====================================================
# Documentos de opções
# =====================================================

@pytest.fixture
def options_defaults_yaml() -> str:
    """
    Documento de opções base (defaults) para o tipo `Product`.

    Returns:
        str: Conteúdo YAML do documento de defaults.
    """

    return """\
sheet:
  starting_from_row: 2
  using_sheet: Products
properties:
  sku:
    uses_column_letter: A
    required: true
    unique: true
  price:
    should_be_greater_than: 0
  category:
    should_be_one_of: [food, drink]
"""


@pytest.fixture
def options_local_yaml() -> str:
    """
    Ajustes locais sobre `options_defaults_yaml`.

    Sobrescreve a planilha, troca a lista de categorias (listas são
    substituídas integralmente) e adiciona um limite superior a `price`.
    """

    return """\
sheet:
  using_sheet: Catalog
properties:
  price:
    should_be_less_than: 500
  category:
    should_be_one_of: [food, drink, toys]
"""


# =====================================================
# Builders e cabeçalho
# =====================================================

@pytest.fixture
def product_builder():
    from sheetmap.core.options.builder import OptionsBuilder
    from tests.fixtures.targets import Product

    return OptionsBuilder(Product)


@pytest.fixture
def order_builder():
    from sheetmap.core.options.builder import OptionsBuilder
    from tests.fixtures.targets import Order

    return OptionsBuilder(Order)


@pytest.fixture
def product_header_row() -> dict:
    """Cabeçalho `{índice 0-based: texto}` como entregue pelo motor de leitura."""
    return {0: "sku", 1: "name", 2: "price", 3: "quantity", 4: "Comments"}

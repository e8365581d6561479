# tests/core/config/test_loader.py
"""
Testes do loader de documentos de opções.

Os testes asseguram que:
- o documento de defaults é obrigatório
- o documento local é opcional e, quando presente, tem prioridade
- YAML e JSON são aceitos; outros formatos são rejeitados
- raiz e seções conhecidas devem ser dicionários

Limites explícitos:
    - Não valida replay no builder
    - Não valida hashing das opções
"""

import json
from pathlib import Path

import pytest

try:
    from sheetmap.core.config.loader import load_options_document
    from sheetmap.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_options_document = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader e suas exceções tipadas estejam disponíveis.

    Invariantes:
        - Se os módulos existem, a função não produz efeitos colaterais
        - Se algum módulo está ausente, o teste falha imediatamente
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/sheetmap/core/config/loader.py (load_options_document)\n"
            "- src/sheetmap/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_options_document(defaults_path=str(tmp_path / "defaults.yaml"))


def test_missing_local_is_ok(tmp_path: Path, options_defaults_yaml):
    """
    Verifica que um caminho local inexistente é ignorado e que os
    defaults são preservados integralmente.
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(options_defaults_yaml, encoding="utf-8")

    out = load_options_document(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out["sheet"] == {"starting_from_row": 2, "using_sheet": "Products"}
    assert out["properties"]["sku"]["uses_column_letter"] == "A"


def test_local_overrides_defaults(tmp_path: Path, options_defaults_yaml, options_local_yaml):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yml"
    defaults.write_text(options_defaults_yaml, encoding="utf-8")
    local.write_text(options_local_yaml, encoding="utf-8")

    out = load_options_document(defaults_path=str(defaults), local_path=str(local))
    assert out["sheet"]["using_sheet"] == "Catalog"
    assert out["sheet"]["starting_from_row"] == 2
    assert out["properties"]["price"] == {"should_be_greater_than": 0, "should_be_less_than": 500}
    assert out["properties"]["category"]["should_be_one_of"] == ["food", "drink", "toys"]


def test_json_documents_are_supported(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.json"
    defaults.write_text(json.dumps({"properties": {"sku": {"required": True}}}), encoding="utf-8")
    out = load_options_document(defaults_path=str(defaults))
    assert out == {"properties": {"sku": {"required": True}}}


def test_empty_document_is_empty_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("", encoding="utf-8")
    assert load_options_document(defaults_path=str(defaults)) == {}


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("[sheet]\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_options_document(defaults_path=str(defaults))


@pytest.mark.parametrize(
    "content",
    [
        "- sheet\n- properties\n",
        "sheet: Products\n",
        "properties: [sku]\n",
    ],
)
def test_invalid_root_or_section_raises(tmp_path: Path, content):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(content, encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_options_document(defaults_path=str(defaults))

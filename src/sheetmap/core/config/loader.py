# src/sheetmap/core/config/loader.py
"""
Loader de documentos de opções do SheetMap.

Além das declarações no próprio tipo e do builder fluente, as opções de
mapeamento podem vir de um documento em disco. Este módulo lê esse
documento, valida o mínimo estrutural e resolve o documento efetivo a
partir de:
    - um documento de defaults (obrigatório)
    - um documento local de ajustes (opcional)

Formato esperado (v1):

    sheet:
      starting_from_row: 2
      using_sheet: Vendas
    properties:
      preco:
        uses_column_letter: C
        should_be_greater_than: 0

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Ajustes locais nunca mutam os defaults

Limites explícitos:
    - Não interpreta declarações nem toca em `MappingOptions`
    - Não valida nomes de propriedades (isso ocorre no replay)
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


_SECTIONS = ("sheet", "properties")


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um documento de opções e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios. As seções
    conhecidas (`sheet`, `properties`), quando presentes, devem ser
    dicionários.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz ou uma seção não for dict.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Documento de opções não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Documento de opções deve ser dict, recebido: {type(data).__name__}"
        )

    for section in _SECTIONS:
        value = data.get(section)
        if value is not None and not isinstance(value, dict):
            raise InvalidConfigRootTypeError(
                f"Seção '{section}' deve ser dict, recebido: {type(value).__name__}"
            )

    return data


def load_options_document(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve o documento de opções efetivo.

    Política de resolução:
        - O documento de defaults é obrigatório
        - O documento local é opcional e ignorado se não existir
        - Quando presente, o local sempre tem prioridade sobre defaults

    Args:
        defaults_path (str): Caminho para o documento base.
        local_path (Optional[str]): Caminho opcional para ajustes locais.

    Returns:
        Dict[str, Any]: Documento de opções resolvido.

    Raises:
        DefaultsNotFoundError: Se o documento de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """

    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective

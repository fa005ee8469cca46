# src/callbind/core/config/loader.py
"""
Loader dos settings do CallBind.

Camadas, da menor para a maior precedência:
    1. `DEFAULT_SETTINGS` embutidos (sempre presentes)
    2. arquivo de defaults do projeto (opcional; se informado, deve existir)
    3. arquivo local de overrides (opcional; ignorado se não existir)

Formatos aceitos: YAML (`.yaml`, `.yml`, via PyYAML `safe_load`) e JSON.
Um arquivo vazio equivale a `{}`.

Invariantes:
    - O resultado é sempre um `dict` completo e independente
    - `DEFAULT_SETTINGS` nunca é mutado

Limites explícitos:
    - Não valida o domínio dos valores (isso é `DispatcherSettings.from_dict`)
    - Não lê a árvore de chamadas da aplicação
"""

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


DEFAULT_SETTINGS: Dict[str, Any] = {
    "reader": {
        "name_key": "Name",
        "args_key": "Args",
        "expand_environment": True,
    },
    "selector": {
        "case_sensitive_names": False,
        "tie_break": "fewest_parameters",
    },
    "types": {
        "default_module": None,
    },
    "directives": ["WriteTo", "Enrich", "AuditTo"],
}

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def _read_settings_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de settings e exige que a raiz seja um mapeamento.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for YAML nem JSON.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de settings não encontrado: {path}")

    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or path.name}")

    with path.open("r", encoding="utf-8") as f:
        document = f.read()

    data = parse(document) if document.strip() else None
    if data is None:
        # arquivo vazio (ou só comentários)
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__} ({path})"
        )
    return data


def load_settings(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve os settings efetivos do despachante.

    Args:
        defaults_path: arquivo de defaults do projeto (deve existir se informado).
        local_path: arquivo de overrides locais (ignorado se não existir).

    Returns:
        Dict[str, Any]: settings completos (embutidos + arquivos).

    Raises:
        DefaultsNotFoundError: Se `defaults_path` for informado e não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se um override mudar o tipo de uma chave.
    """
    layers = []
    if defaults_path is not None:
        layers.append(_read_settings_file(Path(defaults_path)))
    if local_path is not None and Path(local_path).exists():
        layers.append(_read_settings_file(Path(local_path)))

    effective = deepcopy(DEFAULT_SETTINGS)
    for layer in layers:
        effective = deep_merge(effective, layer)
    return effective

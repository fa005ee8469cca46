# src/callbind/core/config/merge.py
"""
Deep-merge de settings (defaults ← overrides).

Política (v1):
    - mapeamento + mapeamento → merge recursivo por chave
    - lista → substituída por inteiro (`directives` nunca é concatenado)
    - None → aceito em qualquer lado (ex.: `types.default_module: null`)
    - escalares do mesmo tipo → vence o override
    - tipos diferentes → `ConfigTypeConflictError` com o caminho da chave

Nenhum input é mutado; o resultado é sempre uma estrutura nova.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _merged_value(path: str, current: Any, incoming: Any) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_at(path, current, incoming)

    if isinstance(incoming, list) or current is None or incoming is None:
        return deepcopy(incoming)

    if type(current) is not type(incoming):
        raise ConfigTypeConflictError(
            f"Conflito de tipo em '{path}': "
            f"{type(current).__name__} vs {type(incoming).__name__}"
        )
    return deepcopy(incoming)


def _merge_at(prefix: str, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, incoming in override.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if key in merged:
            merged[key] = _merged_value(path, merged[key], incoming)
        else:
            merged[key] = deepcopy(incoming)
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica `override` sobre `base` e retorna um novo dicionário.

    Raises:
        ConfigTypeConflictError: Se algum dos lados não for dict, ou se uma
            chave mudar de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_at("", base, override)

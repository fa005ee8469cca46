# src/callbind/core/reader/__init__.py
"""
Leitura de chamadas configuradas.

- **reader**: `get_method_calls`, `resolve_call`, `resolve_method_calls`
- **environment**: `expand_environment_variables` (`%NOME%`)
"""
from .environment import expand_environment_variables
from .reader import get_method_calls, resolve_call, resolve_method_calls

__all__ = [
    "expand_environment_variables",
    "get_method_calls",
    "resolve_call",
    "resolve_method_calls",
]

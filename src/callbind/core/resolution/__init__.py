# src/callbind/core/resolution/__init__.py
"""
Motor de resolução do CallBind.

- **selector**: `select_configuration_method`, `bind_arguments`
- **converter**: `convert_to_type`
- **type_resolver**: `resolve_type`, `create_instance`, `TypeResolver`

Fluxo: seletor (por chamada) → conversor (por argumento) → resolvedor de
tipos (por argumento de tipo de referência).
"""
from .converter import convert_to_type
from .selector import (
    TIE_BREAK_ERROR,
    TIE_BREAK_FEWEST_PARAMETERS,
    bind_arguments,
    select_configuration_method,
)
from .type_resolver import TypeResolver, create_instance, is_type_reference, resolve_type

__all__ = [
    "convert_to_type",
    "TIE_BREAK_ERROR",
    "TIE_BREAK_FEWEST_PARAMETERS",
    "bind_arguments",
    "select_configuration_method",
    "TypeResolver",
    "create_instance",
    "is_type_reference",
    "resolve_type",
]

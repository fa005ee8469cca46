# src/callbind/core/config/settings.py
"""
Visão tipada e validada dos settings do despachante.

`DispatcherSettings` é construído a partir do dicionário produzido por
`load_settings` e é o único formato consumido por `Dispatcher`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidSettingError
from .loader import DEFAULT_SETTINGS
from .merge import deep_merge
from ..resolution.selector import TIE_BREAK_FEWEST_PARAMETERS, TIE_BREAKS


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidSettingError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _non_empty_str(section: Dict[str, Any], key: str, where: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidSettingError(f"'{where}.{key}' must be a non-empty string")
    return value


def _flag(section: Dict[str, Any], key: str, where: str) -> bool:
    value = section.get(key)
    if not isinstance(value, bool):
        raise InvalidSettingError(f"'{where}.{key}' must be a boolean, got {value!r}")
    return value


@dataclass(frozen=True)
class DispatcherSettings:
    """Settings efetivos do despachante (imutáveis)."""

    name_key: str = "Name"
    args_key: str = "Args"
    expand_environment: bool = True
    case_sensitive_names: bool = False
    tie_break: str = TIE_BREAK_FEWEST_PARAMETERS
    default_module: Optional[str] = None
    directives: Tuple[str, ...] = ("WriteTo", "Enrich", "AuditTo")
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]] = None) -> "DispatcherSettings":
        """Valida um dicionário de settings (parcial ou completo) sobre os defaults.

        Raises:
            InvalidSettingError: Se algum valor estiver fora do domínio aceito.
        """
        effective = deep_merge(DEFAULT_SETTINGS, raw or {})

        reader = _section(effective, "reader")
        selector = _section(effective, "selector")
        types = _section(effective, "types")

        tie_break = selector.get("tie_break")
        if tie_break not in TIE_BREAKS:
            raise InvalidSettingError(
                f"'selector.tie_break' must be one of {list(TIE_BREAKS)}, got {tie_break!r}"
            )

        default_module = types.get("default_module")
        if default_module is not None and (not isinstance(default_module, str) or not default_module.strip()):
            raise InvalidSettingError("'types.default_module' must be null or a non-empty string")

        directives = effective.get("directives") or []
        if not isinstance(directives, list) or not all(isinstance(d, str) and d.strip() for d in directives):
            raise InvalidSettingError("'directives' must be a list of non-empty strings")

        return cls(
            name_key=_non_empty_str(reader, "name_key", "reader"),
            args_key=_non_empty_str(reader, "args_key", "reader"),
            expand_environment=_flag(reader, "expand_environment", "reader"),
            case_sensitive_names=_flag(selector, "case_sensitive_names", "selector"),
            tie_break=tie_break,
            default_module=default_module,
            directives=tuple(directives),
            raw=effective,
        )

# src/callbind/core/resolution/converter.py
"""Conversor canônico de argumentos: valor bruto (texto) → tipo do parâmetro.

Regras (v1), nesta ordem:
  1. `Optional[T]`: valor em branco → default registrado da capacidade T, se
     houver, senão None; caso contrário converte para T
  2. `str`, `object`, `Any`: o texto é atribuído diretamente
  3. `Enum`: membro por nome (exato, depois sem caixa) e, por fim, por valor
  4. tipos de valor (bool, int, float, Decimal, datetime, date, time,
     timedelta, Path, UUID): parsers textuais padrão
  5. tipos de referência (classes/capacidades):
       - em branco → default registrado da capacidade (ou construtor default
         se a classe for concreta)
       - referência de tipo → resolve, verifica atribuibilidade e instancia
         (nome simples só conta como referência com `default_module` configurado)
       - outro texto → default registrado da capacidade, se houver

Este módulo **não**:
  - mantém estado entre conversões
  - engole falhas de carregamento de tipo (nunca cai no default por erro)

Falhas de parse viram `ConversionError` com valor, tipo alvo e parâmetro.
"""

from __future__ import annotations

import inspect
import re
import typing
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from types import UnionType
from typing import Any, Callable, List, Optional, Tuple
from uuid import UUID

from ..exceptions import (
    CallBindException,
    ConversionError,
    TypeNotFoundError,
    TypeResolutionError,
    with_context,
)
from ..registry.capabilities import CapabilityRegistry
from ..types import type_name
from .type_resolver import TypeResolver, create_instance, is_type_reference, parse_type_reference

_STRING_TARGETS = (str, object)

Warn = Callable[[str], None]


# -----------------------------
# Helpers: valores em branco
# -----------------------------

def _is_blank(v: Optional[str]) -> bool:
    if v is None:
        return True
    if isinstance(v, str) and v.strip() == "":
        return True
    return False


def _unwrap_optional(target: Any) -> Tuple[Any, bool]:
    origin = typing.get_origin(target)
    if origin is typing.Union or origin is UnionType:
        args = [a for a in typing.get_args(target) if a is not type(None)]
        nullable = len(args) != len(typing.get_args(target))
        if nullable and len(args) == 1:
            return args[0], True
    return target, False


# -----------------------------
# Helpers: parsers de tipos de valor
# -----------------------------

def _parse_bool(raw: str, target: type) -> bool:
    s = raw.strip().lower()
    if s == "true":
        return True
    if s == "false":
        return False
    raise ValueError(f"'{raw}' is not a valid boolean")


def _parse_int(raw: str, target: type) -> int:
    return target(int(raw.strip()))


def _parse_float(raw: str, target: type) -> float:
    return target(float(raw.strip()))


def _parse_decimal(raw: str, target: type) -> Decimal:
    return target(raw.strip())


def _parse_datetime(raw: str, target: type) -> datetime:
    return target.fromisoformat(raw.strip())


def _parse_date(raw: str, target: type) -> date:
    return target.fromisoformat(raw.strip())


def _parse_time(raw: str, target: type) -> time:
    return target.fromisoformat(raw.strip())


_TIMESPAN_RE = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)


def _parse_timedelta(raw: str, target: type) -> timedelta:
    """`[-][d.]hh:mm[:ss[.fffffff]]`, ou um inteiro de dias."""
    s = raw.strip()
    if re.fullmatch(r"-?\d+", s):
        return timedelta(days=int(s))

    match = _TIMESPAN_RE.match(s)
    if match is None:
        raise ValueError(f"'{raw}' is not a valid time span")

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"'{raw}' is out of range for a time span")

    # fração em ticks de 100ns
    ticks = int((match.group("fraction") or "").ljust(7, "0"))
    value = timedelta(
        days=int(match.group("days") or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=ticks // 10,
    )
    return -value if match.group("sign") else value


def _parse_path(raw: str, target: type) -> PurePath:
    return target(raw)


def _parse_uuid(raw: str, target: type) -> UUID:
    return target(raw.strip())


# Ordem importa: bool antes de int, datetime antes de date.
_PARSERS: List[Tuple[type, Callable[[str, type], Any]]] = [
    (bool, _parse_bool),
    (int, _parse_int),
    (float, _parse_float),
    (Decimal, _parse_decimal),
    (datetime, _parse_datetime),
    (date, _parse_date),
    (time, _parse_time),
    (timedelta, _parse_timedelta),
    (PurePath, _parse_path),
    (UUID, _parse_uuid),
]


def _find_parser(target: Any) -> Optional[Callable[[str, type], Any]]:
    if not isinstance(target, type):
        return None
    for kind, parser in _PARSERS:
        if issubclass(target, kind):
            return parser
    return None


def _parse_enum(raw: str, target: type) -> Enum:
    s = raw.strip()
    members = target.__members__
    if s in members:
        return members[s]

    folded = s.casefold()
    for member_name, member in members.items():
        if member_name.casefold() == folded:
            return member

    for member in target:
        if str(member.value) == s:
            return member

    raise ValueError(f"'{raw}' is not a member of {target.__name__}")


# -----------------------------
# Helpers: tipos de referência
# -----------------------------

def _is_assignable(cls: type, target: type) -> bool:
    try:
        return issubclass(cls, target)
    except TypeError:
        # Protocol sem @runtime_checkable
        return False


def _default_instance(
    target: type,
    capabilities: Optional[CapabilityRegistry],
    raw_value: Optional[str],
) -> Any:
    if capabilities is not None and capabilities.has_default(target):
        return capabilities.create_default(target)

    if _is_abstract(target):
        raise ConversionError(
            message=f"No value supplied and no default registered for {type_name(target)}",
            details={"raw_value": raw_value},
            hint="Informe um tipo concreto ou registre um default em CapabilityRegistry",
        )
    return create_instance(target)


def _is_abstract(target: type) -> bool:
    return inspect.isabstract(target) or bool(getattr(target, "_is_protocol", False))


def _is_resolvable_reference(raw_value: str, type_resolver: TypeResolver) -> bool:
    if not is_type_reference(raw_value):
        return False
    name, qualifier = parse_type_reference(raw_value)
    # nome simples sem módulo default nem qualificador nunca resolve
    return "." in name or qualifier is not None or type_resolver.default_module is not None


def _convert_reference(
    raw_value: Optional[str],
    target: type,
    capabilities: Optional[CapabilityRegistry],
    type_resolver: TypeResolver,
    warn: Optional[Warn],
) -> Any:
    if _is_blank(raw_value):
        return _default_instance(target, capabilities, raw_value)

    if _is_resolvable_reference(raw_value, type_resolver):
        resolved = type_resolver.resolve(raw_value.strip())
        if not _is_assignable(resolved, target):
            raise ConversionError(
                message=f"Type {type_name(resolved)} is not assignable to {type_name(target)}",
                details={"raw_value": raw_value, "resolved_type": type_name(resolved)},
            )
        return create_instance(resolved)

    if capabilities is not None and capabilities.has_default(target):
        if warn is not None:
            warn(f"'{raw_value}' is not a type reference; using default {type_name(target)}")
        return capabilities.create_default(target)

    raise ConversionError(
        message=f"'{raw_value}' cannot be converted to {type_name(target)}",
        details={"raw_value": raw_value},
        hint="Informe uma referência de tipo como 'pacote.modulo.Classe'",
    )


# -----------------------------
# API
# -----------------------------

def convert_to_type(
    raw_value: Optional[str],
    target_type: Any,
    *,
    capabilities: Optional[CapabilityRegistry] = None,
    type_resolver: Optional[TypeResolver] = None,
    parameter: Optional[str] = None,
    method: Optional[str] = None,
    warn: Optional[Warn] = None,
) -> Any:
    """Converte um valor bruto em uma instância de `target_type`.

    Args:
        raw_value: texto da configuração (já com variáveis de ambiente expandidas).
        target_type: tipo declarado do parâmetro.
        capabilities: defaults de capacidades abstratas.
        type_resolver: resolvedor para referências de tipo (default: sem módulo default).
        parameter: nome do parâmetro (apenas para contexto de erro).
        method: nome do método (apenas para contexto de erro).
        warn: callback para sinais não fatais (ex.: default usado).

    Raises:
        ConversionError: Valor não pode ser convertido/atribuído ao tipo alvo.
        TypeNotFoundError: Referência de tipo inexistente.
        TypeResolutionError: Falha de carregamento/instanciação do tipo referenciado.
    """
    context = {
        "method": method,
        "parameter": parameter,
        "raw_value": raw_value,
        "target_type": type_name(target_type),
    }

    try:
        target, nullable = _unwrap_optional(target_type)
        if nullable and _is_blank(raw_value):
            if capabilities is not None and isinstance(target, type) and capabilities.has_default(target):
                return capabilities.create_default(target)
            return None

        if target is typing.Any or target in _STRING_TARGETS:
            return raw_value

        if isinstance(target, type) and issubclass(target, Enum):
            if raw_value is None:
                raise ValueError("no value supplied")
            return _parse_enum(raw_value, target)

        parser = _find_parser(target)
        if parser is not None:
            if raw_value is None:
                raise ValueError("no value supplied")
            return parser(raw_value, target)

        if isinstance(target, type):
            return _convert_reference(
                raw_value,
                target,
                capabilities,
                type_resolver or TypeResolver(),
                warn,
            )

    except (TypeNotFoundError, TypeResolutionError, ConversionError) as exc:
        raise with_context(exc, **context)
    except CallBindException:
        raise
    except (ValueError, TypeError, ArithmeticError) as exc:
        # InvalidOperation (Decimal) é ArithmeticError
        raise ConversionError(
            message=f"Cannot convert '{raw_value}' to {type_name(target_type)}: {exc}",
            details={k: v for k, v in context.items() if v is not None},
        ) from exc

    raise ConversionError(
        message=f"Unsupported target type {type_name(target_type)}",
        details={k: v for k, v in context.items() if v is not None},
    )


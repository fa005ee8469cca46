# tests/core/resolution/test_converter.py
"""
Testes do conversor de argumentos (convert_to_type).

Este módulo valida as regras de conversão, na ordem em que são aplicadas:
- alvos anuláveis (`Optional[T]`)
- alvos textuais (`str`, `object`, `Any`)
- enums (nome, nome sem caixa, valor)
- tipos de valor (bool, int, float, Decimal, datas, timedelta, Path, UUID)
- tipos de referência (capacidades e classes concretas)

Decisões arquiteturais:
    - Falhas de parse viram `ConversionError` com contexto completo
    - Falhas de carregamento de tipo nunca caem silenciosamente no default
    - Texto livre em uma capacidade usa o default e emite warning

Limites explícitos:
    - Não valida a resolução de referências em detalhe (ver test_type_resolver.py)
"""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from pathlib import Path, PurePath
from typing import Any, Optional
from uuid import UUID

import pytest

from callbind import CapabilityRegistry
from callbind.core.exceptions import ConversionError, TypeNotFoundError, TypeResolutionError
from callbind.core.resolution.converter import convert_to_type
from callbind.core.resolution.type_resolver import TypeResolver

from tests.fixtures.formatting import (
    JsonFormatter,
    Level,
    NotAFormatter,
    PlainTextFormatter,
    TemplateFormatter,
    TextFormatter,
)

FORMATTING = "tests.fixtures.formatting"


# -----------------------------
# Tipos de referência
# -----------------------------

def test_convert_to_type_with_concrete_reference_returns_that_type(capabilities):
    result = convert_to_type(f"{FORMATTING}.JsonFormatter", TextFormatter, capabilities=capabilities)
    assert type(result) is JsonFormatter


def test_qualified_reference_form(capabilities):
    result = convert_to_type(f"JsonFormatter, {FORMATTING}", TextFormatter, capabilities=capabilities)
    assert type(result) is JsonFormatter


def test_blank_value_uses_registered_default(capabilities):
    for raw in (None, "", "   "):
        assert type(convert_to_type(raw, TextFormatter, capabilities=capabilities)) is PlainTextFormatter


def test_blank_value_without_default_on_abstract_target_raises():
    with pytest.raises(ConversionError) as exc_info:
        convert_to_type("", TextFormatter, capabilities=CapabilityRegistry(), parameter="formatter")

    assert exc_info.value.details["parameter"] == "formatter"


def test_blank_value_on_concrete_target_uses_default_constructor():
    assert type(convert_to_type(None, JsonFormatter)) is JsonFormatter


def test_plain_text_on_capability_uses_default_and_warns(capabilities):
    warnings = []
    result = convert_to_type(
        "{Timestamp} {Message}",
        TextFormatter,
        capabilities=capabilities,
        warn=warnings.append,
    )

    assert type(result) is PlainTextFormatter
    assert len(warnings) == 1
    assert "{Timestamp} {Message}" in warnings[0]


def test_plain_text_without_default_raises():
    with pytest.raises(ConversionError):
        convert_to_type("{Timestamp} {Message}", TextFormatter)


def test_unassignable_reference_raises(capabilities):
    with pytest.raises(ConversionError) as exc_info:
        convert_to_type(f"{FORMATTING}.NotAFormatter", TextFormatter, capabilities=capabilities)

    assert exc_info.value.details["resolved_type"] == f"{FORMATTING}.NotAFormatter"
    assert exc_info.value.details["target_type"] == f"{FORMATTING}.TextFormatter"


def test_missing_type_is_not_replaced_by_default(capabilities):
    """Uma referência inexistente é erro, mesmo havendo default registrado."""
    with pytest.raises(TypeNotFoundError) as exc_info:
        convert_to_type(
            f"{FORMATTING}.Missing",
            TextFormatter,
            capabilities=capabilities,
            parameter="formatter",
            method="DummyRollingFile",
        )

    details = exc_info.value.details
    assert details["method"] == "DummyRollingFile"
    assert details["parameter"] == "formatter"
    assert details["raw_value"] == f"{FORMATTING}.Missing"


def test_reference_without_default_constructor_raises(capabilities):
    with pytest.raises(TypeResolutionError) as exc_info:
        convert_to_type(f"{FORMATTING}.TemplateFormatter", TextFormatter, capabilities=capabilities)

    assert "default constructor" in exc_info.value.message
    assert TemplateFormatter.__name__ in exc_info.value.message


def test_bare_name_uses_default_module(capabilities):
    resolver = TypeResolver(default_module=FORMATTING)
    result = convert_to_type("JsonFormatter", TextFormatter, capabilities=capabilities, type_resolver=resolver)
    assert type(result) is JsonFormatter


def test_bare_word_without_default_module_uses_capability_default(capabilities):
    """Sem `default_module` um nome simples nunca resolve; vale como texto livre."""
    warnings = []
    result = convert_to_type("compact", TextFormatter, capabilities=capabilities, warn=warnings.append)

    assert type(result) is PlainTextFormatter
    assert len(warnings) == 1
    assert "compact" in warnings[0]


def test_bare_word_with_default_module_must_resolve(capabilities):
    resolver = TypeResolver(default_module=FORMATTING)
    with pytest.raises(TypeNotFoundError):
        convert_to_type("compact", TextFormatter, capabilities=capabilities, type_resolver=resolver)


def test_concrete_target_accepts_reference_to_itself():
    result = convert_to_type(f"{FORMATTING}.NotAFormatter", NotAFormatter)
    assert type(result) is NotAFormatter


# -----------------------------
# Textuais e anuláveis
# -----------------------------

@pytest.mark.parametrize("target", [str, object, Any])
def test_string_targets_receive_raw_text(target):
    assert convert_to_type("  C:\\logs  ", target) == "  C:\\logs  "


def test_optional_blank_is_none():
    assert convert_to_type("", Optional[int]) is None
    assert convert_to_type(None, Optional[Level]) is None
    assert convert_to_type("5", Optional[int]) == 5


def test_optional_capability_blank_uses_registered_default(capabilities):
    assert type(convert_to_type("", Optional[TextFormatter], capabilities=capabilities)) is PlainTextFormatter
    assert type(convert_to_type(None, TextFormatter | None, capabilities=capabilities)) is PlainTextFormatter
    # sem default registrado continua None
    assert convert_to_type("", Optional[TextFormatter], capabilities=CapabilityRegistry()) is None


def test_pep604_optional():
    assert convert_to_type(" ", int | None) is None
    assert convert_to_type("7", int | None) == 7


# -----------------------------
# Enums
# -----------------------------

@pytest.mark.parametrize("raw", ["Error", "error", " ERROR ", "4"])
def test_enum_by_name_or_value(raw):
    assert convert_to_type(raw, Level) is Level.Error


def test_enum_invalid_member_raises():
    with pytest.raises(ConversionError) as exc_info:
        convert_to_type("Critical", Level, parameter="restrictedToMinimumLevel", method="LiterateConsole")

    details = exc_info.value.details
    assert details["raw_value"] == "Critical"
    assert details["parameter"] == "restrictedToMinimumLevel"
    assert details["method"] == "LiterateConsole"


# -----------------------------
# Tipos de valor
# -----------------------------

@pytest.mark.parametrize(
    "raw, target, expected",
    [
        ("true", bool, True),
        ("False", bool, False),
        (" 42 ", int, 42),
        ("-1", int, -1),
        ("0.5", float, 0.5),
        ("10.25", Decimal, Decimal("10.25")),
        ("2024-03-01", date, date(2024, 3, 1)),
        ("2024-03-01T10:30:00+00:00", datetime, datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)),
        ("10:30", time, time(10, 30)),
        ("00:00:02", timedelta, timedelta(seconds=2)),
        ("1.02:03:04.5", timedelta, timedelta(days=1, hours=2, minutes=3, seconds=4, milliseconds=500)),
        ("-00:01", timedelta, timedelta(minutes=-1)),
        ("3", timedelta, timedelta(days=3)),
        ("logs/app.txt", Path, Path("logs/app.txt")),
        ("logs/app.txt", PurePath, PurePath("logs/app.txt")),
        (
            "12345678-1234-5678-1234-567812345678",
            UUID,
            UUID("12345678-1234-5678-1234-567812345678"),
        ),
    ],
)
def test_value_types(raw, target, expected):
    assert convert_to_type(raw, target) == expected


@pytest.mark.parametrize(
    "raw, target",
    [
        ("yes", bool),
        ("1", bool),
        ("4.2", int),
        ("abc", float),
        ("ten", Decimal),
        ("2024-13-01", date),
        ("25:00:00", timedelta),
        ("not-a-uuid", UUID),
        (None, int),
    ],
)
def test_value_type_parse_failures(raw, target):
    with pytest.raises(ConversionError) as exc_info:
        convert_to_type(raw, target, parameter="p")

    assert exc_info.value.details["parameter"] == "p"
    assert exc_info.value.details["target_type"]


def test_unsupported_target_raises():
    with pytest.raises(ConversionError):
        convert_to_type("x", list[int])

# tests/core/resolution/test_selector.py
"""
Testes do seletor de sobrecargas (select_configuration_method).

Os testes asseguram que:
- argumentos desconhecidos desqualificam o candidato
- parâmetros obrigatórios ausentes desqualificam o candidato
- vence a sobrecarga que liga mais argumentos fornecidos
- empates seguem a política configurada (`fewest_parameters` ou `error`)
- nomes são comparados sem caixa por padrão

Invariantes:
    - Nunca existe fallback para "o primeiro que casar"
    - Falhas carregam método, chaves fornecidas e candidatos considerados
"""

import pytest

from callbind.core.exceptions import AmbiguousOrMissingMethodError
from callbind.core.resolution.selector import (
    TIE_BREAK_ERROR,
    bind_arguments,
    bound_count,
    is_eligible,
    select_configuration_method,
)
from callbind.core.types import CandidateSignature, ParameterSpec

from tests.fixtures.formatting import Level, TextFormatter


def _sig(name, *params):
    return CandidateSignature(name=name, parameters=tuple(params))


def _required(name, tp=str):
    return ParameterSpec(name=name, type=tp)


def _optional(name, default=None, tp=str):
    return ParameterSpec(name=name, type=tp, default=default)


def test_callable_methods_are_selected(method_registry):
    """Somente `pathFormat` fornecido → sobrecarga cujo 2º parâmetro é texto."""
    selected = select_configuration_method(
        method_registry.candidates(),
        "DummyRollingFile",
        {"pathFormat": "C:\\"},
    )
    assert selected.parameters[0].name == "pathFormat"
    assert selected.parameters[0].type is str


def test_methods_are_selected_based_on_count_of_matched_arguments(method_registry):
    """`pathFormat` + `formatter` → sobrecarga com a capacidade de formatação."""
    selected = select_configuration_method(
        method_registry.candidates(),
        "DummyRollingFile",
        {"pathFormat": "C:\\", "formatter": "SomeFormatter, SomeModule"},
    )
    assert selected.parameters[0].type is TextFormatter


def test_only_capability_key_selects_capability_overload():
    text = _sig("Sink", _optional("a"), _optional("output", tp=str))
    capability = _sig("Sink", _optional("a"), _optional("formatter", tp=TextFormatter))

    assert select_configuration_method([text, capability], "Sink", {"formatter": ""}) is capability
    assert select_configuration_method([text, capability], "Sink", {"output": ""}) is text


def test_unknown_argument_disqualifies_candidate():
    only = _sig("LiterateConsole", _optional("restrictedToMinimumLevel", Level.Verbose, Level))

    with pytest.raises(AmbiguousOrMissingMethodError) as exc_info:
        select_configuration_method([only], "LiterateConsole", {"restrictedToMinimumLvl": "Error"})

    err = exc_info.value
    assert "No overload of" in err.message
    assert err.details["method"] == "LiterateConsole"
    assert err.details["supplied_arguments"] == ["restrictedToMinimumLvl"]
    assert err.details["candidates"] == [only.describe()]


def test_missing_required_parameter_disqualifies_candidate():
    sig = _sig("File", _required("path"), _optional("buffered", False, bool))
    assert not is_eligible(sig, ["buffered"])
    assert is_eligible(sig, ["path"])


def test_unknown_method_name():
    with pytest.raises(AmbiguousOrMissingMethodError) as exc_info:
        select_configuration_method([_sig("Console")], "Seq", {})

    assert "No configuration method named" in exc_info.value.message
    assert exc_info.value.details["candidates"] == []


def test_name_matching_is_case_insensitive_by_default():
    console = _sig("LiterateConsole")
    assert select_configuration_method([console], "literateconsole", {}) is console

    with pytest.raises(AmbiguousOrMissingMethodError):
        select_configuration_method([console], "literateconsole", {}, case_sensitive=True)


def test_argument_keys_are_case_sensitive():
    sig = _sig("File", _optional("path"))
    with pytest.raises(AmbiguousOrMissingMethodError):
        select_configuration_method([sig], "File", {"Path": "x"})


def test_most_bound_parameters_wins():
    small = _sig("File", _required("path"))
    large = _sig("File", _required("path"), _optional("buffered", False, bool))

    assert select_configuration_method([small, large], "File", {"path": "x", "buffered": "true"}) is large


def test_tie_prefers_fewest_parameters():
    small = _sig("File", _required("path"))
    large = _sig("File", _required("path"), _optional("buffered", False, bool))

    assert select_configuration_method([large, small], "File", {"path": "x"}) is small


def test_tie_break_error_policy():
    small = _sig("File", _required("path"))
    large = _sig("File", _required("path"), _optional("buffered", False, bool))

    with pytest.raises(AmbiguousOrMissingMethodError) as exc_info:
        select_configuration_method([small, large], "File", {"path": "x"}, tie_break=TIE_BREAK_ERROR)

    assert "Ambiguous call to" in exc_info.value.message
    assert len(exc_info.value.details["candidates"]) == 2


def test_persistent_tie_is_ambiguous():
    a = _sig("File", _optional("path"), _optional("x"))
    b = _sig("File", _optional("path"), _optional("y"))

    with pytest.raises(AmbiguousOrMissingMethodError) as exc_info:
        select_configuration_method([a, b], "File", {"path": "p"})

    assert "Ambiguous" in exc_info.value.message


def test_unknown_tie_break_raises():
    with pytest.raises(ValueError):
        select_configuration_method([_sig("A")], "A", {}, tie_break="first")


def test_bound_count():
    sig = _sig("File", _required("path"), _optional("buffered"), _optional("shared"))
    assert bound_count(sig, ["path", "shared"]) == 2
    assert bound_count(sig, []) == 0


def test_bind_arguments_converts_supplied_and_keeps_defaults():
    sig = _sig("File", _required("path"), _optional("buffered", False, bool), _optional("shared", True, bool))
    seen = []

    def convert(raw, param):
        seen.append(param.name)
        return f"<{raw}>"

    args = bind_arguments(sig, {"shared": "false", "path": "x"}, convert)

    assert args == ("<x>", False, "<false>")
    # conversão na ordem dos parâmetros, não das chaves
    assert seen == ["path", "shared"]

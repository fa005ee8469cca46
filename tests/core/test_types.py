# tests/core/test_types.py
"""
Testes dos tipos canônicos (ParameterSpec, CandidateSignature, ResolvedCall).
"""

import pytest

from callbind import CallDescriptor, CandidateSignature, ParameterSpec, ResolvedCall
from callbind.core.exceptions import NotInvocableError

from tests.fixtures.formatting import Level, Sink


def test_parameter_spec_required_and_describe():
    assert ParameterSpec("path").required
    assert ParameterSpec("path").describe() == "path: str"

    level = ParameterSpec("level", Level, Level.Verbose)
    assert not level.required
    assert level.describe() == "level: tests.fixtures.formatting.Level = <Level.Verbose: 0>"


def test_signature_validation():
    with pytest.raises(ValueError):
        CandidateSignature(name="  ")

    with pytest.raises(ValueError):
        CandidateSignature(name="File", parameters=(ParameterSpec("path"), ParameterSpec("path", int)))


def test_signature_parameters_are_a_tuple():
    sig = CandidateSignature(name="File", parameters=[ParameterSpec("path")])
    assert sig.parameters == (ParameterSpec("path"),)
    assert sig.describe() == "File(path: str)"


def test_resolved_call_invoke_passes_leading_and_kwargs(method_registry):
    sig = method_registry.candidates("LiterateConsole")[0]
    call = ResolvedCall(signature=sig, arguments=(Level.Error,), descriptor=CallDescriptor("LiterateConsole"))
    sink = Sink()

    assert call.as_kwargs() == {"restrictedToMinimumLevel": Level.Error}
    assert call.invoke(sink) is sink
    assert sink.calls == [("literate_console", Level.Error)]


def test_resolved_call_without_target_is_not_invocable():
    call = ResolvedCall(signature=CandidateSignature(name="File"), arguments=())

    with pytest.raises(NotInvocableError) as exc_info:
        call.invoke()

    assert exc_info.value.details["method"] == "File"

# src/callbind/core/reader/reader.py
"""
Leitor canônico de chamadas configuradas.

Este módulo percorre uma seção de diretiva (ex.: `Serilog:WriteTo`) cujos
filhos diretos são entradas indexadas e produz:

    - `get_method_calls`     → lista ordenada de `CallDescriptor`
    - `resolve_call`         → `ResolvedCall` de um descriptor
    - `resolve_method_calls` → lista ordenada de `ResolvedCall`

Formato de uma entrada:
    - estruturada: `Name` (obrigatório) e `Args` (opcional, folhas textuais)
    - texto simples: a própria folha é o nome e não há argumentos
      (ex.: `WriteTo:0 = "LiterateConsole"`)

Decisões arquiteturais:
    - A ordem de saída é a ordem natural das entradas na árvore
    - Entradas com o mesmo nome geram descriptors distintos
    - Entrada sem nome utilizável é erro fatal (`MissingOperationName`)
    - Valores de argumento passam por `expand_environment_variables`
      antes de serem guardados no descriptor
    - Argumentos aninhados (não folha) são rejeitados

Invariantes:
    - N entradas válidas → exatamente N descriptors
    - Nenhum descriptor é mutado após criado

Limites explícitos:
    - Não lê arquivos de configuração
    - Não invoca as chamadas resolvidas
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..exceptions import CallBindException, ConfigurationError, MissingOperationName, with_context
from ..registry.capabilities import CapabilityRegistry
from ..resolution.converter import Warn, convert_to_type
from ..resolution.selector import TIE_BREAK_FEWEST_PARAMETERS, bind_arguments, select_configuration_method
from ..resolution.type_resolver import TypeResolver
from ..section import ConfigurationSection
from ..types import CallDescriptor, CandidateSignature, ParameterSpec, ResolvedCall
from .environment import expand_environment_variables


def _read_arguments(
    entry: ConfigurationSection,
    args_key: str,
    expand_environment: bool,
) -> Dict[str, Optional[str]]:
    arguments: Dict[str, Optional[str]] = {}
    for argument in entry.get_section(args_key).get_children():
        if not argument.is_leaf:
            raise ConfigurationError(
                message=f"Argument '{argument.key}' of '{entry.path}' is not a plain value",
                details={"entry": entry.path, "argument": argument.key},
                hint="Apenas argumentos textuais (folhas) são suportados",
            )
        value = argument.value
        arguments[argument.key] = expand_environment_variables(value) if expand_environment else value
    return arguments


def get_method_calls(
    section: ConfigurationSection,
    *,
    name_key: str = "Name",
    args_key: str = "Args",
    expand_environment: bool = True,
) -> List[CallDescriptor]:
    """
    Extrai as chamadas descritas pelos filhos diretos de `section`.

    Args:
        section: seção de diretiva cujos filhos são entradas indexadas.
        name_key: chave do nome da operação em cada entrada.
        args_key: chave da submapa de argumentos.
        expand_environment: aplica a expansão de `%NOME%` aos valores.

    Returns:
        List[CallDescriptor]: descriptors na ordem das entradas.

    Raises:
        MissingOperationName: entrada sem nome (ausente, vazio ou só espaços).
        ConfigurationError: argumento aninhado (não folha).
    """
    calls: List[CallDescriptor] = []

    for entry in section.get_children():
        if entry.is_leaf:
            name = entry.value
            arguments: Dict[str, Optional[str]] = {}
        else:
            name = entry[name_key]
            arguments = _read_arguments(entry, args_key, expand_environment)

        if name is None or not name.strip():
            raise MissingOperationName(
                message=f"The configuration entry '{entry.path}' has no '{name_key}'",
                details={"entry": entry.path, "name": name},
                hint=f"Informe '{entry.path}:{name_key}' com o nome da operação",
            )

        calls.append(CallDescriptor(name=name, arguments=arguments))

    return calls


def resolve_call(
    descriptor: CallDescriptor,
    candidates: Sequence[CandidateSignature],
    *,
    capabilities: Optional[CapabilityRegistry] = None,
    type_resolver: Optional[TypeResolver] = None,
    case_sensitive: bool = False,
    tie_break: str = TIE_BREAK_FEWEST_PARAMETERS,
    warn: Optional[Warn] = None,
) -> ResolvedCall:
    """Seleciona a sobrecarga de `descriptor` e converte seus argumentos."""
    signature = select_configuration_method(
        candidates,
        descriptor.name,
        descriptor.arguments,
        case_sensitive=case_sensitive,
        tie_break=tie_break,
    )

    def _convert(raw: Optional[str], param: ParameterSpec):
        return convert_to_type(
            raw,
            param.type,
            capabilities=capabilities,
            type_resolver=type_resolver,
            parameter=param.name,
            method=signature.name,
            warn=warn,
        )

    arguments = bind_arguments(signature, descriptor.arguments, _convert)
    return ResolvedCall(signature=signature, arguments=arguments, descriptor=descriptor)


def resolve_method_calls(
    section: ConfigurationSection,
    candidates: Sequence[CandidateSignature],
    *,
    capabilities: Optional[CapabilityRegistry] = None,
    type_resolver: Optional[TypeResolver] = None,
    case_sensitive: bool = False,
    tie_break: str = TIE_BREAK_FEWEST_PARAMETERS,
    name_key: str = "Name",
    args_key: str = "Args",
    expand_environment: bool = True,
    warn: Optional[Warn] = None,
) -> List[ResolvedCall]:
    """`get_method_calls` + `resolve_call` para cada entrada, na ordem da seção.

    O primeiro erro interrompe o processamento (sem sucesso parcial).
    """
    resolved: List[ResolvedCall] = []
    descriptors = get_method_calls(
        section,
        name_key=name_key,
        args_key=args_key,
        expand_environment=expand_environment,
    )
    for index, descriptor in enumerate(descriptors):
        try:
            call = resolve_call(
                descriptor,
                candidates,
                capabilities=capabilities,
                type_resolver=type_resolver,
                case_sensitive=case_sensitive,
                tie_break=tie_break,
                warn=warn,
            )
        except CallBindException as exc:
            with_context(exc, section=section.path, index=index)
            raise
        resolved.append(call)
    return resolved

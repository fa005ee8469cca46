# src/callbind/core/resolution/selector.py
"""
Seletor de sobrecargas.

Dado um grupo de assinaturas candidatas e o conjunto de argumentos
fornecidos (nome → valor bruto), escolhe a única sobrecarga que melhor
corresponde às chaves fornecidas.

Política de seleção (v1):
    1. Filtra candidatos pelo nome (sem caixa por padrão; configurável)
    2. Elegível = toda chave fornecida corresponde a um parâmetro declarado
       E todo parâmetro obrigatório foi fornecido
    3. Vence quem liga mais parâmetros a argumentos fornecidos
    4. Empate → menos parâmetros no total (`fewest_parameters`), ou erro
       direto (`error`)
    5. Nenhum elegível, ou empate persistente → `AmbiguousOrMissingMethodError`

Decisões arquiteturais:
    - Argumentos desconhecidos desqualificam o candidato (nomes com erro de
      digitação nunca são ignorados silenciosamente)
    - Chaves de argumento são comparadas com distinção de caixa
    - Nunca existe fallback para "o primeiro que casar"

Limites explícitos:
    - Não converte valores (ver `bind_arguments` + conversor)
    - Não consulta o registry diretamente: recebe a lista de candidatos
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import AmbiguousOrMissingMethodError
from ..types import CandidateSignature, ParameterSpec

TIE_BREAK_FEWEST_PARAMETERS = "fewest_parameters"
TIE_BREAK_ERROR = "error"
TIE_BREAKS = (TIE_BREAK_FEWEST_PARAMETERS, TIE_BREAK_ERROR)


def _name_matches(candidate: str, name: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return candidate == name
    return candidate.casefold() == name.casefold()


def is_eligible(signature: CandidateSignature, supplied_keys: Iterable[str]) -> bool:
    declared = set(signature.parameter_names)
    keys = set(supplied_keys)
    if not keys <= declared:
        return False
    return all(p.name in keys for p in signature.required_parameters)


def bound_count(signature: CandidateSignature, supplied_keys: Iterable[str]) -> int:
    keys = set(supplied_keys)
    return sum(1 for name in signature.parameter_names if name in keys)


def _failure(
    reason: str,
    name: str,
    supplied: Sequence[str],
    considered: Sequence[CandidateSignature],
) -> AmbiguousOrMissingMethodError:
    return AmbiguousOrMissingMethodError(
        message=f"{reason} '{name}' with arguments {list(supplied)}",
        details={
            "method": name,
            "supplied_arguments": list(supplied),
            "candidates": [c.describe() for c in considered],
        },
        hint="Confira o nome da operação e as chaves em Args contra as sobrecargas registradas",
    )


def select_configuration_method(
    candidates: Iterable[CandidateSignature],
    name: str,
    supplied_arguments: Mapping[str, Any],
    *,
    case_sensitive: bool = False,
    tie_break: str = TIE_BREAK_FEWEST_PARAMETERS,
) -> CandidateSignature:
    """
    Escolhe a sobrecarga de `name` que melhor corresponde a `supplied_arguments`.

    Args:
        candidates: assinaturas disponíveis (pode conter outros nomes).
        name: nome da operação pedida pela configuração.
        supplied_arguments: argumentos fornecidos (apenas as chaves importam).
        case_sensitive: compara nomes de operação com distinção de caixa.
        tie_break: `fewest_parameters` ou `error`.

    Returns:
        CandidateSignature: a única sobrecarga vencedora.

    Raises:
        AmbiguousOrMissingMethodError: nenhum candidato elegível ou empate.
        ValueError: `tie_break` desconhecido.
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"tie_break must be one of {list(TIE_BREAKS)}, got {tie_break!r}")

    supplied = list(supplied_arguments.keys())
    named = [c for c in candidates if _name_matches(c.name, name, case_sensitive)]
    eligible = [c for c in named if is_eligible(c, supplied)]

    if not eligible:
        reason = "No overload of" if named else "No configuration method named"
        raise _failure(reason, name, supplied, named)

    best = max(bound_count(c, supplied) for c in eligible)
    top = [c for c in eligible if bound_count(c, supplied) == best]

    if len(top) > 1 and tie_break == TIE_BREAK_FEWEST_PARAMETERS:
        fewest = min(len(c.parameters) for c in top)
        top = [c for c in top if len(c.parameters) == fewest]

    if len(top) > 1:
        raise _failure("Ambiguous call to", name, supplied, top)

    return top[0]


def bind_arguments(
    signature: CandidateSignature,
    supplied_arguments: Mapping[str, Optional[str]],
    convert: Callable[[Optional[str], ParameterSpec], Any],
) -> Tuple[Any, ...]:
    """Monta os argumentos posicionais da assinatura.

    Parâmetros fornecidos passam por `convert`; os demais ficam com o default
    declarado. Conversões ocorrem na ordem dos parâmetros e o primeiro erro
    interrompe a montagem.
    """
    values: List[Any] = []
    for param in signature.parameters:
        if param.name in supplied_arguments:
            values.append(convert(supplied_arguments[param.name], param))
        else:
            values.append(param.default)
    return tuple(values)

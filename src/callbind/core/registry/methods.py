# src/callbind/core/registry/methods.py
"""
Registro explícito de operações (sobrecargas) invocáveis via configuração.

Este módulo define o `MethodRegistry`, o ponto único de verdade para as
assinaturas que o seletor pode escolher. O registry é montado uma vez pelo
colaborador (provider) na inicialização; não há discovery dinâmico de
módulos nem reflexão durante a resolução.

Responsabilidades do módulo:
    - Registrar `CandidateSignature` explicitamente ou via decorator
    - Preservar a ordem de registro
    - Rejeitar sobrecargas duplicadas (mesmo nome e mesmos parâmetros)
    - Expor candidatos por nome para o seletor

Decisões arquiteturais:
    - Sobrecargas com o mesmo nome são permitidas e esperadas
    - Duplicidade estrutural é erro fatal no registro, não na resolução
    - `signature_from_callable` inspeciona anotações apenas no registro

Limites explícitos:
    - Não seleciona sobrecargas (isso é o seletor)
    - Não converte argumentos
    - Não importa módulos de plugins
"""

from __future__ import annotations

import inspect
import typing
from typing import Any, Callable, Iterable, Iterator, List, Optional

from ..types import REQUIRED, CandidateSignature, ParameterSpec


class DuplicateSignatureError(ValueError):
    """
    Exceção levantada quando uma sobrecarga idêntica já está registrada.

    Duas assinaturas são idênticas quando possuem o mesmo nome (sem
    distinção de caixa, salvo `MethodRegistry(case_sensitive=True)`) e a mesma
    sequência de nomes de parâmetros.
    Manter as duas tornaria toda chamada a elas ambígua.
    """


def signature_from_callable(
    func: Callable[..., Any],
    *,
    name: Optional[str] = None,
    skip: int = 0,
) -> CandidateSignature:
    """Constrói uma `CandidateSignature` a partir das anotações de `func`.

    Args:
        func: callable da operação.
        name: nome público da operação (default: `func.__name__`).
        skip: quantidade de parâmetros iniciais fornecidos pelo chamador em
            `ResolvedCall.invoke` (ex.: o receptor), fora da configuração.

    Parâmetros sem anotação são tratados como `str`; `*args`/`**kwargs` são ignorados.
    """
    sig = inspect.signature(func)
    try:
        hints = typing.get_type_hints(func)
    except Exception:  # noqa: BLE001
        hints = dict(getattr(func, "__annotations__", {}) or {})

    declared = [
        p
        for p in sig.parameters.values()
        if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    params: List[ParameterSpec] = []
    for p in declared[skip:]:
        params.append(
            ParameterSpec(
                name=p.name,
                type=hints.get(p.name, str),
                default=REQUIRED if p.default is inspect.Parameter.empty else p.default,
            )
        )

    return CandidateSignature(
        name=name or func.__name__,
        parameters=tuple(params),
        target=func,
        description=(inspect.getdoc(func) or "").split("\n", 1)[0],
    )


class MethodRegistry:
    """Registry determinístico de `CandidateSignature`.

    Extensibilidade é explícita: novas operações entram via `register()` ou
    `@registry.operation()`.

    `case_sensitive` define como nomes são comparados na checagem de
    duplicidade; deve acompanhar `selector.case_sensitive_names`.
    """

    def __init__(
        self,
        signatures: Optional[Iterable[CandidateSignature]] = None,
        *,
        case_sensitive: bool = False,
    ):
        self.case_sensitive = case_sensitive
        self._signatures: List[CandidateSignature] = []
        if signatures:
            for s in signatures:
                self.register(s)

    def register(self, signature: CandidateSignature) -> CandidateSignature:
        if not isinstance(signature, CandidateSignature):
            raise TypeError("signature must be a CandidateSignature")

        shape = signature.parameter_names
        for existing in self._signatures:
            if self._same_name(existing.name, signature.name) and existing.parameter_names == shape:
                raise DuplicateSignatureError(f"Duplicate signature: {signature.describe()}")

        self._signatures.append(signature)
        return signature

    def _same_name(self, a: str, b: str) -> bool:
        if self.case_sensitive:
            return a == b
        return a.casefold() == b.casefold()

    def operation(
        self,
        name: Optional[str] = None,
        *,
        skip: int = 0,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator que registra a função decorada como uma sobrecarga."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(signature_from_callable(func, name=name, skip=skip))
            return func

        return decorator

    def candidates(self, name: Optional[str] = None, *, case_sensitive: bool = False) -> List[CandidateSignature]:
        """Sobrecargas registradas, em ordem de registro (filtradas por nome se informado)."""
        if name is None:
            return list(self._signatures)
        if case_sensitive:
            return [s for s in self._signatures if s.name == name]
        folded = name.casefold()
        return [s for s in self._signatures if s.name.casefold() == folded]

    def names(self) -> List[str]:
        seen: List[str] = []
        for s in self._signatures:
            if s.name not in seen:
                seen.append(s.name)
        return seen

    def __len__(self) -> int:
        return len(self._signatures)

    def __iter__(self) -> Iterator[CandidateSignature]:
        return iter(list(self._signatures))

# src/callbind/core/types.py
"""
Tipos canônicos do CallBind.

Este módulo define as estruturas que atravessam o fluxo de resolução:

    entrada de configuração → CallDescriptor → ResolvedCall

Componentes principais:
    - ParameterSpec      → parâmetro declarado (nome, tipo, default)
    - CandidateSignature → uma sobrecarga de uma operação nomeada
    - CallDescriptor     → extração de uma entrada (nome + argumentos brutos)
    - ResolvedCall       → assinatura escolhida + argumentos já tipados

Princípios fundamentais:
    - Todas as estruturas são imutáveis
    - Tipos não dependem do reader, do seletor ou do conversor
    - `REQUIRED` é o sentinela explícito de "sem default"

Invariantes:
    - Nomes de parâmetros são únicos dentro de uma assinatura
    - `ResolvedCall.arguments` é posicionalmente alinhado a `signature.parameters`

Limites explícitos:
    - Não seleciona sobrecargas
    - Não converte valores
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .exceptions import NotInvocableError


class _Required:
    """Sentinela de parâmetro sem valor default."""

    _instance: Optional["_Required"] = None

    def __new__(cls) -> "_Required":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Any = _Required()


def type_name(tp: Any) -> str:
    """Nome legível de um tipo alvo (usado em mensagens e logs)."""
    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp).replace("typing.", "")


@dataclass(frozen=True)
class ParameterSpec:
    """Parâmetro declarado de uma sobrecarga."""

    name: str
    type: Any = str
    default: Any = REQUIRED

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    def describe(self) -> str:
        text = f"{self.name}: {type_name(self.type)}"
        if not self.required:
            text += f" = {self.default!r}"
        return text


@dataclass(frozen=True)
class CandidateSignature:
    """
    Uma sobrecarga de uma operação nomeada exposta pelo registry.

    Campos:
        - name: nome da operação (ex.: `LiterateConsole`)
        - parameters: parâmetros declarados, em ordem
        - target: callable invocado por `ResolvedCall.invoke` (opcional)
        - description: texto livre para diagnóstico

    Invariantes:
        - `name` é uma string não vazia
        - nomes de parâmetros são únicos
    """

    name: str
    parameters: Tuple[ParameterSpec, ...] = ()
    target: Optional[Callable[..., Any]] = field(default=None, compare=False)
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("signature.name must be a non-empty string")

        params = tuple(self.parameters)
        names = [p.name for p in params]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate parameter names in '{self.name}': {duplicates}")

        object.__setattr__(self, "parameters", params)

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.parameters)

    @property
    def required_parameters(self) -> Tuple[ParameterSpec, ...]:
        return tuple(p for p in self.parameters if p.required)

    def parameter(self, name: str) -> ParameterSpec:
        for p in self.parameters:
            if p.name == name:
                return p
        raise KeyError(name)

    def describe(self) -> str:
        return f"{self.name}({', '.join(p.describe() for p in self.parameters)})"


@dataclass(frozen=True)
class CallDescriptor:
    """Extração de uma entrada de configuração, antes da resolução.

    `arguments` preserva a ordem da árvore; chaves são case-sensitive.
    """

    name: str
    arguments: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedCall:
    """Assinatura escolhida + argumentos tipados, pronta para invocação."""

    signature: CandidateSignature
    arguments: Tuple[Any, ...]
    descriptor: Optional[CallDescriptor] = None

    @property
    def name(self) -> str:
        return self.signature.name

    def as_kwargs(self) -> Dict[str, Any]:
        return dict(zip(self.signature.parameter_names, self.arguments))

    def invoke(self, *leading: Any) -> Any:
        """Invoca `signature.target(*leading, **kwargs)`.

        `leading` cobre parâmetros fornecidos pelo chamador e não pela
        configuração (ex.: o objeto de configuração receptor).
        """
        target = self.signature.target
        if target is None:
            raise NotInvocableError(
                message=f"Signature '{self.signature.describe()}' has no invocation target",
                details={"method": self.signature.name},
                hint="Registre a assinatura com `target=` ou via MethodRegistry.operation",
            )
        return target(*leading, **self.as_kwargs())

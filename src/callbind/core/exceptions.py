"""
CallBind — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do CallBind.

Objetivo:
- Permitir que reader, seletor, conversor e resolvedor levantem falhas semânticas
- Facilitar o mapeamento determinístico para `ErrorPayload`
- Evitar ValueError/RuntimeError genéricos nos pontos críticos da resolução

Regras:
- Toda exceção carrega contexto estruturado em `details`
  (método, argumento, valor bruto, tipo alvo, quando conhecidos)
- Nenhuma exceção é tratada internamente: o primeiro erro é propagado ao chamador
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class CallBindException(Exception):
    """Base class para exceções internas do CallBind.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - `hint` indica onde corrigir (config, registry, tipo referenciado)
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Leitura da configuração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConfigurationError(CallBindException):
    """Entrada de configuração estruturalmente inválida."""


@dataclass(eq=False)
class MissingOperationName(ConfigurationError):
    """Entrada sem `Name` utilizável (ausente, vazio ou só espaços)."""


# ---------------------------------------------------------------------------
# Seleção de método
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class AmbiguousOrMissingMethodError(CallBindException):
    """Nenhuma sobrecarga elegível, ou mais de uma empatada no critério de seleção."""


@dataclass(eq=False)
class NotInvocableError(CallBindException):
    """A assinatura resolvida não possui callable associado."""


# ---------------------------------------------------------------------------
# Conversão e tipos
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConversionError(CallBindException):
    """Valor bruto não pode ser convertido/atribuído ao tipo do parâmetro."""


@dataclass(eq=False)
class TypeNotFoundError(CallBindException):
    """Referência de tipo não corresponde a nenhum tipo carregável."""


@dataclass(eq=False)
class TypeResolutionError(CallBindException):
    """Falha ao carregar ou instanciar um tipo referenciado."""


def with_context(exc: CallBindException, **context: Any) -> CallBindException:
    """Acrescenta contexto a `exc.details` sem sobrescrever chaves já presentes."""
    for key, value in context.items():
        if value is not None:
            exc.details.setdefault(key, value)
    return exc

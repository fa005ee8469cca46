"""
CallBind — Canonical Error Structures (v1)

Este módulo define o payload canônico de erros do CallBind.

Erros de resolução fazem parte do contrato operacional do despachante e
devem ser:
- explícitos
- serializáveis
- acionáveis (indicam método, argumento, valor e tipo envolvidos)

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .exceptions import (
    AmbiguousOrMissingMethodError,
    CallBindException,
    ConfigurationError,
    ConversionError,
    MissingOperationName,
    NotInvocableError,
    TypeNotFoundError,
    TypeResolutionError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do CallBind.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Leitura da configuração
MISSING_OPERATION_NAME = "MISSING_OPERATION_NAME"
INVALID_CONFIGURATION_ENTRY = "INVALID_CONFIGURATION_ENTRY"

# Seleção / invocação
METHOD_NOT_RESOLVED = "METHOD_NOT_RESOLVED"
METHOD_NOT_INVOCABLE = "METHOD_NOT_INVOCABLE"

# Conversão / tipos
CONVERSION_FAILED = "CONVERSION_FAILED"
TYPE_NOT_FOUND = "TYPE_NOT_FOUND"
TYPE_RESOLUTION_FAILED = "TYPE_RESOLUTION_FAILED"

# Fallback
DISPATCH_ERROR = "DISPATCH_ERROR"


# Ordem importa: subclasses antes das bases.
_CODES = (
    (MissingOperationName, MISSING_OPERATION_NAME),
    (ConfigurationError, INVALID_CONFIGURATION_ENTRY),
    (AmbiguousOrMissingMethodError, METHOD_NOT_RESOLVED),
    (NotInvocableError, METHOD_NOT_INVOCABLE),
    (ConversionError, CONVERSION_FAILED),
    (TypeNotFoundError, TYPE_NOT_FOUND),
    (TypeResolutionError, TYPE_RESOLUTION_FAILED),
)


def error_code_for(exc: BaseException) -> str:
    for exc_type, code in _CODES:
        if isinstance(exc, exc_type):
            return code
    return DISPATCH_ERROR


def exception_to_payload(exc: BaseException) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - CallBindException: já vem com message/details/hint.
    - Outras exceções: encapsular como DISPATCH_ERROR sem expor stack trace.
    """
    if isinstance(exc, CallBindException):
        return ErrorPayload(
            type=error_code_for(exc),
            message=exc.message or "Erro de resolução",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return ErrorPayload(
        type=DISPATCH_ERROR,
        message=str(exc) or "Erro inesperado durante a resolução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o registry de operações e a configuração da entrada",
    )

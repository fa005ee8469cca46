# src/callbind/core/resolution/type_resolver.py
"""
Resolvedor de referências de tipo.

Transforma uma referência textual de tipo em uma classe carregável e
materializa uma instância default dela.

Formas aceitas:
    - `pacote.modulo.Classe`
    - `pacote.modulo.Externa.Interna` (classes aninhadas)
    - `pacote.modulo.Classe, pacote` (qualificador: módulo que deve carregar primeiro)
    - `Classe, pacote.modulo` (nome simples procurado no módulo qualificador)
    - `Classe` (nome simples, procurado no módulo default configurado)

Decisões arquiteturais:
    - O carregamento usa `importlib.import_module`, do prefixo mais longo ao mais curto
    - Módulo/atributo inexistente → `TypeNotFoundError`
    - Falha ao executar o módulo, símbolo que não é classe ou construção
      impossível → `TypeResolutionError`
    - Nenhum cache entre chamadas (o cache de `sys.modules` é do interpretador)

Efeito colateral documentado:
    - Importar um módulo executa seu código de nível superior

Limites explícitos:
    - Não varre pacotes nem entry points
    - Não resolve tipos genéricos parametrizados
"""

from __future__ import annotations

import importlib
import inspect
import re
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Optional, Tuple

from ..exceptions import CallBindException, TypeNotFoundError, TypeResolutionError
from ..types import type_name

_DOTTED = r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*"
_REFERENCE_RE = re.compile(rf"^\s*(?P<name>{_DOTTED})\s*(?:,\s*(?P<qualifier>{_DOTTED})\s*)?$")

_MISSING = object()


def is_type_reference(value: Optional[str]) -> bool:
    """Indica se `value` tem a forma sintática de uma referência de tipo."""
    return bool(value) and _REFERENCE_RE.match(value) is not None


def parse_type_reference(reference: str) -> Tuple[str, Optional[str]]:
    """Separa `nome[, qualificador]`.

    Raises:
        TypeNotFoundError: Se `reference` não for sintaticamente uma referência de tipo.
    """
    match = _REFERENCE_RE.match(reference or "")
    if match is None:
        raise TypeNotFoundError(
            message=f"'{reference}' is not a type reference",
            details={"type_reference": reference},
            hint="Use 'pacote.modulo.Classe' ou 'pacote.modulo.Classe, pacote'",
        )
    return match.group("name"), match.group("qualifier")


def _is_missing_module(exc: ModuleNotFoundError, module_name: str) -> bool:
    missing = exc.name or ""
    return bool(missing) and (module_name == missing or module_name.startswith(missing + "."))


def _import(module_name: str, reference: str) -> Optional[ModuleType]:
    """Importa `module_name`; None quando o próprio módulo não existe."""
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        if _is_missing_module(exc, module_name):
            return None
        raise TypeResolutionError(
            message=f"Failed to load module '{module_name}' for type '{reference}': {exc}",
            details={"type_reference": reference, "module": module_name, "missing": exc.name},
        ) from exc
    except Exception as exc:
        raise TypeResolutionError(
            message=f"Failed to load module '{module_name}' for type '{reference}': {exc}",
            details={
                "type_reference": reference,
                "module": module_name,
                "exception_class": exc.__class__.__name__,
            },
        ) from exc


def _lookup(module: Any, attributes: Tuple[str, ...]) -> Any:
    obj = module
    for attr in attributes:
        obj = getattr(obj, attr, _MISSING)
        if obj is _MISSING:
            return _MISSING
    return obj


def _not_found(reference: str, searched: str) -> TypeNotFoundError:
    return TypeNotFoundError(
        message=f"Type '{reference}' was not found",
        details={"type_reference": reference, "searched": searched},
        hint="Verifique o nome qualificado do tipo e se o módulo está instalado",
    )


def _as_class(obj: Any, reference: str) -> type:
    if not isinstance(obj, type):
        raise TypeResolutionError(
            message=f"'{reference}' resolved to {type(obj).__name__}, not a class",
            details={"type_reference": reference, "resolved": type(obj).__name__},
        )
    return obj


def resolve_type(reference: str, *, default_module: Optional[str] = None) -> type:
    """Resolve `reference` em uma classe carregável.

    Raises:
        TypeNotFoundError: Se nenhum tipo corresponder à referência.
        TypeResolutionError: Se o carregamento falhar ou o símbolo não for uma classe.
    """
    name, qualifier = parse_type_reference(reference)

    if qualifier is not None:
        module = _import(qualifier, reference)
        if module is None:
            raise _not_found(reference, qualifier)
        # nome simples com qualificador: procura no próprio qualificador
        if "." not in name:
            obj = _lookup(module, (name,))
            if obj is _MISSING:
                raise _not_found(reference, f"{qualifier}.{name}")
            return _as_class(obj, reference)

    if "." not in name:
        if not default_module:
            raise TypeNotFoundError(
                message=f"Type '{reference}' is not qualified and no default module is configured",
                details={"type_reference": reference},
                hint="Qualifique o tipo ou configure 'types.default_module'",
            )
        name = f"{default_module}.{name}"

    parts = tuple(name.split("."))
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        module = _import(module_name, reference)
        if module is None:
            continue
        obj = _lookup(module, parts[split:])
        if obj is _MISSING:
            raise _not_found(reference, name)
        return _as_class(obj, reference)

    raise _not_found(reference, name)


def create_instance(cls: type) -> Any:
    """Instancia `cls` com o construtor default.

    Exige que todos os parâmetros do construtor tenham default.

    Raises:
        TypeResolutionError: Se a classe for abstrata, não tiver construtor
            default ou a construção falhar.
    """
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        raise TypeResolutionError(
            message=f"{type_name(cls)} is abstract and cannot be instantiated",
            details={"type": type_name(cls)},
        )

    try:
        signature: Optional[inspect.Signature] = inspect.signature(cls)
    except (TypeError, ValueError):
        signature = None

    if signature is not None:
        required = [
            p.name
            for p in signature.parameters.values()
            if p.default is inspect.Parameter.empty
            and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        if required:
            raise TypeResolutionError(
                message=f"A default constructor was not found on {type_name(cls)}",
                details={"type": type_name(cls), "required_parameters": required},
            )

    try:
        return cls()
    except CallBindException:
        raise
    except Exception as exc:
        raise TypeResolutionError(
            message=f"Failed to construct {type_name(cls)}: {exc}",
            details={"type": type_name(cls), "exception_class": exc.__class__.__name__},
        ) from exc


@dataclass(frozen=True)
class TypeResolver:
    """Resolvedor configurado com o módulo default para nomes simples."""

    default_module: Optional[str] = None

    def resolve(self, reference: str) -> type:
        return resolve_type(reference, default_module=self.default_module)

    def instantiate(self, reference: str) -> Any:
        return create_instance(self.resolve(reference))

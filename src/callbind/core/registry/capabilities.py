# src/callbind/core/registry/capabilities.py
"""
CapabilityRegistry v1 — defaults convencionais de capacidades abstratas.

Uma *capacidade* é um tipo abstrato (ABC, interface) usado como tipo de
parâmetro, por exemplo um formatador de texto. Quando a configuração não
informa uma implementação concreta, o conversor usa a fábrica default
registrada aqui ("use o formatador padrão, a menos que sobrescrito").

A busca é pela capacidade exata: não há inferência por herança nem
reflexão sobre membros estáticos do tipo.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..exceptions import CallBindException, TypeResolutionError
from ..types import type_name

Factory = Callable[[], Any]


class CapabilityRegistry:
    """Mapa explícito capacidade → fábrica default."""

    def __init__(self, defaults: Optional[Dict[type, Factory]] = None):
        self._defaults: Dict[type, Factory] = {}
        if defaults:
            for capability, factory in defaults.items():
                self.register(capability, factory)

    def register(self, capability: type, factory: Factory) -> None:
        if not isinstance(capability, type):
            raise TypeError("capability must be a class")
        if not callable(factory):
            raise TypeError("factory must be callable")
        if capability in self._defaults:
            raise ValueError(f"capability already registered: {type_name(capability)}")
        self._defaults[capability] = factory

    def default(self, capability: type) -> Callable[[Any], Any]:
        """Decorator: registra a classe (ou função) decorada como default de `capability`."""

        def decorator(factory: Any) -> Any:
            self.register(capability, factory)
            return factory

        return decorator

    def has_default(self, capability: Any) -> bool:
        return capability in self._defaults

    def default_for(self, capability: Any) -> Optional[Factory]:
        return self._defaults.get(capability)

    def list_capabilities(self) -> List[type]:
        return list(self._defaults)

    def create_default(self, capability: type) -> Any:
        """Instancia o default registrado e verifica que ele implementa a capacidade.

        Raises:
            KeyError: Se nenhuma fábrica estiver registrada para `capability`.
            TypeResolutionError: Se a fábrica falhar ou produzir instância incompatível.
        """
        factory = self._defaults.get(capability)
        if factory is None:
            raise KeyError(f"no default registered for capability: {type_name(capability)}")

        try:
            instance = factory()
        except CallBindException:
            raise
        except Exception as exc:
            raise TypeResolutionError(
                message=f"Default factory for {type_name(capability)} failed: {exc}",
                details={"capability": type_name(capability), "exception_class": exc.__class__.__name__},
            ) from exc

        if not isinstance(instance, capability):
            raise TypeResolutionError(
                message=(
                    f"Default factory for {type_name(capability)} produced "
                    f"{type_name(type(instance))}, which does not implement it"
                ),
                details={"capability": type_name(capability), "produced": type_name(type(instance))},
            )
        return instance

# src/callbind/core/registry/__init__.py
"""
Registros explícitos consumidos pela resolução.

- **methods**
  - `MethodRegistry`: sobrecargas nomeadas expostas pelo provider
  - `signature_from_callable`: assinatura a partir das anotações de uma função

- **capabilities**
  - `CapabilityRegistry`: fábrica default por capacidade abstrata

Ambos são montados uma vez na inicialização e tratados como imutáveis
durante a resolução.
"""
from .capabilities import CapabilityRegistry
from .methods import DuplicateSignatureError, MethodRegistry, signature_from_callable

__all__ = [
    "CapabilityRegistry",
    "DuplicateSignatureError",
    "MethodRegistry",
    "signature_from_callable",
]

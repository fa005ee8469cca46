# src/callbind/core/config/__init__.py
"""
Camada de configuração do próprio CallBind.

Este pacote carrega, mescla e valida os *settings* do despachante, não a
configuração da aplicação que descreve as chamadas (essa chega pronta como
`ConfigurationSection`).

Os settings controlam:
    - nomes das chaves de entrada (`Name`, `Args`)
    - expansão de variáveis de ambiente
    - política de comparação de nomes e de desempate do seletor
    - módulo padrão para nomes de tipo simples
    - seções de diretiva resolvidas em lote (`WriteTo`, `Enrich`, ...)

Princípios fundamentais:
    - Settings são declarativos (YAML ou JSON)
    - Overrides locais são sempre explícitos
    - A mesma entrada sempre produz os mesmos settings

Limites explícitos:
    - Não lê a árvore de chamadas da aplicação
    - Não executa resolução
"""
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_settings_hash
from .loader import DEFAULT_SETTINGS, load_settings
from .merge import deep_merge
from .settings import DispatcherSettings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingError",
    "UnsupportedConfigFormatError",
    "compute_settings_hash",
    "DEFAULT_SETTINGS",
    "load_settings",
    "deep_merge",
    "DispatcherSettings",
]

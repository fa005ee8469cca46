# tests/conftest.py
"""
Fixtures compartilhados para testes do CallBind.

Este módulo define fixtures reutilizáveis que fornecem:
- árvores de configuração mínimas e determinísticas (`Serilog:WriteTo:...`)
- registry de operações e de capacidades do provider fictício
- settings do despachante em YAML (defaults + local)
- contexto de execução controlado (DispatchContext)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Árvores são construídas a partir de caminhos planos, como no provider real
    - O provider fictício vive em `tests/fixtures/formatting.py`

Invariantes:
    - Nenhuma fixture invoca chamadas resolvidas
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Settings do despachante
# =====================================================

@pytest.fixture
def project_like_settings_defaults_yaml() -> str:
    """
    YAML de settings padrão semelhante ao `callbind.defaults.yaml` de um projeto.

    Usado por:
        - Testes do loader de settings
        - Testes de deep-merge (defaults + local)

    Returns:
        str: Conteúdo YAML representando settings padrão.
    """

    return """\
reader:
  name_key: Name
  args_key: Args
selector:
  tie_break: fewest_parameters
types:
  default_module: tests.fixtures.formatting
directives:
  - WriteTo
  - Enrich
"""


@pytest.fixture
def project_like_settings_local_yaml() -> str:
    """
    YAML de overrides locais (apenas o que muda em relação aos defaults).

    Returns:
        str: Conteúdo YAML representando settings locais.
    """

    return """\
selector:
  case_sensitive_names: true
directives:
  - WriteTo
"""


# =====================================================
# Árvores de configuração
# =====================================================

@pytest.fixture
def literate_console_config():
    """Duas entradas `LiterateConsole` com níveis distintos, fora de ordem no input."""
    from callbind import ConfigurationSection

    return ConfigurationSection.from_flat(
        {
            "Serilog:WriteTo:2:Name": "LiterateConsole",
            "Serilog:WriteTo:2:Args:restrictedToMinimumLevel": "Error",
            "Serilog:WriteTo:1:Name": "LiterateConsole",
            "Serilog:WriteTo:1:Args:restrictedToMinimumLevel": "Information",
        }
    )


@pytest.fixture
def full_logging_config():
    """Configuração com WriteTo, Enrich (texto simples) e uma diretiva desconhecida."""
    from callbind import ConfigurationSection

    return ConfigurationSection.from_mapping(
        {
            "Serilog": {
                "WriteTo": [
                    {"Name": "LiterateConsole", "Args": {"restrictedToMinimumLevel": "Warning"}},
                    {
                        "Name": "DummyRollingFile",
                        "Args": {
                            "formatter": "tests.fixtures.formatting.JsonFormatter",
                            "pathFormat": "%TEMP%\\log-{Date}.txt",
                        },
                    },
                ],
                "Enrich": ["WithMachineName"],
                "MinimumLevel": "Debug",
            }
        }
    )


# =====================================================
# Provider fictício (registry + capacidades)
# =====================================================

@pytest.fixture
def method_registry():
    from tests.fixtures.formatting import build_registry

    return build_registry()


@pytest.fixture
def capabilities():
    from tests.fixtures.formatting import build_capabilities

    return build_capabilities()


@pytest.fixture
def dummy_ctx():
    """
    DispatchContext determinístico (id e timestamp fixos) para testes de logging.

    Returns:
        DispatchContext
    """
    from callbind.core.context import DispatchContext

    return DispatchContext(
        dispatch_id="test-dispatch",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        settings={},
        meta={},
    )

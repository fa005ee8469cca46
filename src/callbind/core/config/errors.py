# src/callbind/core/config/errors.py
"""
Exceções canônicas da camada de settings do CallBind.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, merge e validação dos settings do despachante.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de settings herdam de `ConfigError`
    - Nenhuma exceção aqui representa falha de resolução de chamada
      (essas vivem em `callbind.core.exceptions`)
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados aos settings do CallBind.

    Esta hierarquia permite:
        - captura genérica de erros de settings
        - distinção clara entre falhas de settings e falhas de resolução
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de defaults explicitamente informado
    não é encontrado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de settings não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz dos settings não é um `dict`.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"selector": {"tie_break": "fewest_parameters"}}
        - override: {"selector": "error"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """
    Exceção levantada quando um setting possui valor fora do domínio aceito
    (ex.: `selector.tie_break` desconhecido, `reader.name_key` vazio).
    """

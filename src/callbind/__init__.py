# src/callbind/__init__.py
"""
CallBind — despachante de métodos orientado a configuração.

Este pacote raiz define o namespace público do CallBind, uma biblioteca que
lê uma árvore de configuração ordenada descrevendo chamadas nomeadas
(ex.: `Serilog:WriteTo:0:Name`) com argumentos textuais, escolhe a
sobrecarga correta entre as operações registradas por um provider e
converte cada argumento textual no tipo declarado do parâmetro.

Princípios centrais:
    - A seleção de sobrecarga é determinística (nunca "primeiro que casar")
    - Conversões são explícitas e falham com contexto acionável
    - Operações e defaults de capacidades são registrados explicitamente
    - Variáveis de ambiente (`%NOME%`) são expandidas antes da conversão

Arquitetura em alto nível:
    - core.section    → árvore de configuração ordenada (somente leitura)
    - core.reader     → extração de chamadas e expansão de ambiente
    - core.resolution → seleção de sobrecarga, conversão e resolução de tipos
    - core.registry   → registro explícito de operações e capacidades
    - core.config     → configuração do próprio despachante (YAML/JSON)

Limites explícitos:
    - Não lê arquivos de configuração da aplicação (JSON/XML/env layering)
    - Não executa chamadas contra sinks reais
    - Não descobre módulos além de interpretar um nome de tipo
"""
# src/callbind/__init__.py
from .core.dispatcher import Dispatcher
from .core.registry import CapabilityRegistry, MethodRegistry
from .core.section import ConfigurationSection
from .core.types import CallDescriptor, CandidateSignature, ParameterSpec, ResolvedCall

__all__ = [
    "Dispatcher",
    "CapabilityRegistry",
    "MethodRegistry",
    "ConfigurationSection",
    "CallDescriptor",
    "CandidateSignature",
    "ParameterSpec",
    "ResolvedCall",
]

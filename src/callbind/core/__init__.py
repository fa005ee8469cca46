# src/callbind/core/__init__.py
"""
Core do CallBind.

Este pacote contém a implementação canônica do motor de resolução de
chamadas configuradas: leitura da árvore de configuração, seleção de
sobrecargas, conversão de argumentos e resolução de tipos.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado global (cada resolução lê apenas suas entradas)
    - orientado a contratos explícitos

Componentes principais:
    - section     → árvore de configuração ordenada
    - reader      → `get_method_calls` e expansão de variáveis de ambiente
    - resolution  → seletor de métodos, conversor de argumentos, resolvedor de tipos
    - registry    → `MethodRegistry` e `CapabilityRegistry`
    - config      → settings do despachante (load, merge, hashing)
    - dispatcher  → fachada que orquestra a resolução e registra eventos

Princípios fundamentais:
    - Nenhuma decisão silenciosa: empates e falhas são erros explícitos
    - O primeiro erro interrompe a entrada em processamento
    - Efeitos colaterais (import de módulos) são restritos ao resolvedor de tipos

Limites explícitos:
    - Não executa as chamadas resolvidas contra sinks reais
    - Não valida semântica de negócio das operações invocadas

Este pacote existe como a fonte de verdade operacional do CallBind.
"""

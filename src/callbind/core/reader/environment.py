# src/callbind/core/reader/environment.py
"""
Expansão de variáveis de ambiente no formato `%NOME%`.

Cada token `%NOME%` é substituído por `os.environ["NOME"]`. Variáveis
indefinidas ficam como estão (`%NOME%` permanece no texto), como faz a
expansão nativa do sistema: o `%` de fechamento de um token não resolvido
pode abrir o próximo (`%X%TEMP%` → `%X` + valor de TEMP). Não há expansão
aninhada, valores default nem regras de escape.

A consulta passa por `os.environ`: sem distinção de caixa no Windows e com
distinção nos demais sistemas.
"""

import os
from typing import List, Mapping, Optional


def expand_environment_variables(
    value: Optional[str],
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    if value is None:
        return None
    env = os.environ if environ is None else environ

    out: List[str] = []
    pos = 0
    while True:
        start = value.find("%", pos)
        end = value.find("%", start + 1) if start != -1 else -1
        if end == -1:
            out.append(value[pos:])
            break

        out.append(value[pos:start])
        name = value[start + 1:end]
        resolved = env.get(name) if name else None
        if resolved is None:
            # token não resolvido: o % de fechamento segue disponível
            out.append(value[start:end])
            pos = end
        else:
            out.append(resolved)
            pos = end + 1

    return "".join(out)

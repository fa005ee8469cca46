# src/callbind/core/config/hashing.py
"""
Hash canônico dos settings efetivos.

O hash é registrado no `DispatchContext` para que duas resoluções possam ser
comparadas: mesmos settings → mesmo hash, independentemente da ordem das chaves.
"""

import hashlib
import json
from typing import Any, Dict


def compute_settings_hash(settings: Dict[str, Any]) -> str:
    """
    Calcula o SHA-256 da serialização JSON canônica dos settings.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(settings, dict):
        raise TypeError(
            f"Settings para hashing devem ser dict, recebido: {type(settings).__name__}"
        )

    canonical_json = json.dumps(
        settings,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

# src/callbind/core/context.py
"""
Contexto de uma execução do despachante.

Este módulo define o `DispatchContext`, o ponto central de observabilidade
de uma resolução: identidade da execução, settings efetivos, eventos de log
estruturados e warnings por entrada.

Decisões arquiteturais:
    - Logs não são strings livres, mas eventos estruturados (dicts)
    - Warnings são sinais não fatais e não interrompem a resolução
    - O contexto é de uma única execução; nada é global

Invariantes:
    - Todo evento contém `dispatch_id`, `entry`, `level`, `message` e `timestamp`
    - Warnings são indexados pela entrada que os produziu

Limites explícitos:
    - Não resolve chamadas
    - Não persiste eventos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4


@dataclass
class DispatchContext:
    """Contexto de log e warnings de uma execução do despachante."""

    dispatch_id: str
    created_at: datetime
    settings: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(cls, settings: Optional[Dict[str, Any]] = None, **meta: Any) -> "DispatchContext":
        return cls(
            dispatch_id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
            settings=dict(settings or {}),
            meta=dict(meta),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------

    def log(self, *, entry: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "dispatch_id": self.dispatch_id,
            "entry": entry,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, entry: str, message: str) -> None:
        if entry not in self.warnings:
            self.warnings[entry] = []
        self.warnings[entry].append(message)

    def events_for(self, entry: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["entry"] == entry]

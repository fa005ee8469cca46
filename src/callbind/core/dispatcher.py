# src/callbind/core/dispatcher.py
"""
Despachante canônico do CallBind (reader + seletor + conversor).

O `Dispatcher` orquestra a resolução de uma ou mais seções de diretiva
usando os settings efetivos, e registra cada passo no `DispatchContext`:

    - `section.read`    → quantidade de entradas lidas
    - `entry.resolved`  → sobrecarga escolhida e chaves ligadas
    - `entry.failed`    → `ErrorPayload` da falha (antes de propagar)
    - warnings          → ex.: default de capacidade usado no lugar de texto livre

Decisões arquiteturais:
    - O primeiro erro interrompe a resolução e é propagado ao chamador
    - Nenhuma chamada resolvida é invocada aqui
    - O registry e os defaults de capacidades são apenas lidos
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .config.hashing import compute_settings_hash
from .config.loader import load_settings
from .config.settings import DispatcherSettings
from .context import DispatchContext
from .errors import exception_to_payload
from .exceptions import CallBindException, with_context
from .reader.reader import get_method_calls, resolve_call
from .registry.capabilities import CapabilityRegistry
from .registry.methods import MethodRegistry
from .resolution.converter import Warn
from .resolution.type_resolver import TypeResolver
from .section import ConfigurationSection
from .types import ResolvedCall


class Dispatcher:
    """Fachada de resolução de chamadas configuradas."""

    def __init__(
        self,
        *,
        registry: MethodRegistry,
        capabilities: Optional[CapabilityRegistry] = None,
        settings: Optional[DispatcherSettings] = None,
        ctx: Optional[DispatchContext] = None,
    ):
        self.registry = registry
        self.capabilities = capabilities or CapabilityRegistry()
        self.settings = settings or DispatcherSettings.from_dict()
        self.type_resolver = TypeResolver(default_module=self.settings.default_module)

        if ctx is None:
            ctx = DispatchContext.new(
                self.settings.raw,
                settings_hash=compute_settings_hash(self.settings.raw),
            )
        self.ctx = ctx

    @classmethod
    def from_settings_files(
        cls,
        *,
        registry: MethodRegistry,
        capabilities: Optional[CapabilityRegistry] = None,
        defaults_path: Optional[str] = None,
        local_path: Optional[str] = None,
    ) -> "Dispatcher":
        raw = load_settings(defaults_path=defaults_path, local_path=local_path)
        return cls(
            registry=registry,
            capabilities=capabilities,
            settings=DispatcherSettings.from_dict(raw),
        )

    # ------------------------------------------------------------------
    # Rastreamento
    # ------------------------------------------------------------------

    def _warner(self, entry: str) -> Warn:
        def warn(message: str) -> None:
            self.ctx.add_warning(entry=entry, message=message)
            self.ctx.log(entry=entry, level="warning", message=message)

        return warn

    def _log_failure(self, entry: str, exc: CallBindException) -> None:
        payload = exception_to_payload(exc)
        self.ctx.log(
            entry=entry,
            level="error",
            message="entry.failed",
            error=payload.to_dict(),
        )

    # ------------------------------------------------------------------
    # Resolução
    # ------------------------------------------------------------------

    def read(self, section: ConfigurationSection):
        """Apenas extrai os `CallDescriptor` de `section` (sem resolver)."""
        try:
            descriptors = get_method_calls(
                section,
                name_key=self.settings.name_key,
                args_key=self.settings.args_key,
                expand_environment=self.settings.expand_environment,
            )
        except CallBindException as exc:
            self._log_failure(str(exc.details.get("entry") or section.path), exc)
            raise

        self.ctx.log(entry=section.path, level="info", message="section.read", calls=len(descriptors))
        return descriptors

    def resolve(self, section: ConfigurationSection) -> List[ResolvedCall]:
        """Resolve todas as entradas de `section`, na ordem da árvore."""
        descriptors = self.read(section)
        entries = [child.path for child in section.get_children()]
        candidates = self.registry.candidates()

        resolved: List[ResolvedCall] = []
        for entry, descriptor in zip(entries, descriptors):
            try:
                call = resolve_call(
                    descriptor,
                    candidates,
                    capabilities=self.capabilities,
                    type_resolver=self.type_resolver,
                    case_sensitive=self.settings.case_sensitive_names,
                    tie_break=self.settings.tie_break,
                    warn=self._warner(entry),
                )
            except CallBindException as exc:
                with_context(exc, entry=entry)
                self._log_failure(entry, exc)
                raise

            self.ctx.log(
                entry=entry,
                level="info",
                message="entry.resolved",
                method=call.name,
                signature=call.signature.describe(),
                arguments=list(descriptor.arguments),
            )
            resolved.append(call)

        return resolved

    def resolve_directives(self, root: ConfigurationSection) -> Dict[str, List[ResolvedCall]]:
        """Resolve cada seção de diretiva configurada (`WriteTo`, `Enrich`, ...).

        Diretivas ausentes em `root` são ignoradas; a ordem do resultado segue
        `settings.directives`.
        """
        out: Dict[str, List[ResolvedCall]] = {}
        for directive in self.settings.directives:
            section = root.get_section(directive)
            if not section.exists():
                continue
            out[directive] = self.resolve(section)
        return out

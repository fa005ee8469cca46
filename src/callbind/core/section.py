# src/callbind/core/section.py
"""
Árvore de configuração ordenada e somente leitura.

Este módulo define `ConfigurationSection`, a representação em memória da
configuração já materializada pela aplicação (JSON, variáveis de ambiente,
dicionários). O CallBind nunca lê formatos de arquivo: recebe a árvore pronta.

Cada nó possui:
    - key: o último segmento do caminho (ex.: `Name`)
    - path: caminho completo separado por `:` (ex.: `Serilog:WriteTo:1:Name`)
    - value: valor textual da folha, ou None
    - filhos ordenados

Ordenação natural dos filhos:
    - chaves numéricas primeiro, em ordem numérica (`"2"` antes de `"10"`)
    - demais chaves depois, em ordem ordinal sem distinção de caixa

Decisões arquiteturais:
    - Comparação de chaves é case-insensitive (convenção da árvore)
    - A grafia da primeira ocorrência de uma chave é preservada
    - `get_section` nunca retorna None: seções ausentes são vazias

Invariantes:
    - Uma seção nunca é mutada após construída
    - A mesma entrada sempre produz a mesma ordem de filhos

Limites explícitos:
    - Não faz parse de JSON/XML/YAML
    - Não aplica layering entre múltiplas fontes
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

KEY_DELIMITER = ":"


def _natural_key(key: str) -> Tuple[int, int, str]:
    if key.isascii() and key.isdigit():
        return (0, int(key), "")
    return (1, 0, key.casefold())


def _join(parent_path: str, key: str) -> str:
    return f"{parent_path}{KEY_DELIMITER}{key}" if parent_path else key


class _Node:
    __slots__ = ("key", "value", "children")

    def __init__(self, key: str) -> None:
        self.key = key
        self.value: Optional[str] = None
        self.children: Dict[str, _Node] = {}

    def child(self, key: str) -> "_Node":
        folded = key.casefold()
        if folded not in self.children:
            self.children[folded] = _Node(key)
        return self.children[folded]

    def freeze(self, path: str) -> "ConfigurationSection":
        ordered = sorted(self.children.values(), key=lambda n: _natural_key(n.key))
        return ConfigurationSection(
            key=self.key,
            path=path,
            value=self.value,
            children=tuple(n.freeze(_join(path, n.key)) for n in ordered),
        )


def _scalar_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(value: Any, path: str, out: Dict[str, Optional[str]]) -> None:
    if isinstance(value, Mapping):
        for key, child in value.items():
            _flatten(child, _join(path, str(key)), out)
    elif isinstance(value, (list, tuple)):
        for index, child in enumerate(value):
            _flatten(child, _join(path, str(index)), out)
    elif path:
        out[path] = _scalar_text(value)


@dataclass(frozen=True)
class ConfigurationSection:
    """Nó imutável da árvore de configuração."""

    key: str = ""
    path: str = ""
    value: Optional[str] = None
    children: Tuple["ConfigurationSection", ...] = ()

    # -----------------------------
    # Construção
    # -----------------------------

    @classmethod
    def from_flat(cls, data: Mapping[str, Optional[str]]) -> "ConfigurationSection":
        """Constrói a raiz a partir de caminhos `a:b:c` → valor textual.

        Um valor None cria a chave sem valor (útil para representar `Name: null`).
        """
        root = _Node("")
        for raw_path, value in data.items():
            segments = str(raw_path).split(KEY_DELIMITER)
            if not raw_path or any(not s for s in segments):
                raise ValueError(f"Invalid configuration path: {raw_path!r}")
            node = root
            for segment in segments:
                node = node.child(segment)
            node.value = _scalar_text(value)
        return root.freeze("")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConfigurationSection":
        """Constrói a raiz a partir de dicts/listas aninhados.

        Listas viram filhos indexados `0..n-1`; booleanos viram `true`/`false`.
        """
        flat: Dict[str, Optional[str]] = {}
        _flatten(data, "", flat)
        return cls.from_flat(flat)

    # -----------------------------
    # Navegação
    # -----------------------------

    def get_children(self) -> List["ConfigurationSection"]:
        return list(self.children)

    def get_child(self, key: str) -> Optional["ConfigurationSection"]:
        folded = key.casefold()
        for child in self.children:
            if child.key.casefold() == folded:
                return child
        return None

    def get_section(self, path: str) -> "ConfigurationSection":
        node: Optional[ConfigurationSection] = self
        current = self.path
        for segment in path.split(KEY_DELIMITER):
            current = _join(current, segment)
            node = node.get_child(segment) if node is not None else None
        if node is None:
            return ConfigurationSection(key=path.split(KEY_DELIMITER)[-1], path=current)
        return node

    def exists(self) -> bool:
        return self.value is not None or bool(self.children)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __getitem__(self, path: str) -> Optional[str]:
        return self.get_section(path).value

    def __iter__(self) -> Iterator["ConfigurationSection"]:
        return iter(self.children)


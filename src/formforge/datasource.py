"""Dotted-path data sources."""

from collections.abc import Mapping, MutableMapping
from typing import Any

from formforge.errors import DataSourceError
from formforge.types import DataSource


class PathDataSource:
    """Reads and writes dotted paths over nested mappings and objects.

    Each path segment is looked up as a mapping key when the current node
    is a mapping, otherwise as an attribute. Missing segments read as None.

    Example:
        source = PathDataSource({"name": {"first": "Ada"}})
        source.get("name.first")  # "Ada"
        source.set("name.last", "Lovelace")
    """

    def __init__(self, root: Any = None):
        self.root = {} if root is None else root

    @staticmethod
    def _child(node: Any, segment: str) -> Any:
        if isinstance(node, Mapping):
            return node.get(segment)
        return getattr(node, segment, None)

    def get(self, path: str) -> Any:
        node = self.root
        for segment in path.split("."):
            if node is None:
                return None
            node = self._child(node, segment)
        return node

    def set(self, path: str, value: Any) -> None:
        *parents, leaf = path.split(".")
        node = self.root
        walked: list[str] = []
        for segment in parents:
            walked.append(segment)
            child = self._child(node, segment)
            if child is None:
                child = {}
                self._assign(node, segment, child, walked)
            node = child
        walked.append(leaf)
        self._assign(node, leaf, value, walked)

    @staticmethod
    def _assign(node: Any, segment: str, value: Any, walked: list[str]) -> None:
        if isinstance(node, MutableMapping):
            node[segment] = value
            return
        if isinstance(node, Mapping):
            raise DataSourceError(
                f"Cannot set '{'.'.join(walked)}': parent is a {type(node).__name__}"
            )
        try:
            setattr(node, segment, value)
        except AttributeError as exc:
            raise DataSourceError(f"Cannot set '{'.'.join(walked)}': {exc}") from exc


def as_data_source(source: Any) -> DataSource:
    """Return ``source`` when it already is a DataSource, else wrap it."""
    if source is not None and not isinstance(source, Mapping) and isinstance(source, DataSource):
        return source
    return PathDataSource(source)

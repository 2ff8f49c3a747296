"""An insertion-ordered mapping with explicit key ordering operations."""

from __future__ import annotations

import functools
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

import yaml

K = TypeVar("K")
V = TypeVar("V")


def _copy_value(value: Any) -> Any:
    copier = getattr(value, "deep_copy", None)
    return copier() if callable(copier) else value


def _short_tag(tag: str) -> str:
    prefix = "tag:yaml.org,2002:"
    return "!!" + tag[len(prefix):] if tag.startswith(prefix) else tag


class OrderedMap(Generic[K, V]):
    """A mapping that keeps an explicit, mutable order of its keys."""

    def __init__(self, items: Optional[Mapping[K, V] | Iterable[Tuple[K, V]]] = None) -> None:
        self._keys: list[K] = []
        self._data: dict[K, V] = {}
        if items is not None:
            pairs = items.items() if isinstance(items, Mapping) else items
            for key, value in pairs:
                self.set(key, value)

    @classmethod
    def from_map(cls, mapping: Mapping[K, V]) -> "OrderedMap[K, V]":
        """Build a map holding the entries of ``mapping`` in its iteration order."""
        return cls(mapping)

    @classmethod
    def from_map_with_order(cls, mapping: Mapping[K, V], order: Iterable[K]) -> "OrderedMap[K, V]":
        """Build a map whose keys follow ``order``, which must match the mapping's keys."""
        order = list(order)
        if len(mapping) != len(order):
            raise ValueError("length of map and order must be equal")
        if any(key not in order for key in mapping):
            raise ValueError("order keys must match map keys")
        om: OrderedMap[K, V] = cls()
        om._data = dict(mapping)
        om._keys = order
        return om

    @classmethod
    def from_yaml(cls, text: str) -> "OrderedMap[Any, Any]":
        """Parse a YAML mapping, keeping the order of its keys."""
        node = yaml.compose(text, Loader=yaml.SafeLoader)
        om: OrderedMap[Any, Any] = cls()
        if node is None:
            return om
        if not isinstance(node, yaml.MappingNode):
            raise ValueError(
                f"yaml: line {node.start_mark.line + 1}: cannot unmarshal "
                f"{_short_tag(node.tag)} into variables"
            )
        loader = yaml.SafeLoader("")
        try:
            for key_node, value_node in node.value:
                om.set(
                    loader.construct_object(key_node, deep=True),
                    loader.construct_object(value_node, deep=True),
                )
        finally:
            loader.dispose()
        return om

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._keys))

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMap):
            return NotImplemented
        return self._keys == other._keys and self._data == other._data

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"OrderedMap({{{body}}})"

    def set(self, key: K, value: V) -> None:
        """Set ``key`` to ``value``; new keys go to the end of the order."""
        if key not in self._data:
            self._keys.append(key)
        self._data[key] = value

    def get(self, key: K, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default`` when absent."""
        return self._data.get(key, default)

    def exists(self, key: K) -> bool:
        return key in self._data

    def sort(self) -> None:
        """Sort the keys in their natural order."""
        self._keys.sort()

    def sort_func(self, compare: Callable[[K, K], int]) -> None:
        """Sort the keys with a three-way comparison function."""
        self._keys.sort(key=functools.cmp_to_key(compare))

    def keys(self) -> list[K]:
        return list(self._keys)

    def values(self) -> list[V]:
        return [self._data[key] for key in self._keys]

    def items(self) -> Iterator[Tuple[K, V]]:
        """Yield key/value pairs in order."""
        for key in list(self._keys):
            yield key, self._data[key]

    def merge(self, other: "OrderedMap[K, V]" | Mapping[K, V]) -> None:
        """Set every entry of ``other`` on this map, in ``other``'s order."""
        for key, value in other.items():
            self.set(key, value)

    def deep_copy(self) -> "OrderedMap[K, V]":
        """Return a copy; values providing ``deep_copy`` are copied too."""
        om: OrderedMap[K, V] = type(self)()
        om._keys = list(self._keys)
        om._data = {key: _copy_value(value) for key, value in self._data.items()}
        return om
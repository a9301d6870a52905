"""
unitfmt Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import Any, TypeVar, Generic

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")


class BiDirectionalMap(Mapping[K, V], Generic[K, V]):
    """
    A read-only bidirectional map with Mapping-compatible API on the forward direction.

    - Forward direction (key -> value) implements the stdlib Mapping protocol:
      __getitem__, __iter__, __len__, keys(), values(), items(), get().
      Membership (x in bimap) applies to KEYS only, like dict.
    - Reverse direction (value -> key) available via get_key(value) and has_value(value).
    - Enforces uniqueness of both keys and values (both must be hashable).
    - Contents are fixed at construction, so instances are safe to share as module-level tables.
    """

    __slots__ = ("_forward_map", "_backward_map")

    def __init__(self, initial: Mapping[K, V] | Iterable[tuple[K, V]] | None = None) -> None:
        self._forward_map: dict[K, V] = {}
        self._backward_map: dict[V, K] = {}
        if initial:
            iterable = initial.items() if isinstance(initial, Mapping) else initial
            for key, value in iterable:
                self._add(key, value)

    # ----- Mapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._forward_map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    # ----- Mapping helpers (typed views) -----

    def keys(self) -> KeysView[K]:
        return self._forward_map.keys()

    def values(self) -> ValuesView[V]:
        return self._forward_map.values()

    def items(self) -> ItemsView[K, V]:
        return self._forward_map.items()

    def get(self, key: K, default: V | None = None) -> V | None:
        return self._forward_map.get(key, default)

    # ----- Bidirectional operations -----

    def get_key(self, value: V) -> K:
        """Lookup key by value."""
        return self._backward_map[value]

    def has_value(self, value: V) -> bool:
        """True if value exists in reverse map."""
        return value in self._backward_map

    def sorted_keys(self) -> tuple[K, ...]:
        """Keys in ascending order, e.g. exponents of a prefix table from smallest to largest."""
        return tuple(sorted(self._forward_map))

    # ----- Construction -----

    def _add(self, key: K, value: V) -> None:
        """
        Add a key-value pair during construction; both key and value must be unique.

        Raises:
            ValueError if key already exists or value already exists (mapped from a different key).
        """
        if key in self._forward_map:
            raise ValueError(f"Key {key!r} already exists (maps to {self._forward_map[key]!r})")
        if value in self._backward_map:
            raise ValueError(f"Value {value!r} already exists (mapped from {self._backward_map[value]!r})")
        self._forward_map[key] = value
        self._backward_map[value] = key

    # ----- Equality and representation -----

    def __repr__(self) -> str:
        return f"BiDirectionalMap({self._forward_map!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return dict(self._forward_map.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._forward_map.items()))

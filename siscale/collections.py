"""
SIScale Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import TypeVar, Generic

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")


class BiDirectionalMap(Mapping[K, V], Generic[K, V]):
    """
    An immutable bidirectional map with Mapping-compatible API on the forward direction.

    - Forward direction (key -> value) implements the stdlib Mapping protocol:
      __getitem__, __iter__, __len__, keys(), values(), items(), get().
      Membership (x in bimap) applies to KEYS only, like dict.
    - Reverse direction (value -> key) available via get_key(value) and has_value(value).
    - Enforces uniqueness of both keys and values (both must be hashable).
    - Populated once at construction, there are no mutation methods.
    """

    __slots__ = ("_forward_map", "_backward_map")

    def __init__(self, initial: Mapping[K, V] | Iterable[tuple[K, V]] | None = None) -> None:
        self._forward_map: dict[K, V] = {}
        self._backward_map: dict[V, K] = {}
        pairs = initial.items() if isinstance(initial, Mapping) else (initial or ())
        for key, value in pairs:
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

    # ----- Representation -----

    def __repr__(self) -> str:
        return f"BiDirectionalMap({self._forward_map!r})"

"""
Tostring Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import ItemsView, Iterable, Iterator, KeysView, Mapping, ValuesView
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name


# Classes --------------------------------------------------------------------------------------------------------------


class EntryStore(Mapping[str, Any]):
    """
    Ordered tag -> value store backing a to-string helper.

    - Implements the stdlib Mapping protocol: __getitem__, __iter__, __len__,
      keys(), values(), items(), get().
    - put() inserts or overwrites; an overwritten tag keeps its first position.
    - There is no removal operation.
    - Not safe for concurrent mutation.
    """

    def __init__(self, initial: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None) -> None:
        self._entries: dict[str, Any] = {}
        if initial:
            self.put_all(initial)

    # ----- Mapping required methods -----

    def __getitem__(self, tag: str) -> Any:
        return self._entries[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ----- Mapping helpers (typed views) -----

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def values(self) -> ValuesView[Any]:
        return self._entries.values()

    def items(self) -> ItemsView[str, Any]:
        return self._entries.items()

    def get(self, tag: str, default: Any = None) -> Any:
        return self._entries.get(tag, default)

    def entries(self) -> ItemsView[str, Any]:
        """Live, restartable view of (tag, value) pairs in insertion order."""
        return self._entries.items()

    # ----- Mutations -----

    def put(self, tag: str, value: Any) -> None:
        """
        Bind value to tag.

        Raises:
            TypeError: If tag is not a str.
        """
        if not isinstance(tag, str):
            raise TypeError(f"tag must be a str, got {class_name(tag)}: {tag!r}")
        self._entries[tag] = value

    def put_all(self, other: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Bulk put() in the iteration order of other."""
        iterable = other.items() if isinstance(other, Mapping) else other
        for tag, value in iterable:
            self.put(tag, value)

    # ----- Equality and representation -----

    def __repr__(self) -> str:
        return f"EntryStore({self._entries!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return list(self._entries.items()) == list(other.items())
        return NotImplemented

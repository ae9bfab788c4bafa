"""Immutable point-in-time view of every slot."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pyslots.state.policy import same_value


class Snapshot(Mapping[str, Any]):
    """Read-only mapping from slot key to value.

    A snapshot is never changed after construction.  Writers derive a new
    one with :meth:`with_changes`, so anybody still holding the previous
    snapshot keeps seeing the previous values.  Slot values themselves are
    shared by reference between consecutive snapshots.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Snapshot({self._data!r})"

    def with_changes(self, changes: Mapping[str, Any]) -> Snapshot:
        """Return a new snapshot with *changes* written over this one."""
        data = dict(self._data)
        data.update(changes)
        return Snapshot(data)

    def changed_keys(self, other: Mapping[str, Any]) -> list[str]:
        """Keys (in this snapshot's order) whose value differs in *other*."""
        changed: list[str] = []
        for key, value in self._data.items():
            if key not in other or not same_value(value, other[key]):
                changed.append(key)
        return changed

    def to_dict(self) -> dict[str, Any]:
        """Shallow ``dict`` copy."""
        return dict(self._data)

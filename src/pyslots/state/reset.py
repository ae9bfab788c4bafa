"""Reset engine: restore slots to the baseline snapshot."""

from __future__ import annotations

from collections.abc import Iterable

from pyslots.state.events import MutationKind
from pyslots.state.store import SnapshotStore


class ResetEngine:
    """Restores one slot, several slots or every slot to the baseline.

    Restored values are deep copies of the baseline, except where the live
    value already equals it, in which case the live object is kept and no
    change is reported.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def reset_one(self, key: str) -> list[str]:
        value = self._store.baseline_value(key)
        return self._store.merge({key: value}, cause=MutationKind.RESET_ONE)

    def reset_many(self, keys: Iterable[str]) -> list[str]:
        if isinstance(keys, str):
            keys = (keys,)
        patch = {key: self._store.baseline_value(key) for key in dict.fromkeys(keys)}
        return self._store.merge(patch, cause=MutationKind.RESET_MANY)

    def reset_all(self) -> list[str]:
        full = {key: self._store.baseline_value(key) for key in self._store.keys}
        return self._store.replace(full, cause=MutationKind.RESET_ALL)

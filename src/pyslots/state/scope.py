"""Scoped accessor: one slot's live value paired with a bound setter."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from pyslots.state.binding import SelectorBinding
from pyslots.state.events import MutationKind
from pyslots.state.store import SnapshotStore

ValueCallback = Callable[[Any], None]


class ScopedAccessor:
    """Reactive read of a single slot plus a setter for that slot.

    Unpacks like a pair::

        counter, set_counter = container.scope("counter")
        set_counter(lambda prev: prev + 1)

    The setter treats any callable as an updater of the previous value.  A
    slot that stores callables should be written with :meth:`assign`.
    """

    def __init__(self, store: SnapshotStore, key: str, on_change: ValueCallback | None = None) -> None:
        self._store = store
        self._key = store.require_key(key)
        self._on_change = on_change
        self._binding = SelectorBinding(store, (key,), self._deliver)

    def __repr__(self) -> str:
        return f"<ScopedAccessor key={self._key!r} value={self.value!r}>"

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.set

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Any:
        return self._binding[self._key]

    @property
    def binding(self) -> SelectorBinding:
        return self._binding

    def set(self, value: Any) -> list[str]:
        """Write a literal value, or ``value(previous)`` when *value* is callable."""
        if callable(value):
            value = value(self._store.read()[self._key])
        return self.assign(value)

    def assign(self, value: Any) -> list[str]:
        """Write *value* as-is, even if it is callable."""
        return self._store.merge({self._key: value}, cause=MutationKind.SCOPED_SET)

    def close(self) -> None:
        self._binding.close()

    def __enter__(self) -> ScopedAccessor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _deliver(self, values: dict[str, Any]) -> None:
        if self._on_change is not None:
            self._on_change(values[self._key])

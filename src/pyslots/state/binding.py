"""Selector bindings: reactive reads of a fixed set of slots."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pyslots.state.events import MutationKind
from pyslots.state.notifier import Subscription
from pyslots.state.policy import shallow_equal
from pyslots.state.snapshot import Snapshot
from pyslots.state.store import SnapshotStore

_logger = logging.getLogger(__name__)

SelectionCallback = Callable[[dict[str, Any]], None]


class SelectorBinding:
    """Live selection of one or more slots for a single consumer.

    The binding holds the values it last delivered.  Whenever a pass reports
    a change to any selected key it re-reads the store; if every selected
    value is still :func:`~pyslots.state.policy.same_value` as delivered, the
    consumer is not called.  Creating a binding delivers nothing: the
    current values are available from :attr:`values` straight away.
    A binding closed part-way through a pass is not called for that pass.

    The key list is fixed for the binding's lifetime.  To watch different
    keys, close this binding and create another one.
    """

    def __init__(
        self,
        store: SnapshotStore,
        keys: Iterable[str],
        on_change: SelectionCallback | None = None,
    ) -> None:
        if isinstance(keys, str):
            keys = (keys,)
        ordered = tuple(dict.fromkeys(keys))
        for key in ordered:
            store.require_key(key)
        self._store = store
        self._keys = ordered
        self._on_change = on_change
        self._values = self._select(store.read())
        self._deliveries = 0
        self._subscription: Subscription = store.notifier.observe(ordered, self._on_notify)

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"<SelectorBinding keys={list(self._keys)} {state}>"

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    @property
    def values(self) -> dict[str, Any]:
        """The values most recently delivered (or, before any change, the initial read)."""
        return dict(self._values)

    @property
    def deliveries(self) -> int:
        """How many times the consumer has been re-invoked."""
        return self._deliveries

    @property
    def active(self) -> bool:
        return self._subscription.active

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def close(self) -> None:
        """Stop receiving changes.  Safe to call more than once."""
        self._subscription.remove()

    def __enter__(self) -> SelectorBinding:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _select(self, snapshot: Snapshot) -> dict[str, Any]:
        return {key: snapshot[key] for key in self._keys}

    def _on_notify(
        self,
        old: Snapshot,
        new: Snapshot,
        changed: Sequence[str],
        cause: MutationKind,
        revision: int,
    ) -> None:
        if not self.active:
            return
        # Re-read the store: a nested write may already have superseded ``new``.
        current = self._select(self._store.read())
        if shallow_equal(current, self._values, self._keys):
            return
        self._values = current
        self._deliveries += 1
        _logger.debug("Selection changed keys=%s cause=%s revision=%d", list(self._keys), cause, revision)
        if self._on_change is not None:
            self._on_change(dict(current))

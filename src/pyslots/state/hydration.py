"""Hydration: merge externally supplied values into the live and baseline snapshots."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyslots.state.events import MutationKind
from pyslots.state.store import SnapshotStore

_logger = logging.getLogger(__name__)


def hydrate(store: SnapshotStore, partial: Mapping[str, Any] | None) -> list[str]:
    """Merge *partial* into the live snapshot and make it the new reset baseline.

    An empty (or ``None``) payload does nothing and notifies nobody.  The
    payload is validated once up front, so either both snapshots take it or
    neither does.  The baseline is rebased before the live merge notifies,
    so a listener that resets a slot during the pass restores the hydrated
    value.
    """
    if not partial:
        _logger.debug("Skipping empty hydration")
        return []
    values = store.validate(partial, operation=MutationKind.HYDRATE.value)
    store.rebase(values)
    return store.merge(values, cause=MutationKind.HYDRATE)


class OnceHydrator:
    """Runs :func:`hydrate` at most once per consumer lifecycle.

    The first accepted call hydrates.  An empty payload still counts as
    that call; a payload rejected with
    :class:`~pyslots.exceptions.InvalidPayloadError` does not.  Later calls
    are ignored until :meth:`rearm` starts a new lifecycle.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def __call__(self, partial: Mapping[str, Any] | None) -> list[str]:
        if self._done:
            _logger.debug("Hydration already ran for this lifecycle; ignoring")
            return []
        if partial:
            self._store.validate(partial, operation=MutationKind.HYDRATE.value)
        self._done = True
        return hydrate(self._store, partial)

    def rearm(self) -> None:
        self._done = False

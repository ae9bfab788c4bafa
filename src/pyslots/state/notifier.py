"""Change notifier: diffs snapshots and fans out to registered listeners."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from pyslots.exceptions import NotificationDepthError
from pyslots.state.events import MutationKind
from pyslots.state.snapshot import Snapshot

_logger = logging.getLogger(__name__)

Listener = Callable[[Any, Any], None]
"""Per-key callback receiving ``(new_value, old_value)``."""

Observer = Callable[[Snapshot, Snapshot, Sequence[str], MutationKind, int], None]
"""Multi-key callback receiving ``(old, new, changed_keys, cause, revision)``."""


@dataclass(slots=True, eq=False)
class _Registration:
    keys: frozenset[str] | None
    observer: Observer


class Subscription:
    """Handle for one registration.  Its only capability is removal.

    Calling the handle (or :meth:`remove`) more than once is a no-op.
    It is also a context manager that removes the registration on exit.
    """

    __slots__ = ("_notifier", "_token")

    def __init__(self, notifier: ChangeNotifier, token: int) -> None:
        self._notifier: ChangeNotifier | None = notifier
        self._token = token

    @property
    def active(self) -> bool:
        return self._notifier is not None

    def remove(self) -> None:
        notifier, self._notifier = self._notifier, None
        if notifier is not None:
            notifier._unregister(self._token)  # noqa: SLF001

    def __call__(self) -> None:
        self.remove()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.remove()


class ChangeNotifier:
    """Registry of listeners plus the synchronous fan-out for one container.

    Listeners run on the caller's stack, in registration order, after the
    new snapshot is committed.  The pass iterates over the registrations
    that existed when it started: removing a listener from inside a
    callback takes effect on the next pass, and a listener added mid-pass
    is not called for the change that is currently being delivered.

    A listener may mutate the container.  That mutation runs its own,
    nested notification pass before the outer pass continues, so the
    outer pass keeps delivering the values of the change it was started
    for.  With ``max_depth`` set, nesting deeper than that raises
    :class:`~pyslots.exceptions.NotificationDepthError`.
    """

    def __init__(self, *, max_depth: int | None = None, name: str | None = None) -> None:
        self._registrations: dict[int, _Registration] = {}
        self._tokens = itertools.count()
        self._max_depth = max_depth
        self._depth = 0
        self._name = name

    def __len__(self) -> int:
        return len(self._registrations)

    @property
    def depth(self) -> int:
        """Number of notification passes currently on the call stack."""
        return self._depth

    def check_depth(self) -> None:
        """Raise if one more nested pass would exceed ``max_depth``.

        Writers call this before committing, so a rejected nested write
        leaves the snapshot untouched.
        """
        if self._max_depth is not None and self._depth > self._max_depth:
            raise NotificationDepthError(self._depth, self._max_depth)

    def register(self, key: str, listener: Listener) -> Subscription:
        """Call ``listener(new_value, old_value)`` whenever *key* changes."""

        def _deliver(
            old: Snapshot,
            new: Snapshot,
            changed: Sequence[str],
            cause: MutationKind,
            revision: int,
        ) -> None:
            listener(new[key], old[key])

        return self.observe((key,), _deliver)

    def observe(self, keys: Iterable[str] | None, observer: Observer) -> Subscription:
        """Call *observer* once per pass in which any of *keys* changed.

        ``keys=None`` observes every slot.
        """
        token = next(self._tokens)
        self._registrations[token] = _Registration(
            keys=None if keys is None else frozenset(keys),
            observer=observer,
        )
        return Subscription(self, token)

    def _unregister(self, token: int) -> None:
        self._registrations.pop(token, None)

    def notify(
        self,
        old: Snapshot,
        new: Snapshot,
        *,
        cause: MutationKind = MutationKind.MERGE,
        revision: int = 0,
    ) -> list[str]:
        """Deliver the difference between *old* and *new*; return the changed keys."""
        changed = old.changed_keys(new)
        if not changed:
            _logger.debug("No slot changed container=%s cause=%s", self._name, cause)
            return changed

        changed_set = frozenset(changed)
        pending = list(self._registrations.values())
        _logger.debug(
            "Notifying container=%s cause=%s revision=%d changed=%s registrations=%d depth=%d",
            self._name,
            cause,
            revision,
            changed,
            len(pending),
            self._depth,
        )

        self._depth += 1
        try:
            for registration in pending:
                if registration.keys is not None and registration.keys.isdisjoint(changed_set):
                    continue
                registration.observer(old, new, changed, cause, revision)
        finally:
            self._depth -= 1
        return changed

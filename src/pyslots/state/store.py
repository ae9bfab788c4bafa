"""Snapshot store: the single owner of a container's mutable state.

Every write path ends in :meth:`SnapshotStore._commit`, which swaps in a new
snapshot and runs exactly one notification pass for the before/after pair.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pyslots._redact import redact_for_log
from pyslots.exceptions import InvalidPayloadError, SlotKeyNotFoundError
from pyslots.state.events import MutationKind
from pyslots.state.notifier import ChangeNotifier
from pyslots.state.snapshot import Snapshot

if TYPE_CHECKING:
    from pyslots.schema import SlotSchema

_logger = logging.getLogger(__name__)


def _equal_for_reset(current: Any, baseline: Any) -> bool:
    """Value equality used to skip restoring a slot that already holds its baseline."""
    if current is baseline:
        return True
    if type(current) is not type(baseline):
        return False
    try:
        return bool(current == baseline)
    except (TypeError, ValueError):
        # e.g. array types whose == is elementwise
        return False


class SnapshotStore:
    """Live snapshot plus the baseline ("initial") snapshot used by resets.

    The two snapshots never share mutable values: the baseline is deep-copied
    on construction and on rebase, and values restored from it are deep-copied
    back into the live snapshot.
    """

    def __init__(
        self,
        initial: Mapping[str, Any],
        *,
        notifier: ChangeNotifier,
        name: str | None = None,
        schema: SlotSchema | None = None,
        log_payloads: bool = False,
        sensitive_keys: frozenset[str] = frozenset(),
    ) -> None:
        if not isinstance(initial, Mapping):
            raise InvalidPayloadError(
                f"Initial snapshot must be a mapping, got {type(initial).__name__}",
                reason="not-a-mapping",
            )
        non_string = [k for k in initial if not isinstance(k, str)]
        if non_string:
            raise InvalidPayloadError(
                f"Slot keys must be strings: {non_string!r}",
                keys=map(repr, non_string),
                reason="non-string-key",
            )
        self._notifier = notifier
        self._name = name
        self._schema = schema
        self._log_payloads = log_payloads
        self._sensitive_keys = sensitive_keys
        if schema is not None:
            self._check_values(dict(initial), operation="construct")
        self._initial = Snapshot(copy.deepcopy(dict(initial)))
        self._current = Snapshot(copy.deepcopy(dict(initial)))
        self._keys: tuple[str, ...] = tuple(self._initial)
        self._revision = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def keys(self) -> tuple[str, ...]:
        """Declared slot keys, in construction order."""
        return self._keys

    @property
    def revision(self) -> int:
        """Number of mutations committed so far."""
        return self._revision

    @property
    def initial(self) -> Snapshot:
        """The current reset baseline."""
        return self._initial

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def read(self) -> Snapshot:
        return self._current

    def require_key(self, key: str) -> str:
        if key not in self._initial:
            raise SlotKeyNotFoundError(key, container=self._name)
        return key

    def baseline_value(self, key: str) -> Any:
        """Value a reset writes for *key*.

        Returns the live object when it already equals the baseline, so a
        reset of an unchanged slot is not reported as a change; otherwise a
        deep copy of the baseline value.
        """
        baseline = self._initial[self.require_key(key)]
        current = self._current[key]
        if _equal_for_reset(current, baseline):
            return current
        return copy.deepcopy(baseline)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def merge(self, partial: Mapping[str, Any], *, cause: MutationKind = MutationKind.MERGE) -> list[str]:
        """Overwrite the slots named in *partial*; leave every other slot untouched."""
        values = self.validate(partial, operation=cause.value)
        return self._commit(self._current.with_changes(values), cause=cause, payload=values)

    def replace(self, full: Mapping[str, Any], *, cause: MutationKind = MutationKind.REPLACE) -> list[str]:
        """Reset to the baseline, then apply *full* on top.

        Keys omitted from *full* fall back to their baseline values, so the
        result always carries the complete slot set.
        """
        values = self.validate(full, operation=cause.value)
        data = {key: values[key] if key in values else self.baseline_value(key) for key in self._keys}
        return self._commit(Snapshot(data), cause=cause, payload=values)

    def rebase(self, partial: Mapping[str, Any]) -> None:
        """Write *partial* into the baseline snapshot.  No notification."""
        values = self.validate(partial, operation="rebase")
        if not values:
            return
        self._initial = self._initial.with_changes(copy.deepcopy(values))
        _logger.debug("Rebased baseline container=%s keys=%s", self._name, list(values))

    def validate(self, payload: Mapping[str, Any], *, operation: str) -> dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise InvalidPayloadError(
                f"{operation} payload must be a mapping, got {type(payload).__name__}",
                reason="not-a-mapping",
            )
        unknown = [key for key in payload if key not in self._initial]
        if unknown:
            raise InvalidPayloadError(
                f"{operation} payload contains undeclared keys: {', '.join(map(str, unknown))}",
                keys=map(str, unknown),
                reason="undeclared-key",
            )
        values = dict(payload)
        if self._schema is not None:
            self._check_values(values, operation=operation)
        return values

    def _check_values(self, values: dict[str, Any], *, operation: str) -> None:
        if self._schema is None:
            return
        for key, value in values.items():
            self._schema.check(key, value, operation=operation)

    def _commit(self, new: Snapshot, *, cause: MutationKind, payload: dict[str, Any]) -> list[str]:
        self._notifier.check_depth()
        old = self._current
        self._current = new
        self._revision += 1
        if self._log_payloads and _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Committed container=%s cause=%s revision=%d payload=%s",
                self._name,
                cause,
                self._revision,
                redact_for_log(payload, sensitive_keys=self._sensitive_keys),
            )
        else:
            _logger.debug(
                "Committed container=%s cause=%s revision=%d keys=%s",
                self._name,
                cause,
                self._revision,
                list(payload),
            )
        return self._notifier.notify(old, new, cause=cause, revision=self._revision)

"""Public slot container."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from pyslots.config import ContainerConfig
from pyslots.schema import SlotSchema
from pyslots.state.binding import SelectionCallback, SelectorBinding
from pyslots.state.events import ChangeEvent, MutationKind
from pyslots.state.hydration import OnceHydrator, hydrate
from pyslots.state.notifier import ChangeNotifier, Listener, Subscription
from pyslots.state.reset import ResetEngine
from pyslots.state.scope import ScopedAccessor, ValueCallback
from pyslots.state.snapshot import Snapshot
from pyslots.state.store import SnapshotStore

_logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ChangeEvent], None]


class SlotContainer:
    """In-process reactive container of named slots.

    The slot set is fixed by the initial snapshot.  Reads, writes, resets
    and hydration on undeclared keys raise; every write notifies listeners
    synchronously before returning.

    Construct one container per state domain at the application's entry
    point and pass it to the code that needs it.

    Parameters
    ----------
    initial : Mapping
        Initial snapshot; its keys are the container's slots.  It is deep
        copied, so later changes to the caller's objects are not seen.
    name : str or None
        Debug name; overrides ``config.name``.
    config : ContainerConfig or None
        Defaults to ``ContainerConfig()``.
    schema : SlotSchema or None
        Optional per-slot type checks.
    """

    def __init__(
        self,
        initial: Mapping[str, Any],
        *,
        name: str | None = None,
        config: ContainerConfig | None = None,
        schema: SlotSchema | None = None,
    ) -> None:
        self._config = config or ContainerConfig()
        self._name = name or self._config.name
        self._notifier = ChangeNotifier(max_depth=self._config.max_notify_depth, name=self._name)
        self._store = SnapshotStore(
            initial,
            notifier=self._notifier,
            name=self._name,
            schema=schema,
            log_payloads=self._config.log_payloads,
            sensitive_keys=self._config.sensitive_keys,
        )
        self._reset = ResetEngine(self._store)
        _logger.debug("Created container=%s slots=%s", self._name, list(self._store.keys))

    @classmethod
    def from_model(
        cls,
        instance: BaseModel,
        *,
        name: str | None = None,
        config: ContainerConfig | None = None,
    ) -> SlotContainer:
        """Build a typed container with one slot per field of *instance*."""
        schema = SlotSchema(type(instance))
        return cls(
            schema.initial_from(instance),
            name=name or (config.name if config else None) or type(instance).__name__,
            config=config,
            schema=schema,
        )

    def __repr__(self) -> str:
        return f"<SlotContainer name={self._name!r} slots={list(self._store.keys)} revision={self.revision}>"

    def __contains__(self, key: object) -> bool:
        return key in self._store.keys

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def keys(self) -> tuple[str, ...]:
        return self._store.keys

    @property
    def revision(self) -> int:
        return self._store.revision

    @property
    def initial(self) -> Snapshot:
        """Current reset baseline (reflects any hydration)."""
        return self._store.initial

    @property
    def store(self) -> SnapshotStore:
        """Low-level store, for integrations that need raw snapshot access."""
        return self._store

    # ------------------------------------------------------------------
    # Non-reactive reads
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return self._store.read()

    def get(self, key: str) -> Any:
        return self._store.read()[self._store.require_key(key)]

    def get_many(self, keys: Iterable[str]) -> dict[str, Any]:
        if isinstance(keys, str):
            keys = (keys,)
        snapshot = self._store.read()
        return {key: snapshot[self._store.require_key(key)] for key in keys}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def merge(self, partial: Mapping[str, Any]) -> list[str]:
        """Overwrite the given slots; return the keys that actually changed."""
        return self._store.merge(partial)

    def replace(self, full: Mapping[str, Any]) -> list[str]:
        """Reset to the baseline and apply *full*; return the changed keys."""
        return self._store.replace(full)

    # ------------------------------------------------------------------
    # Reactive binding
    # ------------------------------------------------------------------

    def select(self, keys: Iterable[str], on_change: SelectionCallback | None = None) -> SelectorBinding:
        """Bind *on_change* to the given slots.

        *on_change* receives ``{key: value}`` for every selected key when at
        least one of them changes.
        """
        return SelectorBinding(self._store, keys, on_change)

    def scope(self, key: str, on_change: ValueCallback | None = None) -> ScopedAccessor:
        """Reactive read of one slot plus its setter."""
        return ScopedAccessor(self._store, key, on_change)

    # ------------------------------------------------------------------
    # Reset & hydration
    # ------------------------------------------------------------------

    def reset_one(self, key: str) -> list[str]:
        return self._reset.reset_one(key)

    def reset_many(self, keys: Iterable[str]) -> list[str]:
        return self._reset.reset_many(keys)

    def reset_all(self) -> list[str]:
        return self._reset.reset_all()

    def hydrate(self, partial: Mapping[str, Any] | None) -> list[str]:
        """Merge *partial* into the live state and into the reset baseline."""
        return hydrate(self._store, partial)

    def hydrator(self) -> OnceHydrator:
        """One-shot hydration callable for a single consumer lifecycle."""
        return OnceHydrator(self._store)

    # ------------------------------------------------------------------
    # Manual subscription
    # ------------------------------------------------------------------

    def subscribe(self, key: str, listener: Listener) -> Subscription:
        """Call ``listener(new_value, old_value)`` whenever *key* changes.

        The registration lives until the returned handle is called.
        """
        self._store.require_key(key)
        return self._notifier.register(key, listener)

    def on_change(self, callback: ChangeCallback) -> Subscription:
        """Receive one :class:`ChangeEvent` per changed slot, for every slot."""

        def _observer(
            old: Snapshot,
            new: Snapshot,
            changed: Sequence[str],
            cause: MutationKind,
            revision: int,
        ) -> None:
            for key in changed:
                callback(
                    ChangeEvent(
                        key=key,
                        new_value=new[key],
                        old_value=old[key],
                        cause=cause,
                        revision=revision,
                    )
                )

        return self._notifier.observe(None, _observer)

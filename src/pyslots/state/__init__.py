"""State/store layer.

This package owns the live snapshot of a container and every path that
changes it: merge, replace, scoped writes, hydration and reset all funnel
through :class:`~pyslots.state.store.SnapshotStore`, which hands each
before/after pair to the change notifier.
"""

#!/usr/bin/env python3
"""Walk through every pyslots access mode on the sample state.

Usage
-----
::

    python scripts/demo.py              # run every scenario
    python scripts/demo.py counter      # run one scenario
    python scripts/demo.py --json       # print the event log as JSON

Scenarios: ``counter``, ``subscription``, ``scope``, ``hydration``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyslots import ChangeEvent, ContainerConfig, SlotContainer  # noqa: E402
from pyslots.demo import Settings, initial_demo_state  # noqa: E402


def _now() -> str:
    return datetime.now(UTC).isoformat()


def demo_counter(container: SlotContainer, log: Callable[[str], None]) -> None:
    """Selector binding on two slots; merges and a full reset."""
    with container.select(["counter", "theme"], lambda values: log(f"render {values}")):
        container.merge({"counter": container.get("counter") + 1, "last_updated": _now()})
        container.merge({"theme": "dark"})
        container.merge({"theme": "dark"})  # unchanged: no render
        container.reset_all()
    log(f"after reset counter={container.get('counter')} theme={container.get('theme')}")


def demo_subscription(container: SlotContainer, log: Callable[[str], None]) -> None:
    """Manual per-key listeners, removed explicitly."""
    handles = [
        container.subscribe("counter", lambda new, old: log(f"Counter changed: {old} -> {new}")),
        container.subscribe("user", lambda new, old: log(f"User changed: {old.name} -> {new.name}")),
    ]
    user = container.get("user")
    container.merge({"counter": 5})
    container.merge({"user": user.model_copy(update={"name": "User 42", "age": 42})})
    for unsubscribe in handles:
        unsubscribe()
    container.merge({"counter": 6})  # nobody listening
    log("Unsubscribed from all subscriptions")


def demo_scope(container: SlotContainer, log: Callable[[str], None]) -> None:
    """Scoped read/write pair with a literal and an updater."""
    accessor = container.scope("counter", lambda value: log(f"counter -> {value}"))
    with accessor:
        _, set_counter = accessor
        set_counter(10)
        set_counter(lambda prev: prev + 1)
        log(f"scoped value={accessor.value}")


def demo_hydration(container: SlotContainer, log: Callable[[str], None]) -> None:
    """Hydrate once, mutate, then reset back to the hydrated baseline."""
    hydrate = container.hydrator()
    hydrate({"counter": 100, "settings": Settings(notifications=False, language="nl")})
    hydrate({"counter": 999})  # second call in the same lifecycle is ignored
    container.merge({"counter": 101})
    container.reset_one("counter")
    log(f"counter after reset_one={container.get('counter')} settings={container.get('settings')}")


_SCENARIOS: dict[str, Callable[[SlotContainer, Callable[[str], None]], None]] = {
    "counter": demo_counter,
    "subscription": demo_subscription,
    "scope": demo_scope,
    "hydration": demo_hydration,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise the pyslots container on sample data")
    parser.add_argument("scenario", nargs="*", help=f"Scenarios to run: {', '.join(_SCENARIOS)} (default: all)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    unknown = [name for name in args.scenario if name not in _SCENARIOS]
    if unknown:
        parser.error(f"unknown scenario(s): {', '.join(unknown)}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = ContainerConfig.from_env(name="DemoStateController")
    entries: list[dict[str, Any]] = []

    for scenario in args.scenario or list(_SCENARIOS):
        # Fresh container per scenario, handed to the scenario explicitly.
        container = SlotContainer.from_model(initial_demo_state(), config=config)

        def log(message: str, _scenario: str = scenario) -> None:
            entries.append({"scenario": _scenario, "message": message})
            if not args.json_mode:
                print(f"[{_scenario}] {message}")

        def record(event: ChangeEvent, _log: Callable[[str], None] = log) -> None:
            _log(f"event {event.cause} {event.key} @ r{event.revision}")

        with container.on_change(record):
            _SCENARIOS[scenario](container, log)

    if args.json_mode:
        print(json.dumps(entries, indent=2, default=str, ensure_ascii=False))


if __name__ == "__main__":
    main()

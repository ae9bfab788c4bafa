from __future__ import annotations

from typing import Any

import pytest

from pyslots import SlotContainer
from pyslots.exceptions import SlotKeyNotFoundError


def _container() -> SlotContainer:
    return SlotContainer({"counter": 0, "theme": "light", "user": {"name": "Ada"}, "other": None})


def test_binding_creation_delivers_nothing() -> None:
    container = _container()
    renders: list[dict[str, Any]] = []

    binding = container.select(["counter", "theme"], renders.append)

    assert renders == []
    assert binding.values == {"counter": 0, "theme": "light"}
    assert binding.deliveries == 0


def test_change_to_any_selected_key_redelivers_once() -> None:
    container = _container()
    renders: list[dict[str, Any]] = []
    container.select(["counter", "theme"], renders.append)

    container.merge({"counter": 1, "theme": "dark"})

    assert renders == [{"counter": 1, "theme": "dark"}]


def test_unrelated_change_is_ignored() -> None:
    container = _container()
    renders: list[dict[str, Any]] = []
    binding = container.select(["counter"], renders.append)

    container.merge({"other": 1})

    assert renders == []
    assert binding.deliveries == 0


def test_equal_primitive_value_suppresses_delivery() -> None:
    container = _container()
    renders: list[dict[str, Any]] = []
    container.select(["counter", "theme"], renders.append)

    container.merge({"counter": 0})
    container.replace({"counter": 0, "theme": "light"})

    assert renders == []


def test_object_slots_compare_by_identity() -> None:
    container = _container()
    renders: list[dict[str, Any]] = []
    container.select(["user"], renders.append)

    user = container.get("user")
    user["name"] = "mutated in place"
    container.merge({"user": user})
    assert renders == []

    container.merge({"user": {"name": "Ada"}})
    assert len(renders) == 1


def test_closed_binding_stops_delivering() -> None:
    container = _container()
    renders: list[dict[str, Any]] = []
    with container.select(["counter"], renders.append) as binding:
        container.merge({"counter": 1})
    container.merge({"counter": 2})

    assert renders == [{"counter": 1}]
    assert not binding.active
    assert binding["counter"] == 1


def test_duplicate_keys_are_collapsed_in_order() -> None:
    container = _container()
    binding = container.select(["theme", "counter", "theme"])
    assert binding.keys == ("theme", "counter")


def test_select_unknown_key_raises() -> None:
    container = _container()
    with pytest.raises(SlotKeyNotFoundError):
        container.select(["counter", "ghost"])


def test_binding_sees_latest_state_after_nested_write() -> None:
    container = SlotContainer({"a": 0, "b": 0})
    container.subscribe("a", lambda new, old: container.merge({"b": new * 10}))
    renders: list[dict[str, Any]] = []
    container.select(["a", "b"], renders.append)

    container.merge({"a": 1})

    # The nested write delivered first; the outer pass then finds nothing new.
    assert renders == [{"a": 1, "b": 10}]


def test_binding_closed_mid_pass_is_not_called() -> None:
    container = SlotContainer({"x": 0})
    renders: list[dict[str, Any]] = []
    bindings = {}
    container.subscribe("x", lambda new, old: bindings["view"].close())
    bindings["view"] = container.select(["x"], renders.append)

    container.merge({"x": 1})

    assert renders == []
    assert not bindings["view"].active

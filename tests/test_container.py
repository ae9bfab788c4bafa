from __future__ import annotations

import pytest

from pyslots import ChangeEvent, ContainerConfig, MutationKind, SlotContainer
from pyslots.exceptions import InvalidPayloadError, SlotKeyNotFoundError


def _container() -> SlotContainer:
    return SlotContainer({"counter": 0, "theme": "light"}, name="test")


def test_end_to_end_merge_then_reset_all() -> None:
    container = _container()
    calls: list[tuple[int, int]] = []
    container.subscribe("counter", lambda new, old: calls.append((new, old)))

    container.merge({"counter": 1})

    assert container.get("counter") == 1
    assert container.get("theme") == "light"
    assert calls == [(1, 0)]

    container.reset_all()
    assert container.get("counter") == 0
    assert calls == [(1, 0), (0, 1)]


def test_key_set_closed_across_mutations() -> None:
    container = _container()
    container.merge({"theme": "dark"})
    container.replace({"counter": 3})
    container.reset_all()

    assert set(container.snapshot()) == {"counter", "theme"}
    for key in ("counter", "theme"):
        container.get(key)
    with pytest.raises(SlotKeyNotFoundError) as excinfo:
        container.get("missing")
    assert excinfo.value.key == "missing"
    assert isinstance(excinfo.value, KeyError)


def test_merge_preserves_untouched_keys() -> None:
    container = SlotContainer({"a": 1, "b": [1, 2], "c": "x"})
    before = container.snapshot()

    container.merge({"a": 2})

    after = container.snapshot()
    assert after["a"] == 2
    assert after["b"] is before["b"]
    assert after["c"] == "x"


def test_every_mutation_produces_a_new_snapshot() -> None:
    container = _container()
    first = container.snapshot()

    container.merge({"counter": 5})

    assert container.snapshot() is not first
    assert first["counter"] == 0


def test_merge_rejects_undeclared_key_without_changing_state() -> None:
    container = _container()
    calls: list[ChangeEvent] = []
    container.on_change(calls.append)

    with pytest.raises(InvalidPayloadError) as excinfo:
        container.merge({"counter": 9, "extra": True})

    assert excinfo.value.keys == ("extra",)
    assert container.get("counter") == 0
    assert calls == []
    assert container.revision == 0


def test_replace_falls_back_to_initial_for_omitted_keys() -> None:
    container = _container()
    container.merge({"counter": 4, "theme": "dark"})

    container.replace({"counter": 7})

    assert container.get_many(["counter", "theme"]) == {"counter": 7, "theme": "light"}


def test_replace_rejects_undeclared_key() -> None:
    container = _container()
    with pytest.raises(InvalidPayloadError):
        container.replace({"counter": 1, "nope": 2})


def test_get_many_raises_for_unknown_key() -> None:
    container = _container()
    assert container.get_many(["theme"]) == {"theme": "light"}
    with pytest.raises(SlotKeyNotFoundError):
        container.get_many(["theme", "nope"])


def test_merge_returns_changed_keys() -> None:
    container = _container()
    assert container.merge({"counter": 1, "theme": "light"}) == ["counter"]
    assert container.merge({"counter": 1}) == []


def test_on_change_receives_change_events() -> None:
    container = _container()
    events: list[ChangeEvent] = []
    container.on_change(events.append)

    container.merge({"counter": 2, "theme": "dark"})

    assert [(e.key, e.new_value, e.old_value) for e in events] == [("counter", 2, 0), ("theme", "dark", "light")]
    assert {e.cause for e in events} == {MutationKind.MERGE}
    assert {e.revision for e in events} == {1}


def test_initial_snapshot_is_copied_from_caller() -> None:
    source = {"user": {"name": "Ada"}}
    container = SlotContainer(source)

    source["user"]["name"] = "Grace"

    assert container.get("user") == {"name": "Ada"}
    assert container.get("user") is not container.initial["user"]


def test_non_mapping_initial_is_rejected() -> None:
    with pytest.raises(InvalidPayloadError):
        SlotContainer([("a", 1)])  # type: ignore[arg-type]


def test_name_comes_from_config_when_not_given() -> None:
    container = SlotContainer({"a": 1}, config=ContainerConfig(name="cfg"))
    assert container.name == "cfg"
    assert "cfg" in repr(container)
    assert "a" in container
    assert "b" not in container

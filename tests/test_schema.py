from __future__ import annotations

import pytest

from pyslots import SlotContainer, SlotSchema
from pyslots.demo import DemoState, Settings, Theme, User, initial_demo_state
from pyslots.exceptions import InvalidPayloadError


def test_from_model_creates_one_slot_per_field() -> None:
    container = SlotContainer.from_model(initial_demo_state())

    assert container.keys == tuple(DemoState.model_fields)
    assert container.name == "DemoState"
    assert isinstance(container.get("user"), User)
    assert container.get("user").name == "John Doe"
    assert container.get("theme") == Theme.LIGHT


def test_typed_container_rejects_wrong_value_type() -> None:
    container = SlotContainer.from_model(initial_demo_state())

    with pytest.raises(InvalidPayloadError) as excinfo:
        container.merge({"counter": "not a number"})

    assert excinfo.value.keys == ("counter",)
    assert container.get("counter") == 0
    assert container.revision == 0


def test_typed_container_validates_nested_models() -> None:
    container = SlotContainer.from_model(initial_demo_state())

    with pytest.raises(InvalidPayloadError):
        container.merge({"user": {"name": "Ada", "email": "ada@example.com", "age": -1}})

    container.merge({"user": User(name="Ada", email="ada@example.com", age=36)})
    assert container.get("user").age == 36


def test_typed_container_stores_the_callers_object() -> None:
    container = SlotContainer.from_model(initial_demo_state())
    todos = [{"id": "3", "text": "Ship", "completed": True}]

    container.merge({"todos": todos})

    assert container.get("todos") is todos


def test_typed_container_checks_hydration_and_replace() -> None:
    container = SlotContainer.from_model(initial_demo_state())

    with pytest.raises(InvalidPayloadError):
        container.hydrate({"settings": {"notifications": "maybe"}})
    with pytest.raises(InvalidPayloadError):
        container.replace({"theme": "sepia"})

    container.hydrate({"theme": "dark"})
    assert container.initial["theme"] == "dark"


def test_schema_rejects_other_model_instances() -> None:
    schema = SlotSchema(DemoState)
    with pytest.raises(InvalidPayloadError):
        schema.initial_from(initial_demo_state().user)


def test_nested_model_slots_keep_their_type_through_reset() -> None:
    container = SlotContainer.from_model(initial_demo_state())
    assert isinstance(container.get("settings"), Settings)

    container.merge({"user": User(name="Ada", email="ada@example.com", age=36)})
    assert isinstance(container.get("user"), User)

    container.reset_all()

    user = container.get("user")
    assert isinstance(user, User)
    assert user.name == "John Doe"
    assert user is not container.initial["user"]
    assert isinstance(container.get("settings"), Settings)


def test_reset_of_unchanged_model_slot_notifies_nobody() -> None:
    container = SlotContainer.from_model(initial_demo_state())
    calls: list[object] = []
    container.subscribe("user", lambda new, old: calls.append(new))

    assert container.reset_all() == []
    assert calls == []

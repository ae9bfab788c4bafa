"""Sample state domain used by ``scripts/demo.py`` and the tests."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class User(BaseModel):
    name: str
    email: str
    age: int = Field(..., ge=0)


class Todo(BaseModel):
    id: str
    text: str
    completed: bool = False


class Settings(BaseModel):
    notifications: bool = True
    language: str = "en"


class DemoState(BaseModel):
    user: User
    counter: int = 0
    theme: Theme = Theme.LIGHT
    todos: list[Todo] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))


def initial_demo_state() -> DemoState:
    return DemoState(
        user=User(name="John Doe", email="john@example.com", age=30),
        todos=[
            Todo(id="1", text="Learn pyslots"),
            Todo(id="2", text="Build demo app"),
        ],
    )

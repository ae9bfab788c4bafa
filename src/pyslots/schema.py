"""Typed slots backed by a pydantic model.

A :class:`SlotSchema` maps every field of a pydantic model to a slot and
checks written values against the field annotation.  Checking never
replaces the caller's object: the container stores exactly what was
written so identity-based change detection keeps working.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from pyslots.exceptions import InvalidPayloadError, SlotKeyNotFoundError


class SlotSchema:
    """Per-slot type checks derived from a pydantic model class."""

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model
        self._adapters: dict[str, TypeAdapter[Any]] = {
            name: TypeAdapter(field.annotation) for name, field in model.model_fields.items()
        }

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._adapters)

    def check(self, key: str, value: Any, *, operation: str = "write") -> None:
        """Raise :class:`InvalidPayloadError` if *value* does not fit slot *key*."""
        adapter = self._adapters.get(key)
        if adapter is None:
            raise SlotKeyNotFoundError(key, container=self._model.__name__)
        try:
            adapter.validate_python(value)
        except ValidationError as exc:
            raise InvalidPayloadError(
                f"{operation}: invalid value for slot {key!r}: {exc.error_count()} validation error(s)",
                keys=(key,),
                reason=str(exc),
            ) from exc

    def initial_from(self, instance: BaseModel) -> dict[str, Any]:
        """Initial snapshot for *instance*: one slot per model field.

        Field values are taken as-is, so a nested model stays a model instance.
        """
        if not isinstance(instance, self._model):
            raise InvalidPayloadError(
                f"Expected {self._model.__name__} instance, got {type(instance).__name__}",
                reason="wrong-model",
            )
        return {name: getattr(instance, name) for name in self._model.model_fields}

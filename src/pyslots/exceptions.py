"""Custom exception hierarchy for pyslots."""

from __future__ import annotations

from collections.abc import Iterable


class SlotsError(Exception):
    """Base exception for all pyslots errors."""


class SlotsConfigError(SlotsError):
    """Invalid or missing configuration."""


class SlotKeyNotFoundError(SlotsError, KeyError):
    """A read, scoped read or reset named a slot the container does not declare."""

    def __init__(self, key: str, *, container: str | None = None) -> None:
        self.key = key
        self.container = container
        where = f" in {container!r}" if container else ""
        super().__init__(f'Key "{key}" does not exist in state{where}')

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class InvalidPayloadError(SlotsError, ValueError):
    """A merge/replace/hydrate payload is not acceptable.

    Raised when the payload names keys outside the declared slot set, or
    when a typed container rejects a value for one of its slots.
    """

    def __init__(
        self,
        message: str,
        *,
        keys: Iterable[str] = (),
        reason: str = "",
    ) -> None:
        self.keys = tuple(keys)
        self.reason = reason
        super().__init__(message)


class NotificationDepthError(SlotsError, RuntimeError):
    """Listeners kept mutating the container past ``max_notify_depth``.

    Every mutation made from inside a listener starts a nested notification
    cycle on the same call stack.  When a depth cap is configured the
    container raises this instead of recursing further.
    """

    def __init__(self, depth: int, limit: int) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(f"Nested notification depth {depth} exceeds limit {limit}")

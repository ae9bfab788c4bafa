"""Container configuration for pyslots."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyslots.exceptions import SlotsConfigError


def _env_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise SlotsConfigError(f"{name} is not a boolean: {value!r}")


def _env_keys(value: str | None) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


@dataclasses.dataclass(frozen=True)
class ContainerConfig:
    """Container configuration.

    Parameters
    ----------
    name : str or None
        Debug name shown in logs, errors and ``repr()``.
    max_notify_depth : int or None
        Maximum number of notification cycles that may nest inside another.  A listener that
        mutates the container starts a nested cycle on the same call
        stack; past this depth :class:`~pyslots.exceptions.NotificationDepthError`
        is raised.  ``None`` leaves recursion unbounded (the interpreter's
        recursion limit still applies).
    log_payloads : bool
        Include (redacted) payloads in DEBUG logs.
    sensitive_keys : frozenset of str
        Slot keys whose values are always redacted from logs.
    """

    name: str | None = None
    max_notify_depth: int | None = None
    log_payloads: bool = False
    sensitive_keys: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.max_notify_depth is not None and self.max_notify_depth < 0:
            raise SlotsConfigError(f"max_notify_depth must be >= 0, got {self.max_notify_depth}")
        if not isinstance(self.sensitive_keys, frozenset):
            object.__setattr__(self, "sensitive_keys", frozenset(self.sensitive_keys))

    @classmethod
    def from_env(cls, **overrides: Any) -> ContainerConfig:
        """Create configuration from environment variables.

        Reads ``PYSLOTS_NAME``, ``PYSLOTS_MAX_NOTIFY_DEPTH``,
        ``PYSLOTS_LOG_PAYLOADS`` and ``PYSLOTS_SENSITIVE_KEYS``
        (comma-separated).  Explicit keyword arguments override
        environment values.

        Raises
        ------
        SlotsConfigError
            If ``PYSLOTS_MAX_NOTIFY_DEPTH`` is not an integer or
            ``PYSLOTS_LOG_PAYLOADS`` is not a recognised boolean.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        name_env = env.get("PYSLOTS_NAME")
        if name_env:
            config_kwargs["name"] = name_env

        depth_env = env.get("PYSLOTS_MAX_NOTIFY_DEPTH")
        if depth_env is not None and "max_notify_depth" not in overrides:
            try:
                config_kwargs["max_notify_depth"] = int(depth_env)
            except ValueError as exc:
                raise SlotsConfigError(f"PYSLOTS_MAX_NOTIFY_DEPTH is not an integer: {depth_env!r}") from exc

        if "log_payloads" not in overrides:
            config_kwargs["log_payloads"] = _env_bool("PYSLOTS_LOG_PAYLOADS", env.get("PYSLOTS_LOG_PAYLOADS"), False)

        if "sensitive_keys" not in overrides:
            config_kwargs["sensitive_keys"] = _env_keys(env.get("PYSLOTS_SENSITIVE_KEYS"))

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

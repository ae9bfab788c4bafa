"""Helpers for safe debug logging.

Slots frequently hold user records, tokens and large nested structures.
This module produces a bounded, redacted copy of a payload before it is
emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "secret",
        "token",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
        "email",
    }
)


def redact_for_log(
    value: Any,
    *,
    sensitive_keys: frozenset[str] = frozenset(),
    max_string: int = 512,
    max_items: int = 50,
    _depth: int = 0,
) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    Mapping keys listed in *sensitive_keys* (matched exactly) or in the
    built-in set (matched case-insensitively) are replaced by ``<redacted>``.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key in sensitive_keys or key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(
                    v,
                    sensitive_keys=sensitive_keys,
                    max_string=max_string,
                    max_items=max_items,
                    _depth=_depth + 1,
                )
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = [
            redact_for_log(
                v,
                sensitive_keys=sensitive_keys,
                max_string=max_string,
                max_items=max_items,
                _depth=_depth + 1,
            )
            for v in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<+{len(value) - max_items} more>")
        return items

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)

"""Equality policy used for change detection.

Values are compared shallowly: immutable scalars by value, everything else
by identity.  Replacing a nested object wholesale is how callers signal a
change for object-valued slots; mutating it in place is invisible here.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

_SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex, str, bytes)


def same_value(a: Any, b: Any) -> bool:
    """Return ``True`` when *a* and *b* count as the same slot value."""
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _SCALAR_TYPES):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return bool(a == b)


def shallow_equal(a: Mapping[str, Any], b: Mapping[str, Any], keys: Iterable[str]) -> bool:
    """Per-key :func:`same_value` over *keys*; missing keys compare unequal."""
    for key in keys:
        if key not in a or key not in b:
            return False
        if not same_value(a[key], b[key]):
            return False
    return True

"""Change events emitted by the notifier."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MutationKind(StrEnum):
    MERGE = "merge"
    REPLACE = "replace"
    SCOPED_SET = "scoped_set"
    HYDRATE = "hydrate"
    RESET_ONE = "reset_one"
    RESET_MANY = "reset_many"
    RESET_ALL = "reset_all"


class ChangeEvent(BaseModel):
    """One slot changing value during a single mutation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str
    new_value: Any = None
    old_value: Any = None
    cause: MutationKind = MutationKind.MERGE
    revision: int = Field(..., ge=0, description="Container revision after the mutation")

"""Base model and shared field types for DirAct records.

Every DirAct model inherits from :class:`DirActBaseModel` which
provides:

* ``frozen=True`` so decoded records cannot change after hand-off.
* ``alias_generator=to_camel`` so ``model_dump(by_alias=True)``
  yields the camelCase keys used by raddec consumers
  (``instanceId``, ``cyclicCount``, ...), while snake_case names
  remain accepted on construction.
"""

from __future__ import annotations

import time
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

_HEX_DIGITS = frozenset("0123456789abcdef")
INSTANCE_ID_HEX_LENGTH = 8


def now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def _coerce_instance_id(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_instance_id(value: str) -> str:
    if len(value) != INSTANCE_ID_HEX_LENGTH or not set(value) <= _HEX_DIGITS:
        raise ValueError(f"instance id must be {INSTANCE_ID_HEX_LENGTH} hex characters, got {value!r}")
    return value


InstanceId = Annotated[str, BeforeValidator(_coerce_instance_id), AfterValidator(_check_instance_id)]
"""32-bit device identity as 8 lowercase hex characters (bytes are accepted)."""


class DirActBaseModel(BaseModel):
    """Base for decoded DirAct records."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

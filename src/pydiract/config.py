"""Digester configuration for pydiract."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from pydiract.exceptions import DirActConfigError


class CountPolicy(StrEnum):
    """How digest interaction counts are read off the wire."""

    VERBATIM = "verbatim"
    SCALED = "scaled"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_number(env_key: str, value: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(value)
    except ValueError as exc:
        raise DirActConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DirActConfig:
    """Digester configuration.

    Parameters
    ----------
    count_policy : CountPolicy
        Decoding of digest interaction counts. ``VERBATIM`` keeps the
        raw byte; ``SCALED`` reads counts above 128 as
        ``(count & 0x7f) << 8``.
    raise_on_decode_error : bool
        Propagate :class:`~pydiract.exceptions.DirActDecodeError` to the
        caller instead of logging it and moving on to the next packet.
    digest_ttl : float
        Seconds a per-device digest accumulator may live before the
        bounded store drops it. ``0`` disables expiry.
    max_devices : int
        Upper bound on accumulators held by the bounded store; the least
        recently touched device is evicted first. ``0`` means unbounded.
    """

    count_policy: CountPolicy = CountPolicy.VERBATIM
    raise_on_decode_error: bool = False
    digest_ttl: float = 0.0
    max_devices: int = 0

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "count_policy", CountPolicy(self.count_policy))
        except ValueError as exc:
            raise DirActConfigError(f"Unknown count policy: {self.count_policy!r}") from exc
        if self.digest_ttl < 0:
            raise DirActConfigError("digest_ttl must be >= 0")
        if self.max_devices < 0:
            raise DirActConfigError("max_devices must be >= 0")

    @property
    def is_bounded(self) -> bool:
        """``True`` when an eviction policy is configured."""
        return self.digest_ttl > 0 or self.max_devices > 0

    @classmethod
    def from_env(cls, **overrides: Any) -> DirActConfig:
        """Create configuration from ``DIRACT_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        policy_env = env.get("DIRACT_COUNT_POLICY")
        if policy_env is not None:
            config_kwargs["count_policy"] = policy_env.strip().lower()

        config_kwargs["raise_on_decode_error"] = _env_bool(env.get("DIRACT_RAISE_ON_DECODE_ERROR"), False)

        ttl_env = env.get("DIRACT_DIGEST_TTL")
        if ttl_env is not None:
            config_kwargs["digest_ttl"] = _parse_number("DIRACT_DIGEST_TTL", ttl_env, float)

        max_env = env.get("DIRACT_MAX_DEVICES")
        if max_env is not None:
            config_kwargs["max_devices"] = _parse_number("DIRACT_MAX_DEVICES", max_env, int)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

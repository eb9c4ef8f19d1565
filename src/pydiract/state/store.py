"""Containers holding digest accumulators between pages.

The reassembler only talks to the :class:`DigestStore` protocol, so
the retention policy is chosen by whoever builds it:

* :class:`InMemoryDigestStore` keeps every accumulator for the life of
  the process.  Completed accumulators stay put so that late duplicate
  pages are absorbed rather than restarting assembly.
* :class:`BoundedDigestStore` drops accumulators older than a TTL and
  evicts the least recently touched device beyond ``max_devices``.
  An evicted device that sends again simply starts a new accumulator;
  for a completed digest that means a late page can open a fresh,
  never-completing accumulator until it too is evicted.

Neither store is thread-safe.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol

from pydiract.config import DirActConfig
from pydiract.state.accumulator import DigestAccumulator


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_expired(now: datetime, expires_at: datetime) -> bool:
    return now >= expires_at


class DigestStore(Protocol):
    def get(self, instance_id: str) -> DigestAccumulator | None: ...

    def put(self, accumulator: DigestAccumulator) -> None: ...

    def discard(self, instance_id: str) -> None: ...

    def __len__(self) -> int: ...

    def __contains__(self, instance_id: object) -> bool: ...


class InMemoryDigestStore:
    """Unbounded store; one accumulator per device, never evicted."""

    def __init__(self) -> None:
        self._accumulators: dict[str, DigestAccumulator] = {}

    def get(self, instance_id: str) -> DigestAccumulator | None:
        return self._accumulators.get(instance_id)

    def put(self, accumulator: DigestAccumulator) -> None:
        self._accumulators[accumulator.instance_id] = accumulator

    def discard(self, instance_id: str) -> None:
        self._accumulators.pop(instance_id, None)

    def __len__(self) -> int:
        return len(self._accumulators)

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._accumulators


class BoundedDigestStore:
    """Store with opt-in TTL expiry and an LRU cap on device count.

    Parameters
    ----------
    ttl : timedelta or None
        Maximum age of an accumulator, measured from ``created_at``.
        ``None`` disables expiry.
    max_devices : int or None
        Maximum number of devices tracked.  ``None`` disables the cap.
    clock : callable
        Returns the current aware datetime; injectable for tests.
    """

    def __init__(
        self,
        *,
        ttl: timedelta | None = None,
        max_devices: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_devices is not None and max_devices < 1:
            raise ValueError("max_devices must be >= 1")
        self._ttl = ttl
        self._max_devices = max_devices
        self._clock = clock
        self._accumulators: OrderedDict[str, DigestAccumulator] = OrderedDict()
        self.evicted: int = 0

    @classmethod
    def from_config(
        cls,
        config: DirActConfig,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> BoundedDigestStore:
        return cls(
            ttl=timedelta(seconds=config.digest_ttl) if config.digest_ttl > 0 else None,
            max_devices=config.max_devices or None,
            clock=clock,
        )

    def _expired(self, accumulator: DigestAccumulator) -> bool:
        if self._ttl is None:
            return False
        return is_expired(self._clock(), accumulator.created_at + self._ttl)

    def get(self, instance_id: str) -> DigestAccumulator | None:
        accumulator = self._accumulators.get(instance_id)
        if accumulator is None:
            return None
        if self._expired(accumulator):
            del self._accumulators[instance_id]
            self.evicted += 1
            return None
        self._accumulators.move_to_end(instance_id)
        return accumulator

    def put(self, accumulator: DigestAccumulator) -> None:
        self._accumulators[accumulator.instance_id] = accumulator
        self._accumulators.move_to_end(accumulator.instance_id)
        if self._max_devices is None:
            return
        while len(self._accumulators) > self._max_devices:
            self._accumulators.popitem(last=False)
            self.evicted += 1

    def discard(self, instance_id: str) -> None:
        self._accumulators.pop(instance_id, None)

    def purge_expired(self) -> int:
        """Drop every expired accumulator; returns how many were removed."""
        stale = [key for key, accumulator in self._accumulators.items() if self._expired(accumulator)]
        for key in stale:
            del self._accumulators[key]
        self.evicted += len(stale)
        return len(stale)

    def __len__(self) -> int:
        return len(self._accumulators)

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._accumulators

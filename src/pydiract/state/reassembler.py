"""Digest reassembly.

Digest pages for a device are collected until every interaction up to
the last page is present, then emitted once as a :class:`DirActDigest`.

The reassembler performs an unlocked read-modify-write on its store
for every page.  Callers must feed a given instance from one thread
at a time (a single writer, or a lock around :meth:`add_page`).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pydiract.models._base import now_ms
from pydiract.models.digest import DigestPage, DirActDigest
from pydiract.state.accumulator import DigestAccumulator
from pydiract.state.store import DigestStore, InMemoryDigestStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DigestReassembler:
    """Collect digest pages per device and release finished digests.

    Policy, per incoming page:

    - no accumulator for the device, or one for a different epoch:
      start a new accumulator from this page; the old one is dropped
      without notification.
    - accumulator already complete: absorb the page, change nothing.
    - otherwise: file the page's entries by absolute index.

    A digest is released exactly once, when the last page is known and
    every index below it is populated, whatever order pages came in.
    """

    def __init__(
        self,
        store: DigestStore | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store: DigestStore = store if store is not None else InMemoryDigestStore()
        self._clock = clock

    @property
    def store(self) -> DigestStore:
        return self._store

    def accumulator(self, instance_id: str) -> DigestAccumulator | None:
        return self._store.get(instance_id)

    def add_page(self, page: DigestPage, timestamp: int | None = None) -> DirActDigest | None:
        """Apply one page; return the finished digest if this page completed it."""
        accumulator = self._store.get(page.instance_id)

        if accumulator is None or accumulator.digest_timestamp != page.digest_timestamp:
            if accumulator is not None and not accumulator.is_handled:
                _logger.debug(
                    "Digest epoch %d for %s superseded by %d",
                    accumulator.digest_timestamp,
                    page.instance_id,
                    page.digest_timestamp,
                )
            accumulator = DigestAccumulator(
                instance_id=page.instance_id,
                digest_timestamp=page.digest_timestamp,
                created_at=self._clock(),
            )
            self._store.put(accumulator)
        elif accumulator.is_handled:
            _logger.debug(
                "Ignoring late page %d for completed digest %s@%d",
                page.page_number,
                page.instance_id,
                page.digest_timestamp,
            )
            return None

        accumulator.add_page(page)

        if not accumulator.is_complete:
            return None

        accumulator.mark_complete()
        digest = DirActDigest(
            instance_id=accumulator.instance_id,
            digest_timestamp=accumulator.digest_timestamp,
            interactions=accumulator.interactions(),
            timestamp=timestamp if timestamp is not None else now_ms(),
        )
        _logger.debug(
            "Digest %s@%d complete with %d interactions",
            digest.instance_id,
            digest.digest_timestamp,
            len(digest.interactions),
        )
        return digest

"""Per-device digest accumulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from pydiract.models.digest import DigestEntry, DigestPage


class AccumulatorState(StrEnum):
    ASSEMBLING = "assembling"
    COMPLETE = "complete"


@dataclass(slots=True)
class DigestAccumulator:
    """Pages received so far for one device and one digest epoch.

    ``digest_timestamp`` never changes; a page from another epoch gets
    a fresh accumulator instead.  Entries are keyed by absolute index
    (``page_number * 3 + offset``) so pages can land in any order.
    ``expected_count`` stays ``None`` until the last page is seen.
    """

    instance_id: str
    digest_timestamp: int
    created_at: datetime
    entries: dict[int, DigestEntry] = field(default_factory=dict)
    expected_count: int | None = None
    state: AccumulatorState = AccumulatorState.ASSEMBLING

    @property
    def is_handled(self) -> bool:
        return self.state is AccumulatorState.COMPLETE

    @property
    def is_complete(self) -> bool:
        """``True`` once every index below ``expected_count`` is populated."""
        if self.expected_count is None:
            return False
        populated = sum(1 for index in self.entries if index < self.expected_count)
        return populated == self.expected_count

    def add_page(self, page: DigestPage) -> None:
        first = page.first_index
        for offset, entry in enumerate(page.entries):
            self.entries[first + offset] = entry
        if page.is_last_page:
            self.expected_count = first + len(page.entries)

    def interactions(self) -> tuple[DigestEntry, ...]:
        if self.expected_count is None:
            return ()
        return tuple(self.entries[index] for index in range(self.expected_count))

    def mark_complete(self) -> None:
        self.state = AccumulatorState.COMPLETE

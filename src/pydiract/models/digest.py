"""DirAct digest models.

A digest is a per-device tally of interactions over one reporting
interval.  It is spread across up to eight :class:`DigestPage`
packets of three entries each, which the reassembler stitches back
into one :class:`DirActDigest`.
"""

from __future__ import annotations

from pydantic import Field

from pydiract._constants import DEVICES_PER_PAGE, DIGEST_TIMESTAMP_MASK
from pydiract.models._base import DirActBaseModel, InstanceId, now_ms


class DigestEntry(DirActBaseModel):
    """Interaction count against one other device."""

    instance_id: InstanceId
    count: int = Field(..., ge=0)


class DigestPage(DirActBaseModel):
    """One decoded digest packet."""

    page_number: int = Field(..., ge=0)
    is_last_page: bool
    digest_timestamp: int = Field(..., ge=0, le=DIGEST_TIMESTAMP_MASK)
    instance_id: InstanceId
    entries: tuple[DigestEntry, ...] = Field(default=(), max_length=DEVICES_PER_PAGE)

    @property
    def first_index(self) -> int:
        """Absolute interaction index of this page's first entry."""
        return self.page_number * DEVICES_PER_PAGE


class DirActDigest(DirActBaseModel):
    """A completely reassembled digest, ready for consumers.

    ``interactions`` is ordered by absolute index and has no gaps.
    ``timestamp`` is the capture time of the page that completed it.
    """

    instance_id: InstanceId
    digest_timestamp: int = Field(..., ge=0, le=DIGEST_TIMESTAMP_MASK)
    interactions: tuple[DigestEntry, ...] = ()
    timestamp: int = Field(default_factory=now_ms)

"""Digest page decoding."""

from __future__ import annotations

from pydiract._constants import (
    DEVICES_PER_PAGE,
    DIGEST_LAST_PAGE_BIT,
    DIGEST_TIMESTAMP_MASK,
    SCALED_COUNT_THRESHOLD,
)
from pydiract.config import CountPolicy
from pydiract.decoding.frame import PacketType, read_frame
from pydiract.exceptions import InvalidBitfieldError
from pydiract.models.digest import DigestEntry, DigestPage


def decode_count(value: int, policy: CountPolicy = CountPolicy.VERBATIM) -> int:
    """Decode one interaction count byte.

    Under ``SCALED`` the top bit marks a coarse count in units of 256,
    taking effect above 128 so that 128 itself stays literal.
    """
    if policy is CountPolicy.SCALED and value > SCALED_COUNT_THRESHOLD:
        return (value & 0x7F) << 8
    return value


def decode_digest_page(packet: bytes, policy: CountPolicy = CountPolicy.VERBATIM) -> DigestPage:
    """Decode a packet already classified as a DirAct digest frame."""
    frame = read_frame(packet, PacketType.DIGEST)
    entries = frame.entries()
    if len(entries) > DEVICES_PER_PAGE:
        raise InvalidBitfieldError(
            f"Digest page carries {len(entries)} entries, at most {DEVICES_PER_PAGE} allowed",
            packet_type=PacketType.DIGEST,
            packet=packet,
        )

    packed = frame.packed_field
    return DigestPage(
        page_number=frame.counter,
        is_last_page=bool(packed & DIGEST_LAST_PAGE_BIT),
        digest_timestamp=packed & DIGEST_TIMESTAMP_MASK,
        instance_id=frame.instance_id,
        entries=tuple(
            DigestEntry(instance_id=instance_id, count=decode_count(value, policy)) for instance_id, value in entries
        ),
    )

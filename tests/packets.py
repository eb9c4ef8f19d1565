"""Builders for synthetic DirAct wire packets used across the tests."""

from __future__ import annotations

# Advertising header, advertiser address, flags AD and the length byte
# of the manufacturer-specific AD: twelve bytes before the signature.
PREAMBLE = bytes.fromhex("4216" + "aabbccddeeff" + "020106" + "1e")
PROXIMITY_SIGNATURE = bytes.fromhex("ff830501")
DIGEST_SIGNATURE = bytes.fromhex("ff830511")


def _frame(signature: bytes, counter: int, instance_id: str, packed: int, entries: list[tuple[str, int]]) -> bytes:
    frame_length = 7 + 5 * len(entries)
    body = bytes([(counter << 5) | frame_length]) + bytes.fromhex(instance_id) + packed.to_bytes(3, "big")
    for entry_id, value in entries:
        body += bytes.fromhex(entry_id) + bytes([value])
    return PREAMBLE + signature + body


def proximity_packet(
    *,
    cyclic_count: int = 0,
    instance_id: str = "12345678",
    acceleration: tuple[int, int, int] = (0, 0, 0),
    battery: int = 63,
    nearest: list[tuple[str, int]] | None = None,
) -> bytes:
    """Build a proximity packet from raw six-bit field values."""
    ax, ay, az = acceleration
    packed = (ax << 18) | (ay << 12) | (az << 6) | battery
    return _frame(PROXIMITY_SIGNATURE, cyclic_count, instance_id, packed, nearest or [])


def digest_packet(
    *,
    page_number: int = 0,
    instance_id: str = "12345678",
    digest_timestamp: int = 1000,
    is_last_page: bool = False,
    entries: list[tuple[str, int]] | None = None,
) -> bytes:
    packed = (int(is_last_page) << 23) | digest_timestamp
    return _frame(DIGEST_SIGNATURE, page_number, instance_id, packed, entries or [])

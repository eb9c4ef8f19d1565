"""Bitfield decoders for DirAct sensor fields.

Every decoder takes one raw byte (0-255) and only looks at its low
six bits, after an optional shift.  They are total: any byte value
decodes to something, so no decoder raises.
"""

from __future__ import annotations

_SIX_BITS = 0x3F

# Six-bit acceleration value reserved for "no reading".
ACCELERATION_UNAVAILABLE = 32

RSSI_OFFSET_DBM = -92


def decode_battery(value: int) -> int:
    """Return the battery level as a 0-100 percentage."""
    return round(100 * (value & _SIX_BITS) / 63)


def decode_acceleration(value: int, is_upper_field: bool) -> float | None:
    """Return one acceleration axis in g, or ``None`` for the sentinel.

    Two of the three axes straddle byte boundaries; *is_upper_field*
    selects the six bits at the top of the given byte window instead
    of those at the bottom.  Values are six-bit twos complement in
    sixteenths of a g, so the range is -2.0 to 1.9375.
    """
    if is_upper_field:
        value >>= 2
    value &= _SIX_BITS
    if value == ACCELERATION_UNAVAILABLE:
        return None
    if value > ACCELERATION_UNAVAILABLE:
        return (value - 64) / 16
    return value / 16


def decode_rssi(value: int) -> int:
    """Return the received signal strength in dBm (-92 to -29)."""
    return (value & _SIX_BITS) + RSSI_OFFSET_DBM


def nibble_window(data: bytes, nibble_offset: int) -> int:
    """Return the byte that starts *nibble_offset* half-bytes into *data*.

    Odd offsets stitch the low nibble of one byte to the high nibble of
    the next, which is how the packed acceleration axes are addressed.
    """
    index, odd = divmod(nibble_offset, 2)
    if not odd:
        return data[index]
    return ((data[index] & 0x0F) << 4) | (data[index + 1] >> 4)

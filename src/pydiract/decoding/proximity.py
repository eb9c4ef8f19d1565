"""Proximity packet decoding."""

from __future__ import annotations

from pydiract._constants import BATTERY_OFFSET
from pydiract.bitfield import decode_acceleration, decode_battery, decode_rssi, nibble_window
from pydiract.decoding.frame import PacketType, read_frame
from pydiract.models.proximity import NearestDevice, ProximityReport

# Nibble offsets of the three acceleration windows within the body.
# X sits in the top six bits of byte 6, Y in the bottom six bits of
# the window straddling bytes 6-7, Z in the top six bits of the window
# straddling bytes 7-8.  The battery takes the bottom six bits of byte 8.
_ACCELERATION_WINDOWS: tuple[tuple[int, bool], ...] = ((12, True), (13, False), (15, True))


def decode_proximity(packet: bytes, timestamp: int) -> ProximityReport:
    """Decode a packet already classified as a DirAct proximity frame."""
    frame = read_frame(packet, PacketType.PROXIMITY)
    body = frame.body

    acceleration = tuple(
        decode_acceleration(nibble_window(body, nibble), is_upper) for nibble, is_upper in _ACCELERATION_WINDOWS
    )

    return ProximityReport(
        cyclic_count=frame.counter,
        instance_id=frame.instance_id,
        acceleration=acceleration,
        battery_percentage=decode_battery(body[BATTERY_OFFSET]),
        nearest=tuple(
            NearestDevice(instance_id=instance_id, rssi=decode_rssi(value)) for instance_id, value in frame.entries()
        ),
        timestamp=timestamp,
    )

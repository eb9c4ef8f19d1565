"""Packet classification and the frame header shared by both DirAct types.

Body layout (offsets relative to the DirAct frame-type byte)::

    0      frame type (last signature byte)
    1      counter (3 bits) | frame length (5 bits)
    2..5   instance id
    6..8   packed 24-bit field (type specific)
    9..    5-byte list entries: instance id (4) + value (1)

Frame length counts the bytes that follow the frame byte, so list
entries run while ``offset < frame_length + 2``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydiract._constants import (
    BODY_OFFSET,
    DIGEST_SIGNATURE,
    FRAME_BYTE,
    FRAME_COUNTER_SHIFT,
    FRAME_LENGTH_MASK,
    FRAME_OVERHEAD,
    INSTANCE_ID_LENGTH,
    INSTANCE_ID_OFFSET,
    LIST_ENTRY_LENGTH,
    LIST_OFFSET,
    MIN_FRAME_LENGTH,
    PACKED_FIELD_OFFSET,
    PROXIMITY_SIGNATURE,
    SIGNATURE_LENGTH,
    SIGNATURE_OFFSET,
)
from pydiract.exceptions import InvalidBitfieldError, TruncatedPacketError


class PacketType(StrEnum):
    PROXIMITY = "proximity"
    DIGEST = "digest"
    UNKNOWN = "unknown"


_SIGNATURES: dict[bytes, PacketType] = {
    PROXIMITY_SIGNATURE: PacketType.PROXIMITY,
    DIGEST_SIGNATURE: PacketType.DIGEST,
}


def to_packet_bytes(packet: bytes | bytearray | str) -> bytes:
    """Return *packet* as bytes, converting raddec-style hex text."""
    if isinstance(packet, str):
        try:
            return bytes.fromhex(packet)
        except ValueError as exc:
            raise InvalidBitfieldError(f"Packet is not valid hex: {packet!r}") from exc
    return bytes(packet)


def classify(packet: bytes | bytearray | str) -> PacketType:
    """Identify the DirAct frame type from the fixed-offset signature.

    Text that is not valid hex cannot carry a signature and classifies
    as ``UNKNOWN``.
    """
    if isinstance(packet, str):
        try:
            packet = bytes.fromhex(packet)
        except ValueError:
            return PacketType.UNKNOWN
    signature = packet[SIGNATURE_OFFSET : SIGNATURE_OFFSET + SIGNATURE_LENGTH]
    return _SIGNATURES.get(signature, PacketType.UNKNOWN)


def list_offsets(frame_length: int) -> range:
    """Body offsets of the list entries announced by *frame_length*."""
    return range(LIST_OFFSET, frame_length + FRAME_OVERHEAD, LIST_ENTRY_LENGTH)


@dataclass(frozen=True, slots=True)
class Frame:
    """Header fields common to proximity and digest packets."""

    packet_type: PacketType
    body: bytes
    frame_length: int
    counter: int
    instance_id: str

    @property
    def packed_field(self) -> int:
        return int.from_bytes(self.body[PACKED_FIELD_OFFSET:LIST_OFFSET], "big")

    def entries(self) -> list[tuple[str, int]]:
        """Return ``(instance_id, value_byte)`` pairs in wire order."""
        return [
            (
                self.body[offset : offset + INSTANCE_ID_LENGTH].hex(),
                self.body[offset + INSTANCE_ID_LENGTH],
            )
            for offset in list_offsets(self.frame_length)
        ]


def read_frame(packet: bytes, packet_type: PacketType) -> Frame:
    """Parse and bounds-check the frame header of a classified packet.

    Raises
    ------
    InvalidBitfieldError
        The frame length is too short to cover the fixed header.
    TruncatedPacketError
        The body ends before the last byte the frame length implies.
    """
    body = packet[BODY_OFFSET:]
    if len(body) <= FRAME_BYTE:
        raise TruncatedPacketError(
            "Packet ends before the frame byte",
            packet_type=packet_type,
            packet=packet,
        )

    frame_byte = body[FRAME_BYTE]
    frame_length = frame_byte & FRAME_LENGTH_MASK
    if frame_length < MIN_FRAME_LENGTH:
        raise InvalidBitfieldError(
            f"Frame length {frame_length} is shorter than the {MIN_FRAME_LENGTH}-byte header",
            packet_type=packet_type,
            packet=packet,
        )

    offsets = list_offsets(frame_length)
    required = offsets[-1] + LIST_ENTRY_LENGTH if offsets else LIST_OFFSET
    if len(body) < required:
        raise TruncatedPacketError(
            f"Body has {len(body)} bytes, frame length {frame_length} needs {required}",
            packet_type=packet_type,
            packet=packet,
        )

    return Frame(
        packet_type=packet_type,
        body=body,
        frame_length=frame_length,
        counter=frame_byte >> FRAME_COUNTER_SHIFT,
        instance_id=body[INSTANCE_ID_OFFSET : INSTANCE_ID_OFFSET + INSTANCE_ID_LENGTH].hex(),
    )

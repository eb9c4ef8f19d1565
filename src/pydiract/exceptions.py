"""Custom exception hierarchy for pydiract."""

from __future__ import annotations


class DirActError(Exception):
    """Base exception for all pydiract errors."""


class DirActConfigError(DirActError):
    """Invalid or missing configuration."""


class DirActDecodeError(DirActError):
    """A single packet could not be decoded.

    The packet is dropped; the stream it came from is not affected
    unless the digester runs with ``raise_on_decode_error``.
    """

    def __init__(
        self,
        message: str,
        *,
        packet_type: str = "",
        packet: bytes = b"",
    ) -> None:
        self.packet_type = packet_type
        self.packet = packet
        super().__init__(message)


class TruncatedPacketError(DirActDecodeError):
    """Packet body is shorter than its frame length implies."""


class InvalidBitfieldError(DirActDecodeError):
    """A field holds a reserved or out-of-range value.

    Covers frame lengths too short for the fixed header, digest pages
    with more than three entries, and packets given as malformed hex.
    """

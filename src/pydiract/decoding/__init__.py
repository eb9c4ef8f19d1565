"""Stateless decoders for DirAct wire packets."""

from pydiract.decoding.digest import decode_count, decode_digest_page
from pydiract.decoding.frame import Frame, PacketType, classify, read_frame, to_packet_bytes
from pydiract.decoding.proximity import decode_proximity

__all__ = [
    "Frame",
    "PacketType",
    "classify",
    "decode_count",
    "decode_digest_page",
    "decode_proximity",
    "read_frame",
    "to_packet_bytes",
]

"""pydiract - DirAct proximity and digest decoding for raddec streams."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydiract")
except PackageNotFoundError:
    __version__ = "0+local"
from pydiract.bitfield import decode_acceleration, decode_battery, decode_rssi
from pydiract.config import CountPolicy, DirActConfig
from pydiract.decoding import PacketType, classify, decode_digest_page, decode_proximity
from pydiract.digester import DirActDigester
from pydiract.exceptions import (
    DirActConfigError,
    DirActDecodeError,
    DirActError,
    InvalidBitfieldError,
    TruncatedPacketError,
)
from pydiract.handlers import ignore, is_registered
from pydiract.models import (
    DigestEntry,
    DigestPage,
    DirActDigest,
    NearestDevice,
    ProximityReport,
    Raddec,
)
from pydiract.state import BoundedDigestStore, DigestReassembler, DigestStore, InMemoryDigestStore

__all__ = [
    "__version__",
    "BoundedDigestStore",
    "CountPolicy",
    "DigestEntry",
    "DigestPage",
    "DigestReassembler",
    "DigestStore",
    "DirActConfig",
    "DirActConfigError",
    "DirActDecodeError",
    "DirActDigest",
    "DirActDigester",
    "DirActError",
    "InMemoryDigestStore",
    "InvalidBitfieldError",
    "NearestDevice",
    "PacketType",
    "ProximityReport",
    "Raddec",
    "TruncatedPacketError",
    "classify",
    "decode_acceleration",
    "decode_battery",
    "decode_digest_page",
    "decode_proximity",
    "decode_rssi",
    "ignore",
    "is_registered",
]

"""Data models for DirAct records."""

from pydiract.models._base import DirActBaseModel, InstanceId, now_ms
from pydiract.models.digest import DigestEntry, DigestPage, DirActDigest
from pydiract.models.proximity import Acceleration, NearestDevice, ProximityReport
from pydiract.models.raddec import Raddec

__all__ = [
    "Acceleration",
    "DigestEntry",
    "DigestPage",
    "DirActBaseModel",
    "DirActDigest",
    "InstanceId",
    "NearestDevice",
    "ProximityReport",
    "Raddec",
    "now_ms",
]

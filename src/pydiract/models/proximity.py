"""DirAct proximity report model."""

from __future__ import annotations

from pydantic import Field

from pydiract.models._base import DirActBaseModel, InstanceId, now_ms

Acceleration = tuple[float | None, float | None, float | None]


class NearestDevice(DirActBaseModel):
    """One neighbour heard by the reporting device."""

    instance_id: InstanceId
    rssi: int = Field(..., ge=-92, le=-29, description="Received signal strength in dBm")


class ProximityReport(DirActBaseModel):
    """A decoded DirAct proximity packet.

    Parameters
    ----------
    cyclic_count : int
        Rolling transmission counter from the frame byte.
    instance_id : str
        Identity of the reporting device.
    acceleration : tuple
        X, Y and Z acceleration in g; ``None`` where the device
        reported no reading.
    battery_percentage : int
        Battery level, 0-100.
    nearest : tuple of NearestDevice
        Neighbours in the order they appear on the wire.
    timestamp : int
        Capture time in epoch milliseconds.
    """

    cyclic_count: int = Field(..., ge=0, le=15)
    instance_id: InstanceId
    acceleration: Acceleration = (None, None, None)
    battery_percentage: int = Field(..., ge=0, le=100)
    nearest: tuple[NearestDevice, ...] = ()
    timestamp: int = Field(default_factory=now_ms)

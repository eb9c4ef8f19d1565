"""Input record supplied by the upstream radio-decoding pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Raddec(BaseModel):
    """The slice of a raddec the digester reads.

    Only ``packets`` and ``timestamp`` matter here; every other raddec
    property (transmitter id, RSSI signature, ...) is ignored.  Packets
    stay as received, raw bytes or hex text, and are converted one at a
    time so that a single malformed packet cannot reject the record.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    packets: tuple[bytes | str, ...] = ()
    timestamp: int | None = Field(default=None, description="Capture time in epoch milliseconds")

    @field_validator("packets", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return () if value is None else value

    @property
    def has_packets(self) -> bool:
        return bool(self.packets)

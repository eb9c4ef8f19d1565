"""Tests for the DirAct record models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pydiract.models import DigestEntry, DigestPage, DirActDigest, NearestDevice, ProximityReport, Raddec


class TestInstanceId:
    def test_normalized_to_lowercase(self) -> None:
        assert NearestDevice(instance_id="ABCDEF01", rssi=-50).instance_id == "abcdef01"

    def test_bytes_accepted(self) -> None:
        assert DigestEntry(instance_id=b"\x01\x02\x03\x04", count=1).instance_id == "01020304"

    @pytest.mark.parametrize("value", ["1234567", "123456789", "1234567g"])
    def test_invalid_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            DigestEntry(instance_id=value, count=1)


def test_proximity_report_dumps_camel_case() -> None:
    report = ProximityReport(
        cyclic_count=3,
        instance_id="12345678",
        acceleration=(0.0, None, -1.0),
        battery_percentage=50,
        nearest=(NearestDevice(instance_id="aaaaaaaa", rssi=-60),),
        timestamp=10,
    )

    dumped = report.model_dump(mode="json", by_alias=True)

    assert dumped == {
        "cyclicCount": 3,
        "instanceId": "12345678",
        "acceleration": [0.0, None, -1.0],
        "batteryPercentage": 50,
        "nearest": [{"instanceId": "aaaaaaaa", "rssi": -60}],
        "timestamp": 10,
    }


def test_models_are_frozen() -> None:
    digest = DirActDigest(instance_id="12345678", digest_timestamp=1, interactions=(), timestamp=1)
    with pytest.raises(ValidationError):
        digest.digest_timestamp = 2  # type: ignore[misc]


def test_digest_page_limits_entries() -> None:
    entries = tuple(DigestEntry(instance_id="00000001", count=1) for _ in range(4))
    with pytest.raises(ValidationError):
        DigestPage(page_number=0, is_last_page=True, digest_timestamp=1, instance_id="12345678", entries=entries)


def test_digest_timestamp_is_23_bit() -> None:
    with pytest.raises(ValidationError):
        DigestPage(page_number=0, is_last_page=True, digest_timestamp=1 << 23, instance_id="12345678")


def test_raddec_ignores_unrelated_properties() -> None:
    raddec = Raddec.model_validate({"transmitterId": "aabbccddeeff", "packets": ["00ff"], "timestamp": 5})
    assert raddec.packets == ("00ff",)
    assert raddec.has_packets
    assert not Raddec(packets=()).has_packets

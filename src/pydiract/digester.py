"""DirAct digester: routes raddec packets to decoders and consumers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydiract.config import DirActConfig
from pydiract.decoding import PacketType, classify, decode_digest_page, decode_proximity, to_packet_bytes
from pydiract.exceptions import DirActDecodeError
from pydiract.handlers import DecodeErrorHandler, DigestHandler, ProximityHandler, ignore, is_registered
from pydiract.models._base import now_ms
from pydiract.models.raddec import Raddec
from pydiract.state.reassembler import DigestReassembler
from pydiract.state.store import BoundedDigestStore, DigestStore

_logger = logging.getLogger(__name__)


class DirActDigester:
    """Turn a raddec stream into DirAct proximity reports and digests.

    Usage::

        digester = DirActDigester(on_proximity=print, on_digest=print)
        digester.handle_raddec({"packets": [...], "timestamp": 1600000000000})

    Consumers are called synchronously, before ``handle_raddec``
    returns.  A packet that fails to decode is logged and skipped
    (reported to ``on_decode_error`` if given); with
    ``config.raise_on_decode_error`` the error propagates instead.

    Not thread-safe: feed each digester from a single thread, or
    serialize calls externally.
    """

    def __init__(
        self,
        config: DirActConfig | None = None,
        *,
        on_proximity: ProximityHandler | None = None,
        on_digest: DigestHandler | None = None,
        on_decode_error: DecodeErrorHandler | None = None,
        store: DigestStore | None = None,
    ) -> None:
        self._config = config if config is not None else DirActConfig()
        self._on_proximity: ProximityHandler = on_proximity or ignore
        self._on_digest: DigestHandler = on_digest or ignore
        self._on_decode_error: DecodeErrorHandler = on_decode_error or ignore
        if store is None and self._config.is_bounded:
            store = BoundedDigestStore.from_config(self._config)
        self.reassembler = DigestReassembler(store)
        self.decode_errors: int = 0

    @property
    def config(self) -> DirActConfig:
        return self._config

    def handle_raddec(self, raddec: Raddec | Mapping[str, Any]) -> None:
        """Process every packet of *raddec* that is DirAct-related."""
        if not isinstance(raddec, Raddec):
            raddec = Raddec.model_validate(raddec)
        if not raddec.has_packets:
            return

        timestamp = raddec.timestamp if raddec.timestamp is not None else now_ms()
        for packet in raddec.packets:
            self.handle_packet(packet, timestamp)

    def handle_packet(self, packet: bytes | str, timestamp: int | None = None) -> None:
        """Route one wire packet; unknown or unsubscribed types are skipped."""
        if timestamp is None:
            timestamp = now_ms()
        try:
            packet_type = classify(packet)
            if packet_type is PacketType.PROXIMITY and is_registered(self._on_proximity):
                self._on_proximity(decode_proximity(to_packet_bytes(packet), timestamp))
            elif packet_type is PacketType.DIGEST and is_registered(self._on_digest):
                page = decode_digest_page(to_packet_bytes(packet), self._config.count_policy)
                digest = self.reassembler.add_page(page, timestamp)
                if digest is not None:
                    self._on_digest(digest)
        except DirActDecodeError as exc:
            self.decode_errors += 1
            if self._config.raise_on_decode_error:
                raise
            _logger.warning("Dropping undecodable %s packet: %s", exc.packet_type or "DirAct", exc)
            self._on_decode_error(exc)

"""Consumer callback types.

A digester is wired with one callback per output channel.  Leaving a
channel at :func:`ignore` turns that packet type off entirely: its
packets are neither decoded nor buffered.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydiract.exceptions import DirActDecodeError
from pydiract.models.digest import DirActDigest
from pydiract.models.proximity import ProximityReport

ProximityHandler = Callable[[ProximityReport], None]
DigestHandler = Callable[[DirActDigest], None]
DecodeErrorHandler = Callable[[DirActDecodeError], None]


def ignore(_record: Any) -> None:
    """No-op handler marking a channel as unsubscribed."""


def is_registered(handler: Callable[..., None]) -> bool:
    return handler is not ignore

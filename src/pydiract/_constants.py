"""Wire-level constants for the DirAct beacon format."""

from __future__ import annotations

# Signature bytes at a fixed offset into each advertising packet:
# manufacturer-specific AD type, company code 0x0583, DirAct frame type.
PROXIMITY_SIGNATURE = bytes.fromhex("ff830501")
DIGEST_SIGNATURE = bytes.fromhex("ff830511")
SIGNATURE_OFFSET = 12
SIGNATURE_LENGTH = len(PROXIMITY_SIGNATURE)

# The body starts at the last signature byte (the DirAct frame type).
BODY_OFFSET = SIGNATURE_OFFSET + SIGNATURE_LENGTH - 1

# Offsets relative to the body.
FRAME_BYTE = 1
INSTANCE_ID_OFFSET = 2
INSTANCE_ID_LENGTH = 4
PACKED_FIELD_OFFSET = 6
BATTERY_OFFSET = 8
LIST_OFFSET = 9
LIST_ENTRY_LENGTH = INSTANCE_ID_LENGTH + 1

# Bytes of the body not counted by the frame length (type byte + frame byte).
FRAME_OVERHEAD = 2
# Smallest frame length that still covers the fixed header.
MIN_FRAME_LENGTH = LIST_OFFSET - FRAME_OVERHEAD

FRAME_LENGTH_MASK = 0x1F
FRAME_COUNTER_SHIFT = 5

DIGEST_TIMESTAMP_MASK = 0x7FFFFF
DIGEST_LAST_PAGE_BIT = 0x800000
DEVICES_PER_PAGE = 3

# Count values above this threshold use the scaled encoding when enabled.
SCALED_COUNT_THRESHOLD = 128

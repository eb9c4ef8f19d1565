"""Reassembly state.

Everything that outlives a single packet lives here: per-device digest
accumulators, the stores that hold them and the reassembler that
applies pages to them.
"""

from pydiract.state.accumulator import AccumulatorState, DigestAccumulator
from pydiract.state.reassembler import DigestReassembler
from pydiract.state.store import BoundedDigestStore, DigestStore, InMemoryDigestStore

__all__ = [
    "AccumulatorState",
    "BoundedDigestStore",
    "DigestAccumulator",
    "DigestReassembler",
    "DigestStore",
    "InMemoryDigestStore",
]

from __future__ import annotations

from datetime import UTC, datetime

from pydiract.models import DigestEntry, DigestPage
from pydiract.state import AccumulatorState, DigestReassembler, InMemoryDigestStore

DEVICE = "12345678"


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _page(
    page_number: int,
    count: int,
    *,
    last: bool = False,
    epoch: int = 1000,
    instance_id: str = DEVICE,
) -> DigestPage:
    first = page_number * 3
    return DigestPage(
        page_number=page_number,
        is_last_page=last,
        digest_timestamp=epoch,
        instance_id=instance_id,
        entries=tuple(DigestEntry(instance_id=f"{first + i:08x}", count=first + i) for i in range(count)),
    )


def test_single_last_page_completes_immediately() -> None:
    reassembler = DigestReassembler(clock=_dt)

    digest = reassembler.add_page(_page(0, 2, last=True), timestamp=42)

    assert digest is not None
    assert digest.instance_id == DEVICE
    assert digest.digest_timestamp == 1000
    assert [e.count for e in digest.interactions] == [0, 1]
    assert digest.timestamp == 42


def test_in_order_and_out_of_order_yield_same_digest() -> None:
    in_order = DigestReassembler(clock=_dt)
    assert in_order.add_page(_page(0, 3), timestamp=1) is None
    forward = in_order.add_page(_page(1, 2, last=True), timestamp=2)

    reversed_order = DigestReassembler(clock=_dt)
    assert reversed_order.add_page(_page(1, 2, last=True), timestamp=1) is None
    backward = reversed_order.add_page(_page(0, 3), timestamp=2)

    assert forward is not None
    assert backward is not None
    assert forward.interactions == backward.interactions
    assert [e.instance_id for e in forward.interactions] == [f"{i:08x}" for i in range(5)]


def test_duplicate_last_page_emits_once() -> None:
    reassembler = DigestReassembler(clock=_dt)
    last = _page(0, 1, last=True)

    assert reassembler.add_page(last) is not None
    assert reassembler.add_page(last) is None
    assert reassembler.add_page(_page(1, 1, last=True)) is None

    accumulator = reassembler.accumulator(DEVICE)
    assert accumulator is not None
    assert accumulator.state is AccumulatorState.COMPLETE
    # Absorbed pages must not mutate the completed accumulator.
    assert sorted(accumulator.entries) == [0]


def test_new_epoch_supersedes_incomplete_one() -> None:
    reassembler = DigestReassembler(clock=_dt)

    assert reassembler.add_page(_page(0, 3, epoch=1)) is None
    assert reassembler.add_page(_page(0, 3, epoch=2)) is None

    accumulator = reassembler.accumulator(DEVICE)
    assert accumulator is not None
    assert accumulator.digest_timestamp == 2

    # A late page from epoch 1 starts over rather than completing epoch 1's
    # original pages; it never yields the abandoned digest.
    late = reassembler.add_page(_page(1, 1, last=True, epoch=1))
    assert late is None
    accumulator = reassembler.accumulator(DEVICE)
    assert accumulator is not None
    assert accumulator.digest_timestamp == 1
    assert sorted(accumulator.entries) == [3]


def test_missing_middle_page_blocks_completion() -> None:
    reassembler = DigestReassembler(clock=_dt)
    assert reassembler.add_page(_page(0, 3)) is None
    assert reassembler.add_page(_page(2, 1, last=True)) is None

    accumulator = reassembler.accumulator(DEVICE)
    assert accumulator is not None
    assert accumulator.expected_count == 7
    assert not accumulator.is_complete

    digest = reassembler.add_page(_page(1, 3))
    assert digest is not None
    assert [e.count for e in digest.interactions] == list(range(7))


def test_devices_are_independent() -> None:
    store = InMemoryDigestStore()
    reassembler = DigestReassembler(store, clock=_dt)

    assert reassembler.add_page(_page(0, 3, instance_id="aaaaaaaa")) is None
    digest = reassembler.add_page(_page(0, 1, last=True, instance_id="bbbbbbbb"))

    assert digest is not None
    assert digest.instance_id == "bbbbbbbb"
    assert len(store) == 2
    assert "aaaaaaaa" in store


def test_completed_epoch_replaced_by_next_epoch() -> None:
    reassembler = DigestReassembler(clock=_dt)
    first = reassembler.add_page(_page(0, 1, last=True, epoch=10))
    second = reassembler.add_page(_page(0, 2, last=True, epoch=11))

    assert first is not None
    assert second is not None
    assert second.digest_timestamp == 11
    assert len(second.interactions) == 2


def test_empty_last_page() -> None:
    reassembler = DigestReassembler(clock=_dt)
    assert reassembler.add_page(_page(0, 3)) is None
    digest = reassembler.add_page(_page(1, 0, last=True))
    assert digest is not None
    assert len(digest.interactions) == 3


def test_entries_past_last_page_are_left_out() -> None:
    reassembler = DigestReassembler(clock=_dt)
    assert reassembler.add_page(_page(0, 3)) is None
    # Page numbered beyond the eventual last page.
    assert reassembler.add_page(_page(2, 3)) is None

    digest = reassembler.add_page(_page(1, 2, last=True))

    assert digest is not None
    assert [e.count for e in digest.interactions] == [0, 1, 2, 3, 4]

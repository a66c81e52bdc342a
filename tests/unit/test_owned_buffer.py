from __future__ import annotations

import copy
import logging
import pickle

import pytest

from growseq.buffer import OwnedBuffer, allocate_block
from growseq.errors import AllocationError, BufferOwnershipError


@pytest.mark.unit
def test_default_buffer_is_empty():
    buf = OwnedBuffer()
    assert not buf
    assert buf.get() is None
    assert len(buf) == 0


@pytest.mark.unit
def test_create_zero_size_yields_empty_state():
    buf = OwnedBuffer.create(0, int)
    assert not buf
    assert buf.get() is None


@pytest.mark.unit
def test_create_fills_every_slot_with_default():
    buf = OwnedBuffer.create(4, int)
    assert buf
    assert len(buf) == 4
    assert [buf[i] for i in range(4)] == [0, 0, 0, 0]

    none_filled = OwnedBuffer.create(2)
    assert [none_filled[i] for i in range(2)] == [None, None]


@pytest.mark.unit
def test_create_calls_factory_per_slot():
    buf = OwnedBuffer.create(3, list)
    buf[0].append("x")
    assert buf[1] == []
    assert buf[0] is not buf[1]


@pytest.mark.unit
def test_create_with_failing_factory_leaves_nothing_behind():
    calls = []

    def factory():
        calls.append(1)
        if len(calls) == 3:
            raise RuntimeError("boom")
        return 0

    with pytest.raises(RuntimeError, match="boom"):
        OwnedBuffer.create(5, factory)


@pytest.mark.unit
def test_indexed_write_then_read():
    buf = OwnedBuffer.create(3, int)
    buf[1] = "value"
    assert buf[1] == "value"
    assert buf[0] == 0


@pytest.mark.unit
def test_release_returns_block_and_empties_owner():
    buf = OwnedBuffer.create(2, int)
    block = buf.get()
    released = buf.release()
    assert released is block
    assert not buf
    assert buf.get() is None
    assert buf.release() is None


@pytest.mark.unit
def test_adopt_takes_existing_block():
    block = allocate_block(3)
    for i in range(3):
        block[i] = i * 10
    buf = OwnedBuffer.adopt(block)
    assert buf.get() is block
    assert buf[2] == 20


@pytest.mark.unit
def test_get_does_not_transfer_ownership():
    buf = OwnedBuffer.create(1, int)
    first = buf.get()
    assert buf.get() is first
    assert buf


@pytest.mark.unit
def test_swap_exchanges_blocks():
    left = OwnedBuffer.create(2, int)
    right = OwnedBuffer()
    left_block = left.get()

    left.swap(right)

    assert not left
    assert right.get() is left_block


@pytest.mark.unit
def test_transfer_moves_block_and_empties_source():
    source = OwnedBuffer.create(3, int)
    block = source.get()

    target = source.transfer()

    assert target.get() is block
    assert not source


@pytest.mark.unit
def test_close_is_idempotent_and_context_manager_releases():
    buf = OwnedBuffer.create(2, int)
    buf.close()
    assert not buf
    buf.close()

    with OwnedBuffer.create(2, int) as scoped:
        assert scoped
    assert not scoped


@pytest.mark.unit
def test_context_manager_releases_on_error():
    with pytest.raises(ValueError):
        with OwnedBuffer.create(2, int) as scoped:
            raise ValueError("inside")
    assert not scoped


@pytest.mark.unit
@pytest.mark.parametrize("duplicate", [copy.copy, copy.deepcopy, pickle.dumps])
def test_buffer_cannot_be_duplicated(duplicate):
    buf = OwnedBuffer.create(2, int)
    with pytest.raises(BufferOwnershipError):
        duplicate(buf)
    assert buf


@pytest.mark.unit
def test_allocate_block_rejects_requests_over_limit(max_capacity, caplog: pytest.LogCaptureFixture):
    max_capacity(8)
    assert len(allocate_block(8)) == 8
    with caplog.at_level(logging.WARNING, logger="growseq.buffer"):
        with pytest.raises(AllocationError) as excinfo:
            allocate_block(9)
    assert excinfo.value.requested == 9
    assert excinfo.value.code == "E_ALLOCATION"
    assert isinstance(excinfo.value, MemoryError)
    assert "max_capacity" in caplog.text


@pytest.mark.unit
def test_allocate_block_rejects_negative_size():
    with pytest.raises(ValueError):
        allocate_block(-1)


@pytest.mark.unit
def test_allocation_is_logged_at_debug(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger="growseq.buffer"):
        OwnedBuffer.create(5, int)
    assert "allocated block of 5 slots" in caplog.text

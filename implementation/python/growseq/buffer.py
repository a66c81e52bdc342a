"""Move-only owning handle to one contiguous block of object slots."""

from __future__ import annotations

from typing import Any, Callable, Optional
import ctypes
import logging

from growseq.config import get_settings
from growseq.errors import AllocationError, BufferOwnershipError

logger = logging.getLogger("growseq.buffer")

# A ctypes array of py_object slots.
Block = Any


def allocate_block(size: int) -> Block:
    """
    Allocate a raw block of ``size`` object slots.

    Slots are left unset; reading one before it is written raises ``ValueError``
    from ctypes. Requests above the configured ``max_capacity`` and requests
    the interpreter cannot satisfy both raise ``AllocationError``.
    """
    if size < 0:
        raise ValueError(f"block size must be non-negative, got {size}")
    limit = get_settings().max_capacity
    if size > limit:
        logger.warning("refusing block of %d slots (max_capacity=%d)", size, limit)
        raise AllocationError(size, f"cannot allocate block of {size} slots: exceeds max_capacity {limit}")
    try:
        block = (size * ctypes.py_object)()
    except (MemoryError, OverflowError) as exc:
        logger.warning("allocation of %d slots failed: %s", size, exc)
        raise AllocationError(size) from exc
    logger.debug("allocated block of %d slots", size)
    return block


class OwnedBuffer:
    """
    Exclusive owner of zero or one block.

    Ownership is never duplicated: copying raises ``BufferOwnershipError``.
    It moves with ``transfer()`` or ``swap()`` and is given up with
    ``release()``. ``close()`` (or leaving a ``with`` block) drops the block
    exactly once.

    Indexing is unchecked: the caller guarantees ``0 <= index < len(buffer)``.
    """

    __slots__ = ("_block",)

    def __init__(self) -> None:
        self._block: Optional[Block] = None

    @classmethod
    def create(cls, size: int, default_factory: Optional[Callable[[], Any]] = None) -> "OwnedBuffer":
        """Allocate ``size`` slots filled with ``default_factory()`` (or ``None``).

        ``size == 0`` yields the empty state. The block is attached only once
        every slot is filled, so a failing factory leaves nothing behind.
        """
        buffer = cls()
        if size == 0:
            return buffer
        block = allocate_block(size)
        for i in range(size):
            block[i] = default_factory() if default_factory is not None else None
        buffer._block = block
        return buffer

    @classmethod
    def adopt(cls, block: Optional[Block]) -> "OwnedBuffer":
        """Take ownership of an already allocated block."""
        buffer = cls()
        buffer._block = block
        return buffer

    def release(self) -> Optional[Block]:
        """Give up ownership and return the block; self becomes empty."""
        block, self._block = self._block, None
        return block

    def get(self) -> Optional[Block]:
        """Return the block without transferring ownership."""
        return self._block

    def transfer(self) -> "OwnedBuffer":
        """Move the block into a new buffer; self becomes empty."""
        return OwnedBuffer.adopt(self.release())

    def swap(self, other: "OwnedBuffer") -> None:
        self._block, other._block = other._block, self._block

    def close(self) -> None:
        """Drop the owned block. No-op when empty."""
        if self._block is not None:
            logger.debug("released block of %d slots", len(self._block))
            self._block = None

    def __enter__(self) -> "OwnedBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __getitem__(self, index: int) -> Any:
        return self._block[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self._block[index] = value

    def __len__(self) -> int:
        return 0 if self._block is None else len(self._block)

    def __bool__(self) -> bool:
        return self._block is not None

    def __copy__(self):
        raise BufferOwnershipError("OwnedBuffer cannot be copied; use transfer() or swap()")

    def __deepcopy__(self, memo):
        raise BufferOwnershipError("OwnedBuffer cannot be copied; use transfer() or swap()")

    def __reduce_ex__(self, protocol):
        raise BufferOwnershipError("OwnedBuffer cannot be pickled")

    def __repr__(self) -> str:
        if self._block is None:
            return "OwnedBuffer(empty)"
        return f"OwnedBuffer(slots={len(self._block)})"

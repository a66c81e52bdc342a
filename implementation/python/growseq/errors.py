"""Exception hierarchy for growseq containers."""

from __future__ import annotations


class GrowSeqError(RuntimeError):
    """Base runtime error for growseq containers."""

    code = "E_GROWSEQ"


class SequenceIndexError(GrowSeqError, IndexError):
    """Raised when a checked index or insert position lies outside the sequence."""

    code = "E_OUT_OF_RANGE"

    def __init__(self, index: int, size: int, message: str | None = None):
        detail = message or f"index {index} out of range for sequence of size {size}"
        super().__init__(detail)
        self.index = index
        self.size = size


class AllocationError(GrowSeqError, MemoryError):
    """Raised when a block of slots cannot be allocated."""

    code = "E_ALLOCATION"

    def __init__(self, requested: int, message: str | None = None):
        detail = message or f"cannot allocate block of {requested} slots"
        super().__init__(detail)
        self.requested = requested


class BufferOwnershipError(GrowSeqError, TypeError):
    """Raised when an owned buffer would be duplicated instead of transferred."""

    code = "E_OWNERSHIP"


class StaleViewError(GrowSeqError):
    """Raised when a view is used after its sequence was mutated."""

    code = "E_STALE_VIEW"

"""growseq: growable contiguous sequence over an exclusively owned buffer."""

from growseq.buffer import OwnedBuffer, allocate_block
from growseq.errors import (
    AllocationError,
    BufferOwnershipError,
    GrowSeqError,
    SequenceIndexError,
    StaleViewError,
)
from growseq.reservation import Reservation, reserve
from growseq.sequence import GrowableSequence, SequenceView, grown_capacity, lexicographic_less
from growseq.version import __version__

__all__ = [
    "AllocationError",
    "BufferOwnershipError",
    "GrowSeqError",
    "GrowableSequence",
    "OwnedBuffer",
    "Reservation",
    "SequenceIndexError",
    "SequenceView",
    "StaleViewError",
    "__version__",
    "allocate_block",
    "grown_capacity",
    "lexicographic_less",
    "reserve",
]

"""Growable contiguous sequence built on a single ``OwnedBuffer``."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union
import copy
import logging
import operator

from growseq.buffer import Block, OwnedBuffer, allocate_block
from growseq.config import get_settings
from growseq.errors import SequenceIndexError, StaleViewError
from growseq.reservation import Reservation

logger = logging.getLogger("growseq.sequence")

T = TypeVar("T")

DefaultFactory = Callable[[], Any]

_MISSING = object()

# Written into vacated slots. ctypes keeps no reference for None, so a
# None write would leave the previous object pinned in the block.
_VACANT = object()


def _none_factory() -> None:
    return None


def _debug_assert(condition: bool, message: str) -> None:
    """Precondition check for unchecked paths; gone under ``python -O``."""
    if get_settings().debug_checks:
        assert condition, message


def _copy_slots(source: OwnedBuffer, start: int, stop: int, target: Block, target_start: int) -> None:
    for offset in range(stop - start):
        target[target_start + offset] = source[start + offset]


def grown_capacity(capacity: int) -> int:
    """Capacity after one growth step: doubling, and 2 for an empty sequence."""
    return 2 * capacity if capacity else 2


def lexicographic_less(left: "GrowableSequence[Any]", right: "GrowableSequence[Any]") -> bool:
    """
    Return True when ``left`` orders strictly before ``right``.

    Elements are compared pairwise with ``<``; the first differing pair
    decides. When one sequence is a prefix of the other, the shorter one
    orders first.
    """
    for a, b in zip(left, right):
        if a < b:
            return True
        if b < a:
            return False
    return len(left) < len(right)


class SequenceView(Generic[T]):
    """
    Borrowed window over ``[0, size)`` of a ``GrowableSequence``.

    The view reads through to the sequence's storage and stays valid only
    until the next structural mutation of the sequence (any change of size,
    capacity or storage, including ``swap``). After that every access raises
    ``StaleViewError``. Assigning to an existing element with ``seq[i] = v``
    is not structural and leaves views valid.
    """

    __slots__ = ("_owner", "_generation", "_size")

    def __init__(self, owner: "GrowableSequence[T]"):
        self._owner = owner
        self._generation = owner._generation
        self._size = owner._size

    @property
    def valid(self) -> bool:
        return self._owner._generation == self._generation

    def _validate(self) -> None:
        if not self.valid:
            raise StaleViewError("sequence was mutated after this view was taken")

    def __len__(self) -> int:
        self._validate()
        return self._size

    def __getitem__(self, index: int) -> T:
        self._validate()
        position = operator.index(index)
        if position < 0 or position >= self._size:
            raise SequenceIndexError(position, self._size)
        return self._owner._items[position]

    def __iter__(self) -> Iterator[T]:
        position = 0
        while True:
            self._validate()
            if position >= self._size:
                return
            yield self._owner._items[position]
            position += 1

    def __repr__(self) -> str:
        if not self.valid:
            return "SequenceView(stale)"
        return f"SequenceView({[self._owner._items[i] for i in range(self._size)]!r})"


class GrowableSequence(Generic[T]):
    """
    Dynamic array over one exclusively owned block of slots.

    ``size`` counts valid elements, ``capacity`` counts allocated slots and
    ``size <= capacity`` always holds. Slots past ``size`` are unspecified.

    Growth allocates the new block, relocates the elements into it and
    commits with a single buffer swap, so a failed allocation (or a failing
    ``default_factory``) leaves the sequence unchanged.

    Checked access (``at``, ``seq[i]``) raises ``SequenceIndexError`` for any
    index outside ``[0, size)``; negative indices are not wrapped.
    ``get_unchecked``/``set_unchecked`` skip validation and only assert
    their precondition.
    """

    __slots__ = ("_items", "_size", "_capacity", "_default_factory", "_generation", "_reallocations")

    def __init__(
        self,
        values: Union[Iterable[T], Reservation, None] = None,
        *,
        default_factory: Optional[DefaultFactory] = None,
    ):
        self._items = OwnedBuffer()
        self._size = 0
        self._capacity = 0
        self._default_factory: DefaultFactory = default_factory or _none_factory
        self._generation = 0
        self._reallocations = 0
        if values is None:
            return
        if isinstance(values, Reservation):
            self.reserve(values.capacity)
            return
        items = list(values)
        if items:
            block = allocate_block(len(items))
            for i, value in enumerate(items):
                block[i] = value
            self._items = OwnedBuffer.adopt(block)
        self._size = self._capacity = len(items)

    @classmethod
    def with_size(
        cls,
        size: int,
        value: Any = _MISSING,
        *,
        default_factory: Optional[DefaultFactory] = None,
    ) -> "GrowableSequence[T]":
        """Build ``size`` elements, each ``value`` or a default-constructed one."""
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        seq = cls(default_factory=default_factory)
        fill = seq._default_factory if value is _MISSING else (lambda: copy.copy(value))
        seq._items = OwnedBuffer.create(size, fill)
        seq._size = seq._capacity = size
        return seq

    @classmethod
    def copy_of(cls, other: "GrowableSequence[T]") -> "GrowableSequence[T]":
        """Independent copy of ``other``; capacity collapses to its size."""
        seq = cls(default_factory=other._default_factory)
        if other._size:
            block = allocate_block(other._size)
            _copy_slots(other._items, 0, other._size, block, 0)
            seq._items = OwnedBuffer.adopt(block)
        seq._size = seq._capacity = other._size
        return seq

    @classmethod
    def move_from(cls, other: "GrowableSequence[T]") -> "GrowableSequence[T]":
        """Take ``other``'s storage; ``other`` is left with size and capacity 0."""
        seq = cls(default_factory=other._default_factory)
        seq.assign_move(other)
        return seq

    # ----------------- Accessors -----------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def reallocations(self) -> int:
        """Number of times this sequence moved to a larger block."""
        return self._reallocations

    def __len__(self) -> int:
        return self._size

    # ----------------- Element access -----------------

    def get_unchecked(self, index: int) -> T:
        """Return the element at ``index``. Precondition: ``0 <= index < size``."""
        _debug_assert(0 <= index < self._size, f"unchecked index {index} out of range for size {self._size}")
        return self._items[index]

    def set_unchecked(self, index: int, value: T) -> None:
        """Overwrite the element at ``index``. Precondition: ``0 <= index < size``."""
        _debug_assert(0 <= index < self._size, f"unchecked index {index} out of range for size {self._size}")
        self._items[index] = value

    def _checked_index(self, index: int) -> int:
        position = operator.index(index)
        if position < 0 or position >= self._size:
            raise SequenceIndexError(position, self._size)
        return position

    def at(self, index: int) -> T:
        return self._items[self._checked_index(index)]

    def __getitem__(self, index: int) -> T:
        return self._items[self._checked_index(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[self._checked_index(index)] = value

    # ----------------- Mutators -----------------

    def _touch(self) -> None:
        self._generation += 1

    def _vacate(self, start: int, stop: int) -> None:
        # Drop references held by slots leaving the valid range.
        for i in range(start, stop):
            self._items[i] = _VACANT

    def _commit(self, block: Block, capacity: int) -> None:
        replacement = OwnedBuffer.adopt(block)
        self._items.swap(replacement)
        replacement.close()
        logger.debug("grew sequence capacity %d -> %d", self._capacity, capacity)
        self._capacity = capacity
        self._reallocations += 1

    def clear(self) -> None:
        """Drop every element; capacity and storage are kept."""
        self._vacate(0, self._size)
        self._size = 0
        self._touch()

    def reserve(self, new_capacity: int) -> None:
        """Grow storage to exactly ``new_capacity`` slots. Never shrinks."""
        if new_capacity <= self._capacity:
            return
        block = allocate_block(new_capacity)
        _copy_slots(self._items, 0, self._size, block, 0)
        self._commit(block, new_capacity)
        self._touch()

    def resize(self, new_size: int) -> None:
        """
        Set the number of elements to ``new_size``.

        Shrinking only moves ``size``. Growing default-constructs the new
        slots, reallocating to ``2 * new_size`` when capacity is exceeded.
        """
        if new_size < 0:
            raise ValueError(f"size must be non-negative, got {new_size}")
        if new_size <= self._size:
            self._vacate(new_size, self._size)
        elif new_size <= self._capacity:
            for i in range(self._size, new_size):
                self._items[i] = self._default_factory()
        else:
            new_capacity = 2 * new_size
            block = allocate_block(new_capacity)
            _copy_slots(self._items, 0, self._size, block, 0)
            for i in range(self._size, new_size):
                block[i] = self._default_factory()
            self._commit(block, new_capacity)
        self._size = new_size
        self._touch()

    def push_back(self, value: T) -> None:
        """Append ``value``, doubling capacity when full. Amortized O(1)."""
        if self._size == self._capacity:
            new_capacity = grown_capacity(self._capacity)
            block = allocate_block(new_capacity)
            _copy_slots(self._items, 0, self._size, block, 0)
            block[self._size] = value
            self._commit(block, new_capacity)
        else:
            self._items[self._size] = value
        self._size += 1
        self._touch()

    def insert(self, position: int, value: T) -> int:
        """
        Insert ``value`` before ``position`` and return its position.

        ``position`` must lie in ``[0, size]``; ``size`` appends. Anything
        else raises ``SequenceIndexError``. Linear in ``size - position``.
        """
        position = operator.index(position)
        if position < 0 or position > self._size:
            raise SequenceIndexError(
                position,
                self._size,
                f"insert position {position} outside [0, {self._size}]",
            )
        if self._size == self._capacity:
            new_capacity = grown_capacity(self._capacity)
            block = allocate_block(new_capacity)
            _copy_slots(self._items, 0, position, block, 0)
            block[position] = value
            _copy_slots(self._items, position, self._size, block, position + 1)
            self._commit(block, new_capacity)
        else:
            # Backward shift so overlapping slots are read before overwritten.
            for i in range(self._size, position, -1):
                self._items[i] = self._items[i - 1]
            self._items[position] = value
        self._size += 1
        self._touch()
        return position

    def pop_back(self) -> None:
        """Remove the last element. Precondition: the sequence is not empty."""
        _debug_assert(self._size > 0, "pop_back on empty sequence")
        self._size -= 1
        self._vacate(self._size, self._size + 1)
        self._touch()

    def erase(self, position: int) -> int:
        """
        Remove the element at ``position`` and return ``position``.

        Precondition: ``0 <= position < size``.
        """
        _debug_assert(self._size > 0, "erase on empty sequence")
        _debug_assert(0 <= position < self._size, f"erase position {position} out of range for size {self._size}")
        for i in range(position, self._size - 1):
            self._items[i] = self._items[i + 1]
        self._size -= 1
        self._vacate(self._size, self._size + 1)
        self._touch()
        return position

    def swap(self, other: "GrowableSequence[T]") -> None:
        """Exchange storage, size and capacity with ``other`` in O(1)."""
        self._items.swap(other._items)
        self._size, other._size = other._size, self._size
        self._capacity, other._capacity = other._capacity, self._capacity
        self._default_factory, other._default_factory = other._default_factory, self._default_factory
        self._touch()
        other._touch()

    # ----------------- Assignment -----------------

    def assign(self, other: "GrowableSequence[T]") -> None:
        """Copy-assign from ``other``; on allocation failure self is untouched."""
        if other is self:
            return
        temp = GrowableSequence.copy_of(other)
        self.swap(temp)
        temp._items.close()

    def assign_move(self, other: "GrowableSequence[T]") -> None:
        """Move-assign from ``other``; ``other`` ends with size and capacity 0."""
        if other is self:
            return
        self._items.close()
        self._items = other._items.transfer()
        self._size, other._size = other._size, 0
        self._capacity, other._capacity = other._capacity, 0
        self._default_factory = other._default_factory
        self._touch()
        other._touch()

    def __copy__(self) -> "GrowableSequence[T]":
        return GrowableSequence.copy_of(self)

    def __deepcopy__(self, memo: dict) -> "GrowableSequence[T]":
        seq: GrowableSequence[T] = GrowableSequence(default_factory=self._default_factory)
        # Registered before the elements so self-references resolve to seq.
        memo[id(self)] = seq
        if self._size:
            block = allocate_block(self._size)
            for i in range(self._size):
                block[i] = copy.deepcopy(self._items[i], memo)
            seq._items = OwnedBuffer.adopt(block)
        seq._size = seq._capacity = self._size
        return seq

    # ----------------- Comparison -----------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrowableSequence):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    def __lt__(self, other: "GrowableSequence[T]") -> bool:
        if not isinstance(other, GrowableSequence):
            return NotImplemented
        return lexicographic_less(self, other)

    def __gt__(self, other: "GrowableSequence[T]") -> bool:
        if not isinstance(other, GrowableSequence):
            return NotImplemented
        return lexicographic_less(other, self)

    def __le__(self, other: "GrowableSequence[T]") -> bool:
        if not isinstance(other, GrowableSequence):
            return NotImplemented
        return not lexicographic_less(other, self)

    def __ge__(self, other: "GrowableSequence[T]") -> bool:
        if not isinstance(other, GrowableSequence):
            return NotImplemented
        return not lexicographic_less(self, other)

    # ----------------- Traversal -----------------

    def begin(self) -> int:
        return 0

    def end(self) -> int:
        return self._size

    def view(self) -> SequenceView[T]:
        """Borrow ``[0, size)``; invalidated by the next structural mutation."""
        return SequenceView(self)

    def __iter__(self) -> Iterator[T]:
        return iter(self.view())

    def to_list(self) -> list[T]:
        return [self._items[i] for i in range(self._size)]

    def __repr__(self) -> str:
        return f"GrowableSequence({self.to_list()!r}, capacity={self._capacity})"

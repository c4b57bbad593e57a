from collections.abc import Iterable, Iterator, Sized
from typing import Any, Generic, TypeVar

from loguru import logger

from ringdeque.errors import DequeAllocationError

T = TypeVar("T")


def _allocate(size: int) -> list[Any]:
    """Returns a new buffer of `size` empty slots."""
    return [None] * size


class RingDeque(Sized, Generic[T]):
    """A double-ended queue on top of a single power-of-two sized list.

    Elements can be pushed and popped at both ends in amortized constant
    time. The buffer doubles when a push finds it full and halves when a pop
    leaves it less than a quarter occupied, so an alternating push/pop at a
    capacity boundary never reallocates on every operation.

    `push_back` writes to `buffer[back]` and then advances `back`;
    `push_front` retreats `front` and then writes to `buffer[front]`.

    Peeking or popping an empty deque is not an error: those calls return
    the `default` they are given, `None` unless stated otherwise. Use
    `is_empty` or `len()` when `None` may itself be stored.

    Not safe for concurrent use. Callers sharing a deque between threads
    must guard it with their own lock.

    Usage:
        dq = RingDeque[int]()
        dq.push_back(1)
        dq.push_front(0)
        assert dq.pop_front() == 0
    """

    def __init__(self, iterable: Iterable[T] = ()) -> None:
        """Initializes an empty deque, then appends each element of `iterable`.

        Args:
            iterable: Optional initial contents, in front-to-back order.
        """
        self._mutations = 0
        self.clear()
        self.extend(iterable)

    def clear(self) -> None:
        """Removes all elements and releases the buffer.

        A fresh single-slot buffer replaces the old one, however large it
        had grown.
        """
        self._buffer: list[Any] = _allocate(1)
        self._front = 0
        self._back = 0
        self._count = 0
        self._resizes = 0
        self._mutations += 1

    @property
    def capacity(self) -> int:
        """The number of slots in the underlying buffer, always a power of two."""
        return len(self._buffer)

    @property
    def resizes(self) -> int:
        """How many times the buffer was reallocated since the last clear."""
        return self._resizes

    @property
    def is_empty(self) -> bool:
        """Returns True if the deque holds no elements."""
        return self._count == 0

    def _full(self) -> bool:
        return self._count == len(self._buffer)

    def _sparse(self) -> bool:
        return 1 < self._count < len(self._buffer) // 4

    def _next(self, index: int) -> int:
        return (index + 1) & (len(self._buffer) - 1)

    def _previous(self, index: int) -> int:
        return (index - 1) & (len(self._buffer) - 1)

    def _resize(self, size: int) -> None:
        """Moves the live elements into a new buffer of `size` slots.

        Elements land at index 0 onwards in front-to-back order. Leaves the
        deque untouched if the allocation fails.

        Raises:
            DequeAllocationError: If the new buffer cannot be allocated.
        """
        try:
            adjusted = _allocate(size)
        except MemoryError as e:
            logger.error(f"Failed to allocate deque buffer of {size} slots.")
            raise DequeAllocationError(size) from e

        if self._front < self._back:
            # Live region is contiguous.
            adjusted[: self._count] = self._buffer[self._front : self._back]
        else:
            # Live region wraps around the end of the buffer.
            tail = self._buffer[self._front :]
            adjusted[: len(tail)] = tail
            adjusted[len(tail) : self._count] = self._buffer[: self._back]

        logger.trace(
            f"Resized deque buffer from {len(self._buffer)} to {size} slots."
        )
        self._buffer = adjusted
        self._front = 0
        self._back = self._count
        self._resizes += 1

    def _grow_if_full(self) -> None:
        if self._full():
            self._resize(len(self._buffer) * 2)

    def _shrink_if_sparse(self) -> None:
        if self._sparse():
            self._resize(len(self._buffer) // 2)

    def __len__(self) -> int:
        """Returns the current number of elements in the deque."""
        return self._count

    def __bool__(self) -> bool:
        """Returns True if the deque holds at least one element."""
        return self._count > 0

    def front(self, default: T | None = None) -> T | None:
        """Returns the first element without removing it, or `default`."""
        if self._count == 0:
            return default
        return self._buffer[self._front]

    def back(self, default: T | None = None) -> T | None:
        """Returns the last element without removing it, or `default`."""
        if self._count == 0:
            return default
        return self._buffer[self._previous(self._back)]

    def push_front(self, value: T) -> None:
        """Inserts `value` as the new first element.

        Raises:
            DequeAllocationError: If the buffer had to grow and could not.
        """
        self._grow_if_full()
        self._front = self._previous(self._front)
        self._buffer[self._front] = value
        self._count += 1
        self._mutations += 1

    def push_back(self, value: T) -> None:
        """Inserts `value` as the new last element.

        Raises:
            DequeAllocationError: If the buffer had to grow and could not.
        """
        self._grow_if_full()
        self._buffer[self._back] = value
        self._back = self._next(self._back)
        self._count += 1
        self._mutations += 1

    def pop_front(self, default: T | None = None) -> T | None:
        """Removes and returns the first element, or `default` if empty."""
        if self._count == 0:
            return default
        value = self._buffer[self._front]
        self._buffer[self._front] = None  # drop the reference for the GC
        self._front = self._next(self._front)
        self._count -= 1
        self._mutations += 1
        self._shrink_if_sparse()
        return value

    def pop_back(self, default: T | None = None) -> T | None:
        """Removes and returns the last element, or `default` if empty."""
        if self._count == 0:
            return default
        self._back = self._previous(self._back)
        value = self._buffer[self._back]
        self._buffer[self._back] = None  # drop the reference for the GC
        self._count -= 1
        self._mutations += 1
        self._shrink_if_sparse()
        return value

    def extend(self, items: Iterable[T]) -> None:
        """Pushes each element of `items` at the back, in order."""
        for item in items:
            self.push_back(item)

    def extend_front(self, items: Iterable[T]) -> None:
        """Pushes each element of `items` at the front, in order.

        The resulting front-to-back order is the reverse of `items`.
        """
        for item in items:
            self.push_front(item)

    def __iter__(self) -> Iterator[T]:
        """Yields the elements from front to back without removing them.

        Raises:
            RuntimeError: If the deque is mutated while iterating.
        """
        mutations = self._mutations
        index = self._front
        for _ in range(self._count):
            yield self._buffer[index]
            if self._mutations != mutations:
                err_msg = "deque mutated during iteration"
                raise RuntimeError(err_msg)
            index = self._next(index)

    def to_list(self) -> list[T]:
        """Returns the elements in front-to-back order as a new list."""
        return list(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RingDeque):
            return NotImplemented
        return self._count == other._count and all(
            a == b for a, b in zip(self, other)
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        """Renders the contents front to back, e.g. `[a b c]`."""
        return "[" + " ".join(str(item) for item in self) + "]"

    def __repr__(self) -> str:
        """Returns a developer-friendly representation of the deque."""
        return f"RingDeque({self.to_list()!r})"

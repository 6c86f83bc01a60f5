from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")

DEFAULT_BLOCK_SIZE = 5


class GrowableSequence(Generic[T]):
    """
    Append-only list that grows its backing storage in fixed blocks.
    reset() forgets the contents but keeps the capacity, so a buffer that is
    drained after every chunk does not reallocate on the next one.
    """

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE) -> None:
        if block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {block_size}")
        self.block_size = block_size
        self._slots: List[Optional[T]] = [None] * block_size
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def count(self) -> int:
        return self._count

    def ensure_capacity(self, needed: int) -> None:
        missing = needed - len(self._slots)
        if missing <= 0:
            return
        blocks = -(-missing // self.block_size)
        # MemoryError here is fatal for the run; nobody retries it
        self._slots.extend([None] * (blocks * self.block_size))

    def append(self, item: T) -> None:
        self.ensure_capacity(self._count + 1)
        self._slots[self._count] = item
        self._count += 1

    def pop(self) -> T:
        if self._count == 0:
            raise IndexError("pop from empty sequence")
        self._count -= 1
        item = self._slots[self._count]
        self._slots[self._count] = None
        return item  # type: ignore[return-value]

    def peek(self) -> Optional[T]:
        if self._count == 0:
            return None
        return self._slots[self._count - 1]

    def reset(self) -> None:
        for i in range(self._count):
            self._slots[i] = None
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __getitem__(self, index: int) -> T:
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("sequence index out of range")
        return self._slots[index]  # type: ignore[return-value]

    def __iter__(self) -> Iterator[T]:
        for i in range(self._count):
            yield self._slots[i]  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"GrowableSequence(count={self._count}, capacity={self.capacity})"

"""Iteration over an error and the errors that caused it."""

from __future__ import annotations

from collections import deque
from typing import Iterator


def source_of(error: BaseException) -> BaseException | None:
    """The lower-level error that caused ``error``, if any."""
    return getattr(error, "__cause__", None)


class Chain:
    """Iterator over an error followed by its causes, usable from both ends."""

    def __init__(self, head: BaseException | None = None) -> None:
        self._next = head
        self._rest: deque[BaseException] | None = None if head is not None else deque()

    def _walk(self) -> Iterator[BaseException]:
        error = self._next
        while error is not None:
            yield error
            error = source_of(error)

    def __iter__(self) -> Chain:
        return self

    def __next__(self) -> BaseException:
        if self._rest is not None:
            if self._rest:
                return self._rest.popleft()
            raise StopIteration
        error = self._next
        if error is None:
            raise StopIteration
        self._next = source_of(error)
        return error

    def next_back(self) -> BaseException | None:
        """Take the deepest remaining cause, or None when exhausted."""
        if self._rest is None:
            self._rest = deque(self._walk())
            self._next = None
        return self._rest.pop() if self._rest else None

    def __reversed__(self) -> Iterator[BaseException]:
        while (error := self.next_back()) is not None:
            yield error

    def __len__(self) -> int:
        if self._rest is not None:
            return len(self._rest)
        return sum(1 for _ in self._walk())

    def size_hint(self) -> tuple[int, int]:
        remaining = len(self)
        return remaining, remaining

    def copy(self) -> Chain:
        clone = Chain.__new__(Chain)
        clone._next = self._next
        clone._rest = None if self._rest is None else deque(self._rest)
        return clone

    __copy__ = copy
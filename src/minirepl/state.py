"""Shared state handles for command handlers.

A handler that shares mutable state with code outside the REPL keeps it in a
``Shared`` handle. The REPL runs one handler at a time, so no locking is
involved; the handle only checks at runtime that a mutable borrow is never
taken while another borrow of the same value is alive.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

from .errors import BorrowError

T = TypeVar("T")


class Shared(Generic[T]):
    """Shared-ownership cell with runtime-checked borrows."""

    __slots__ = ("_value", "_readers", "_writing")

    def __init__(self, value: T):
        self._value = value
        self._readers = 0
        self._writing = False

    @property
    def borrowed(self) -> bool:
        return self._writing or self._readers > 0

    @contextmanager
    def borrow(self) -> Iterator[T]:
        """Borrow the value for reading; any number of reads may overlap."""
        if self._writing:
            raise BorrowError("already mutably borrowed")
        self._readers += 1
        try:
            yield self._value
        finally:
            self._readers -= 1

    @contextmanager
    def borrow_mut(self) -> Iterator["Shared.Slot[T]"]:
        """Borrow the value exclusively; assign ``slot.value`` to replace it."""
        if self.borrowed:
            raise BorrowError("already borrowed")
        self._writing = True
        slot = Shared.Slot(self._value)
        try:
            yield slot
        finally:
            self._value = slot.value
            self._writing = False

    def get(self) -> T:
        with self.borrow() as value:
            return value

    def set(self, value: T) -> None:
        with self.borrow_mut() as slot:
            slot.value = value

    def update(self, func: Callable[[T], T]) -> T:
        """Replace the value with ``func(value)`` and return the new value."""
        with self.borrow_mut() as slot:
            slot.value = func(slot.value)
            return slot.value

    def __repr__(self) -> str:
        if self._writing:
            return "Shared(<borrowed>)"
        return f"Shared({self._value!r})"

    class Slot(Generic[T]):
        """Writable view handed out by ``borrow_mut``."""

        __slots__ = ("value",)

        def __init__(self, value: T):
            self.value = value

"""Readers-Writer Lock: shared reads, exclusive writes over one collection.

Invariants:
    - Any number of readers may hold the lock together
    - A writer holds it alone; no reader runs while a write is in progress
    - Waiting writers block new readers (writer preference), so writes cannot starve

Design Decisions:
    - threading.Condition, not asyncio: store operations are synchronous and short,
      and the lock is never held across an await
    - Not reentrant: a holder must not re-acquire (store methods never nest)
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Writer-preferring readers-writer lock."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()

"""Single-writer / multiple-reader lock for asyncio tasks."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager

from movingstats.errors import LockAcquisitionError


class AsyncReadWriteLock:
    """Reader/writer lock built on ``asyncio.Condition``.

    Any number of readers may hold the lock together; a writer holds it
    alone. A waiting writer blocks new readers so a steady stream of
    queries cannot starve ingestion.

    Usage::

        lock = AsyncReadWriteLock()
        async with lock.read():
            ...
        async with lock.write(timeout=1.0):
            ...
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer

    # ---- context managers ----

    @asynccontextmanager
    async def read(self, timeout: float | None = None) -> AsyncIterator[None]:
        await self._acquire(self._acquire_read(), timeout, "shared")
        try:
            yield
        finally:
            await self._release_read()

    @asynccontextmanager
    async def write(self, timeout: float | None = None) -> AsyncIterator[None]:
        await self._acquire(self._acquire_write(), timeout, "exclusive")
        try:
            yield
        finally:
            await self._release_write()

    # ---- internals ----

    @staticmethod
    async def _acquire(
        waiter: Awaitable[None], timeout: float | None, mode: str,
    ) -> None:
        if timeout is None:
            await waiter
            return
        try:
            await asyncio.wait_for(waiter, timeout)
        except asyncio.TimeoutError as e:
            raise LockAcquisitionError(
                f"Timed out after {timeout}s waiting for {mode} access to the window."
            ) from e

    async def _acquire_read(self) -> None:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and not self._writers_waiting
            )
            self._readers += 1

    async def _release_read(self) -> None:
        async with self._cond:
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    async def _acquire_write(self) -> None:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and not self._readers
                )
            except BaseException:
                # Readers held back by this writer may proceed now.
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    async def _release_write(self) -> None:
        async with self._cond:
            self._writer = False
            self._cond.notify_all()

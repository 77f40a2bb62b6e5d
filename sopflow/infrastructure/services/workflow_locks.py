"""Per-workflow asyncio locks (implements IWorkflowLockRegistry).

Serializes load -> transition -> save for one workflow inside this process.
Different workflows never share a lock. Entries are dropped once no
request holds or waits on them.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class WorkflowLockRegistry:
    """Registry of asyncio.Lock keyed by workflow id."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def lock(self, workflow_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(workflow_id, asyncio.Lock())
        self._holders[workflow_id] = self._holders.get(workflow_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[workflow_id] -= 1
            if self._holders[workflow_id] == 0:
                del self._holders[workflow_id]
                del self._locks[workflow_id]

"""Per-key debouncing of async commits."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional

from loguru import logger

CommitCallback = Callable[[Hashable, Dict[str, Any]], Awaitable[None]]


@dataclass
class _Pending:
    task: asyncio.Task
    payload: Dict[str, Any]


class Debouncer:
    """Delay a commit per key; a newer schedule for the key cancels the pending one.

    Each key holds at most one timer. Payload fields of a cancelled schedule
    are carried into the newer one, newer values winning, so the single
    commit reflects every field edited inside the window.
    """

    def __init__(self, delay: float, callback: CommitCallback):
        self.delay = delay
        self._callback = callback
        self._pending: Dict[Hashable, _Pending] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def pending(self, key: Hashable) -> Optional[Dict[str, Any]]:
        entry = self._pending.get(key)
        return dict(entry.payload) if entry else None

    def schedule(self, key: Hashable, payload: Dict[str, Any]) -> None:
        """(Re)start the timer for ``key``. Must be called from a running event loop."""
        merged: Dict[str, Any] = {}
        previous = self._pending.pop(key, None)
        if previous is not None:
            previous.task.cancel()
            merged.update(previous.payload)
        merged.update(payload)

        task = asyncio.get_running_loop().create_task(self._run(key, merged))
        self._pending[key] = _Pending(task, merged)

    def cancel(self, key: Hashable) -> bool:
        entry = self._pending.pop(key, None)
        if entry is None:
            return False
        entry.task.cancel()
        return True

    def cancel_all(self) -> int:
        keys = list(self._pending)
        for key in keys:
            self.cancel(key)
        return len(keys)

    async def flush(self, key: Hashable) -> bool:
        """Commit the pending payload for ``key`` now. Returns False if none was pending."""
        entry = self._pending.pop(key, None)
        if entry is None:
            return False
        entry.task.cancel()
        await self._commit(key, entry.payload)
        return True

    async def flush_all(self) -> int:
        keys = list(self._pending)
        for key in keys:
            await self.flush(key)
        return len(keys)

    async def _run(self, key: Hashable, payload: Dict[str, Any]) -> None:
        await asyncio.sleep(self.delay)
        entry = self._pending.get(key)
        if entry is not None and entry.task is asyncio.current_task():
            del self._pending[key]
        await self._commit(key, payload)

    async def _commit(self, key: Hashable, payload: Dict[str, Any]) -> None:
        try:
            await self._callback(key, payload)
        except Exception as e:
            logger.error(f"Debounced commit for {key} failed: {e}")

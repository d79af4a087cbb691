"""One in-flight workflow per script id.

:class:`InFlightRegistry` maps a script id to the task running its workflow.
:class:`UpdateDeduplicator` hands out that task to every caller asking for the
same id while it runs, so overlapping checks share one fetch sequence and one
outcome.

The entry is dropped in a ``finally`` block inside the task itself, before
its result is visible to any awaiting caller. A caller that learns the
outcome and immediately asks again therefore always starts a fresh workflow.
All bookkeeping happens on the event loop thread without intermediate
``await`` points, so no lock is needed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Iterator, Optional

from .types import CheckOutcome, ItemId

logger = logging.getLogger(__name__)


class InFlightRegistry:
    """Pending workflow tasks keyed by script id."""

    def __init__(self) -> None:
        self._tasks: Dict[ItemId, "asyncio.Task[CheckOutcome]"] = {}

    def get(self, item_id: ItemId) -> Optional["asyncio.Task[CheckOutcome]"]:
        return self._tasks.get(item_id)

    def add(self, item_id: ItemId, task: "asyncio.Task[CheckOutcome]") -> None:
        if item_id in self._tasks:
            raise KeyError(f"workflow for {item_id!r} is already in flight")
        self._tasks[item_id] = task

    def discard(self, item_id: ItemId, task: "asyncio.Task[CheckOutcome]") -> None:
        if self._tasks.get(item_id) is task:
            del self._tasks[item_id]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[ItemId]:
        return iter(list(self._tasks))


class UpdateDeduplicator:
    def __init__(self, registry: Optional[InFlightRegistry] = None):
        self.registry = registry if registry is not None else InFlightRegistry()

    def run_deduped(
        self,
        item_id: ItemId,
        work_fn: Callable[[], Awaitable[CheckOutcome]],
    ) -> "asyncio.Task[CheckOutcome]":
        """Return the running task for ``item_id`` or start ``work_fn`` as one.

        Must be called from a running event loop. Await the returned task via
        ``asyncio.shield`` to keep a cancelled waiter from cancelling the
        shared workflow.
        """
        existing = self.registry.get(item_id)
        if existing is not None:
            logger.debug("Joining in-flight check for %s", item_id)
            return existing

        task: Optional["asyncio.Task[CheckOutcome]"] = None

        async def run() -> CheckOutcome:
            try:
                return await work_fn()
            finally:
                self.registry.discard(item_id, task)

        task = asyncio.ensure_future(run())
        self.registry.add(item_id, task)
        # covers a task cancelled before its body ever ran
        task.add_done_callback(lambda t: self.registry.discard(item_id, t))
        return task


__all__ = ["InFlightRegistry", "UpdateDeduplicator"]

"""Run a batch of script checks concurrently."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

from ..logging_utils import log_event
from .types import BatchResult, CheckOutcome, Note, ScriptItem

logger = logging.getLogger(__name__)


class BatchRunner:
    """Fan out one deduplicated workflow per script and collect the results.

    Results are aligned with the input order, not with completion order. A
    failing script never aborts the batch.
    """

    def __init__(self, deduplicator, workflow):
        self.deduplicator = deduplicator
        self.workflow = workflow

    async def run_batch(self, items: Sequence[ScriptItem]) -> BatchResult:
        notes: List[Note] = []
        tasks = [
            self.deduplicator.run_deduped(
                item.id, lambda item=item: self.workflow.run(item, notes)
            )
            for item in items
        ]
        outcomes = await asyncio.gather(
            *(asyncio.shield(t) for t in tasks), return_exceptions=True
        )
        results: List[bool] = []
        for item, outcome in zip(items, outcomes):
            if isinstance(outcome, CheckOutcome):
                results.append(outcome.succeeded)
            else:
                logger.error("Check of %s crashed: %r", item.id, outcome)
                results.append(False)
        log_event(
            "update_batch_done",
            level=logging.DEBUG,
            count=len(results),
            succeeded=sum(results),
        )
        return BatchResult(results=results, notes=notes)


__all__ = ["BatchRunner"]

"""Public entry points for checking scripts for updates.

:class:`UpdateOrchestrator` wires the update-check pieces together around the
injected collaborators and exposes the two use cases: check one script, and
check every script due for an automatic check. Each batch ends with at most
one notification.

Every orchestrator owns its own :class:`InFlightRegistry`, so several
instances (e.g. in tests) never share in-flight state.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from .collaborators import (
    Localizer,
    Navigator,
    Notifier,
    OptionsStore,
    ProgressListener,
    Registry,
    Transport,
)
from .consts import OPT_AUTO_UPDATE, OPT_LAST_UPDATE
from .i18n import Localizer as DefaultLocalizer
from .logging_utils import log_event
from .updatesets import (
    BatchResult,
    BatchRunner,
    InFlightRegistry,
    ItemId,
    MetadataFetcher,
    NotificationPlanner,
    ScriptItem,
    UpdateDeduplicator,
    UpdateWorkflow,
)

logger = logging.getLogger(__name__)

_DAY = 24 * 60 * 60


class UpdateOrchestrator:
    def __init__(
        self,
        registry: Registry,
        transport: Transport,
        options: OptionsStore,
        notifier: Notifier,
        *,
        localizer: Optional[Localizer] = None,
        navigator: Optional[Navigator] = None,
        progress_listener: Optional[ProgressListener] = None,
        in_flight: Optional[InFlightRegistry] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.options = options
        self.notifier = notifier
        self.localizer = localizer or DefaultLocalizer()
        self.clock = clock
        self.in_flight = in_flight if in_flight is not None else InFlightRegistry()

        self.fetcher = MetadataFetcher(transport, self.localizer, progress_listener)
        self.planner = NotificationPlanner(options, self.localizer, navigator)
        self.workflow = UpdateWorkflow(
            self.fetcher, registry, self.localizer, self.planner
        )
        self.runner = BatchRunner(UpdateDeduplicator(self.in_flight), self.workflow)

    async def check_one(self, item_id: ItemId) -> bool:
        """Check a single script; True when it was updated."""
        item = self.registry.get_item(item_id)
        if item is None:
            logger.warning("No script with id %r", item_id)
            return False
        results = await self.check_items([item])
        return results[0]

    async def check_all_due(self) -> bool:
        """Check every script with automatic checks enabled.

        Records the time of this bulk check in ``lastUpdate`` and returns
        whether any script was updated.
        """
        self.options.set(OPT_LAST_UPDATE, self.clock())
        items = [item for item in self.registry.list_items() if item.should_auto_check]
        results = await self.check_items(items)
        return any(results)

    async def check_items(self, items: Sequence[ScriptItem]) -> List[bool]:
        """Check ``items`` as one batch and notify about the collected notes."""
        batch = await self.runner.run_batch(items)
        self._notify(batch)
        return batch.results

    def is_bulk_check_due(self, now: Optional[float] = None) -> bool:
        """Whether ``autoUpdate`` days have passed since the last bulk check.

        An interval of ``0`` (or less) disables automatic bulk checks.
        """
        try:
            interval = float(self.options.get(OPT_AUTO_UPDATE) or 0)
            last = float(self.options.get(OPT_LAST_UPDATE) or 0)
        except (TypeError, ValueError):
            return False
        if interval <= 0:
            return False
        now = self.clock() if now is None else now
        return now - last >= interval * _DAY

    def _notify(self, batch: BatchResult) -> None:
        notification = self.planner.plan(batch.notes)
        if notification is None:
            return
        log_event(
            "update_notify",
            count=len(batch.notes),
            kind=notification.type,
        )
        try:
            self.notifier.notify(notification)
        except Exception:
            logger.exception("Notifier failed")


__all__ = ["UpdateOrchestrator"]

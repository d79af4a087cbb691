"""Per-script check workflow.

Runs fetch, then persist-or-refresh, and turns the result into a
:class:`CheckOutcome` plus an optional :class:`Note` for the batch. Dispatch
is on the fetch stage's :class:`FailureKind`:

- success: store the new code, refresh resources (cache bypassed), note
  "updated" when the script may notify;
- ``NO_UPDATE_URL``: nothing at all;
- ``NO_UPDATE_AVAILABLE``: refresh resources (cache bypassed);
- anything else: no refresh, the error text goes into the note.

Errors are always reported; the success message honours the notification
preferences. Nothing raised by a collaborator escapes :meth:`run`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..consts import NO_HTTP_CACHE
from ..logging_utils import log_event
from .sources import display_name
from .types import (
    CheckOutcome,
    FailureKind,
    MalformedContentError,
    Note,
    ScriptItem,
    UpdateProgress,
    UpdateResult,
)

logger = logging.getLogger(__name__)


class UpdateWorkflow:
    def __init__(self, fetcher, registry, localizer, planner):
        self.fetcher = fetcher
        self.registry = registry
        self.localizer = localizer
        self.planner = planner

    async def run(self, item: ScriptItem, notes: List[Note]) -> CheckOutcome:
        """Check ``item`` once; append its note (if any) to ``notes``."""
        log_event("update_check_start", level=logging.DEBUG, item_id=item.id)
        msg_ok: Optional[str] = None
        msg_err: Optional[str] = None
        succeeded = False

        try:
            result = await self.fetcher.fetch_update(item)
        except Exception as e:
            logger.exception("Update check of %s failed", item.id)
            result = UpdateResult(
                kind=FailureKind.METADATA_FETCH_FAILED,
                error=str(e) or type(e).__name__,
            )
        kind = result.kind

        if kind is FailureKind.NO_UPDATE_URL:
            log_event(
                "update_check_result",
                level=logging.DEBUG,
                item_id=item.id,
                kind=kind.value,
                succeeded=False,
            )
            return CheckOutcome(succeeded=False, kind=kind)

        if result.ok:
            try:
                updated = await self.registry.parse_and_store(
                    result.content or "",
                    item_id=item.id,
                    progress=UpdateProgress(
                        message=result.progress.message, checking=False
                    ),
                )
            except MalformedContentError as e:
                kind = FailureKind.MALFORMED_CONTENT
                msg_err = e.progress.error or str(e)
                logger.debug("Malformed update for %s: %s", item.id, e)
            except Exception as e:
                kind = FailureKind.MALFORMED_CONTENT
                msg_err = str(e) or type(e).__name__
                logger.exception("Storing update for %s failed", item.id)
            else:
                succeeded = True
                if self.planner.can_notify(item):
                    msg_ok = self.localizer.translate(
                        "msgScriptUpdated", [display_name(updated)]
                    )
                msg_err = await self._refresh(updated)
        else:
            msg_err = result.error
            if kind is FailureKind.NO_UPDATE_AVAILABLE:
                msg_err = await self._refresh(item)

        note = None
        text = "\n".join(m for m in (msg_ok, msg_err) if m)
        if text:
            note = Note(item=item, text=text)
            notes.append(note)
        log_event(
            "update_check_result",
            level=logging.INFO if succeeded else logging.DEBUG,
            item_id=item.id,
            kind=kind.value if kind else None,
            succeeded=succeeded,
        )
        return CheckOutcome(succeeded=succeeded, note=note, kind=kind)

    async def _refresh(self, item: ScriptItem) -> Optional[str]:
        try:
            error = await self.registry.refresh_resources(item, NO_HTTP_CACHE)
        except Exception as e:
            logger.exception("Refreshing resources of %s failed", item.id)
            return str(e) or type(e).__name__
        if error:
            logger.debug("Resource refresh for %s: %s", item.id, error)
        return error or None


__all__ = ["UpdateWorkflow"]

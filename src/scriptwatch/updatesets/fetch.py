"""Two-stage update fetch for a single script.

:class:`MetadataFetcher` asks the script's update URL for its metadata,
compares versions and, when a newer version is downloadable, fetches the
new code. It never raises for expected failures: every exit is an
:class:`UpdateResult` tagged with a :class:`FailureKind`.

Each step is announced to the progress listener as a full
:class:`UpdateProgress` snapshot, so a listener that misses an event still
shows the latest state on the next one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Optional

from ..consts import META_ACCEPT, NO_HTTP_CACHE
from ..logging_utils import log_event
from ..transport import TransportError
from .metablock import meta_version
from .sources import resolve_update_urls
from .types import FailureKind, ScriptItem, UpdateProgress, UpdateResult
from .version import compare_versions

logger = logging.getLogger(__name__)


class MetadataFetcher:
    def __init__(self, transport, localizer, progress_listener=None):
        self.transport = transport
        self.localizer = localizer
        self.progress_listener = progress_listener

    async def fetch_update(self, item: ScriptItem) -> UpdateResult:
        """Check ``item`` for a newer version and download it when possible."""
        download_url, update_url = resolve_update_urls(item)
        if not update_url:
            return UpdateResult(kind=FailureKind.NO_UPDATE_URL)

        t = self.localizer.translate
        progress = UpdateProgress()
        self._announce(item, progress, t("msgCheckingForUpdate"))

        started = time.perf_counter()
        try:
            resp = await self.transport.request(
                update_url, headers={**NO_HTTP_CACHE, "Accept": META_ACCEPT}
            )
        except TransportError as e:
            logger.debug("Metadata request failed for %s: %s", item.id, e)
            return self._fail(
                item,
                progress,
                FailureKind.METADATA_FETCH_FAILED,
                t("msgErrorFetchingUpdateInfo"),
                e.status,
                e.url or update_url,
            )
        except Exception:
            logger.exception("Metadata request for %s crashed", item.id)
            return self._fail(
                item,
                progress,
                FailureKind.METADATA_FETCH_FAILED,
                t("msgErrorFetchingUpdateInfo"),
                0,
                update_url,
            )

        new_version = meta_version(resp.data)
        log_event(
            "update_metadata",
            level=logging.DEBUG,
            item_id=item.id,
            url=update_url,
            status=resp.status,
            duration_ms=int((time.perf_counter() - started) * 1000),
        )
        if not new_version:
            return self._fail(
                item,
                progress,
                FailureKind.METADATA_FETCH_FAILED,
                t("msgErrorFetchingUpdateInfo"),
                resp.status,
                update_url,
            )

        if compare_versions(item.current_version, new_version) >= 0:
            self._announce(item, progress, t("msgNoUpdate"), checking=False)
            return UpdateResult(
                kind=FailureKind.NO_UPDATE_AVAILABLE, progress=replace(progress)
            )
        if not download_url:
            self._announce(item, progress, t("msgNewVersion"), checking=False)
            return UpdateResult(
                kind=FailureKind.METADATA_ONLY_UPDATE, progress=replace(progress)
            )

        self._announce(item, progress, t("msgUpdating"))
        try:
            resp = await self.transport.request(download_url, headers=NO_HTTP_CACHE)
        except TransportError as e:
            logger.debug("Download failed for %s: %s", item.id, e)
            return self._fail(
                item,
                progress,
                FailureKind.DOWNLOAD_FAILED,
                t("msgErrorFetchingScript"),
                e.status,
                e.url or download_url,
            )
        except Exception:
            logger.exception("Download for %s crashed", item.id)
            return self._fail(
                item,
                progress,
                FailureKind.DOWNLOAD_FAILED,
                t("msgErrorFetchingScript"),
                0,
                download_url,
            )
        return UpdateResult(content=resp.data, progress=replace(progress))

    def format_error(self, status: Optional[int], url: str) -> str:
        return f"{self.localizer.translate('genericError')} {status}, {url}"

    def _fail(self, item, progress, kind, message, status, url) -> UpdateResult:
        error = self.format_error(status, url)
        self._announce(item, progress, message, error=error)
        return UpdateResult(kind=kind, error=error, progress=replace(progress))

    def _announce(
        self,
        item: ScriptItem,
        progress: UpdateProgress,
        message: str,
        *,
        error: Optional[str] = None,
        checking: Optional[bool] = None,
    ) -> None:
        progress.message = message
        progress.error = error
        progress.checking = (not error) if checking is None else checking
        if self.progress_listener is None:
            return
        try:
            self.progress_listener(item.id, replace(progress))
        except Exception as e:
            logger.debug("Progress listener failed for %s: %s", item.id, e)


__all__ = ["MetadataFetcher"]

"""In-memory script registry.

Holds the scripts being checked, replaces a script when an update is stored
and refreshes the external resources (``@require`` / ``@resource``) a script
depends on. Scripts can be loaded from a JSON file holding a list of script
objects (or ``{"scripts": [...]}``); writing them back is left to the host
application.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .i18n import Localizer
from .transport import TransportError
from .updatesets.metablock import parse_script_meta, requirement_urls
from .updatesets.types import (
    ItemId,
    MalformedContentError,
    ScriptItem,
    UpdateProgress,
)

logger = logging.getLogger(__name__)


class MemoryRegistry:
    def __init__(
        self, items: Iterable[ScriptItem] = (), transport=None, localizer=None
    ):
        self._items: Dict[ItemId, ScriptItem] = {}
        for item in items:
            self._items[item.id] = item
        self.transport = transport
        self.localizer = localizer or Localizer()
        # url -> body of the last successful resource download
        self.resource_cache: Dict[str, str] = {}

    @classmethod
    def from_file(
        cls, path: Path, transport=None, localizer=None
    ) -> "MemoryRegistry":
        """Load scripts from a JSON file.

        Raises ``OSError`` / ``ValueError`` when the file cannot be read or
        does not hold a list of scripts.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("scripts")
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of scripts")
        items = [ScriptItem.from_dict(entry) for entry in data if isinstance(entry, dict)]
        return cls(items, transport=transport, localizer=localizer)

    def get_item(self, item_id: ItemId) -> Optional[ScriptItem]:
        item = self._items.get(item_id)
        if item is None and isinstance(item_id, str) and item_id.isdigit():
            item = self._items.get(int(item_id))
        return item

    def list_items(self) -> List[ScriptItem]:
        return list(self._items.values())

    async def parse_and_store(
        self, raw: str, *, item_id: ItemId, progress: UpdateProgress
    ) -> ScriptItem:
        """Replace the script ``item_id`` with ``raw`` code.

        Raises :class:`MalformedContentError` when ``raw`` has no metadata
        block or no ``@name``.
        """
        meta = parse_script_meta(raw)
        if meta is None or not meta.name:
            raise MalformedContentError(
                "Invalid script: metadata block missing",
                replace(progress, error="Invalid script: metadata block missing"),
            )
        current = self.get_item(item_id)
        if current is None:
            updated = ScriptItem(id=item_id, meta=meta, code=raw)
        else:
            updated = replace(current, meta=meta, code=raw)
        self._items[updated.id] = updated
        logger.info("Stored %s version %s", item_id, meta.version or "?")
        return updated

    async def refresh_resources(
        self, item: ScriptItem, headers: Mapping[str, str]
    ) -> Optional[str]:
        """Download every external resource of ``item``.

        Returns ``"Error <status>, <url>"`` for the first failure, or ``None``.
        Resources that fail keep their previously cached body.
        """
        if self.transport is None:
            return None
        error = None
        for url in requirement_urls(item.meta):
            try:
                resp = await self.transport.request(url, headers=headers)
            except TransportError as e:
                logger.debug("Resource %s of %s failed: %s", url, item.id, e)
                if error is None:
                    generic = self.localizer.translate("genericError")
                    error = f"{generic} {e.status}, {e.url or url}"
                continue
            self.resource_cache[url] = resp.data
        return error


__all__ = ["MemoryRegistry"]

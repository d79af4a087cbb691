"""In-memory collaborators shared by the tests."""

import asyncio
import contextlib
import logging
from typing import Dict, List, Optional, Tuple

from scriptwatch.transport import Response, TransportError
from scriptwatch.updatesets.types import (
    ScriptConfig,
    ScriptCustom,
    ScriptItem,
    ScriptMeta,
)


def metablock(version: str, name: str = "Example", extra: str = "") -> str:
    return (
        "// ==UserScript==\n"
        f"// @name        {name}\n"
        f"// @version     {version}\n"
        f"{extra}"
        "// ==/UserScript==\n"
    )


def make_script(
    item_id=1,
    version="1.0",
    *,
    name="Example",
    download_url="https://example.com/s.user.js",
    update_url="",
    custom_name="",
    notify=None,
    should_update=True,
    require=None,
) -> ScriptItem:
    return ScriptItem(
        id=item_id,
        meta=ScriptMeta(
            name=name,
            version=version,
            download_url=download_url,
            update_url=update_url,
            require=list(require or []),
        ),
        custom=ScriptCustom(name=custom_name),
        config=ScriptConfig(notify_updates=notify, should_update=should_update),
        code=metablock(version, name),
    )


class FakeTransport:
    """Serves canned ``(status, body)`` responses; unknown URLs are 404."""

    def __init__(self, routes: Optional[Dict[str, Tuple[int, str]]] = None):
        self.routes = dict(routes or {})
        self.delays: Dict[str, float] = {}
        self.calls: List[Tuple[str, dict]] = []
        self.gate: Optional[asyncio.Event] = None

    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]

    async def request(self, url, headers=None):
        self.calls.append((url, dict(headers or {})))
        if self.gate is not None:
            await self.gate.wait()
        delay = self.delays.get(url)
        if delay:
            await asyncio.sleep(delay)
        status, body = self.routes.get(url, (404, ""))
        if status >= 400:
            raise TransportError(status, url, "Not Found" if status == 404 else "")
        return Response(data=body, status=status, url=url)


class RecordingNotifier:
    def __init__(self):
        self.notifications = []

    def notify(self, notification):
        self.notifications.append(notification)


class RecordingNavigator:
    def __init__(self):
        self.opened = []

    def open_editor(self, item_id):
        self.opened.append(("editor", item_id))

    def open_settings(self):
        self.opened.append(("settings", None))


class ProgressRecorder:
    def __init__(self):
        self.events = []

    def __call__(self, item_id, progress):
        self.events.append((item_id, progress))

    def messages(self, item_id=None):
        return [p.message for i, p in self.events if item_id is None or i == item_id]


@contextlib.contextmanager
def preserved_root_logging():
    """Undo ``configure_logging`` on the root logger, including handler levels."""
    root = logging.getLogger()
    level = root.level
    handlers = {h: h.level for h in root.handlers}
    try:
        yield root
    finally:
        for h in list(root.handlers):
            if getattr(h, "_added_by_configure_logging", False) and h not in handlers:
                root.removeHandler(h)
                h.close()
        for h, h_level in handlers.items():
            h.setLevel(h_level)
        root.setLevel(level)

"""Interfaces of the services the orchestrator depends on.

The orchestrator owns no storage, network stack or UI. It talks to these
collaborators through the small protocols below; the package ships default
implementations (``registry``, ``transport``, ``options``, ``i18n``,
``consoles``) and tests use fakes.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Sequence

from .transport import Response
from .updatesets.types import ItemId, Notification, ScriptItem, UpdateProgress


class Registry(Protocol):
    def get_item(self, item_id: ItemId) -> Optional[ScriptItem]: ...

    def list_items(self) -> List[ScriptItem]: ...

    async def parse_and_store(
        self, raw: str, *, item_id: ItemId, progress: UpdateProgress
    ) -> ScriptItem: ...

    async def refresh_resources(
        self, item: ScriptItem, headers: Mapping[str, str]
    ) -> Optional[str]: ...


class Transport(Protocol):
    async def request(
        self, url: str, headers: Optional[Mapping[str, str]] = None
    ) -> Response: ...


class OptionsStore(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class Navigator(Protocol):
    def open_editor(self, item_id: ItemId) -> None: ...

    def open_settings(self) -> None: ...


class ProgressListener(Protocol):
    def __call__(self, item_id: ItemId, progress: UpdateProgress) -> None: ...


class Localizer(Protocol):
    def translate(self, key: str, args: Optional[Sequence[object]] = None) -> str: ...


__all__ = [
    "Registry",
    "Transport",
    "OptionsStore",
    "Notifier",
    "Navigator",
    "ProgressListener",
    "Localizer",
]

"""Typed containers for scripts, check outcomes and notifications.

``ScriptItem`` mirrors the shape a script registry hands out (declared
metadata, user overrides and per-script config). The remaining dataclasses
are transient values produced while a batch of checks runs: progress
snapshots, per-stage ``UpdateResult`` values tagged with a ``FailureKind``,
per-item ``CheckOutcome`` values and the ``Note``/``Notification`` pair used
to tell the user what happened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

ItemId = Union[int, str]


class FailureKind(str, Enum):
    """Why a workflow stage did not produce new script content."""

    NO_UPDATE_URL = "no_update_url"
    NO_UPDATE_AVAILABLE = "no_update_available"
    METADATA_FETCH_FAILED = "metadata_fetch_failed"
    METADATA_ONLY_UPDATE = "metadata_only_update"
    DOWNLOAD_FAILED = "download_failed"
    MALFORMED_CONTENT = "malformed_content"

    @property
    def benign(self) -> bool:
        return self in (FailureKind.NO_UPDATE_URL, FailureKind.NO_UPDATE_AVAILABLE)


@dataclass
class ScriptMeta:
    """Metadata declared by the script itself."""

    name: str = ""
    version: str = ""
    download_url: str = ""
    update_url: str = ""
    require: List[str] = field(default_factory=list)
    resources: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: object) -> "ScriptMeta":
        if not isinstance(data, dict):
            return cls()
        resources = data.get("resources") or data.get("resource") or {}
        return cls(
            name=_str(data.get("name")),
            version=_str(data.get("version")),
            download_url=_str(data.get("downloadURL") or data.get("download_url")),
            update_url=_str(data.get("updateURL") or data.get("update_url")),
            require=[str(u) for u in data.get("require") or [] if u],
            resources={str(k): str(v) for k, v in dict(resources).items() if v},
        )


@dataclass
class ScriptCustom:
    """User overrides layered on top of the declared metadata."""

    name: str = ""
    download_url: str = ""
    update_url: str = ""
    last_install_url: str = ""

    @classmethod
    def from_dict(cls, data: object) -> "ScriptCustom":
        if not isinstance(data, dict):
            return cls()
        return cls(
            name=_str(data.get("name")),
            download_url=_str(data.get("downloadURL") or data.get("download_url")),
            update_url=_str(data.get("updateURL") or data.get("update_url")),
            last_install_url=_str(
                data.get("lastInstallURL") or data.get("last_install_url")
            ),
        )


@dataclass
class ScriptConfig:
    """Per-script settings.

    ``notify_updates`` is tri-state: ``None`` inherits the global toggle.
    """

    notify_updates: Optional[bool] = None
    should_update: bool = True

    @classmethod
    def from_dict(cls, data: object) -> "ScriptConfig":
        if not isinstance(data, dict):
            return cls()
        notify = data.get("notifyUpdates", data.get("notify_updates"))
        should = data.get("shouldUpdate", data.get("should_update", True))
        return cls(
            notify_updates=_flag(notify, None),
            should_update=_flag(should, True),
        )


@dataclass
class ScriptItem:
    """An update-checkable script, identified by ``id``."""

    id: ItemId
    meta: ScriptMeta = field(default_factory=ScriptMeta)
    custom: ScriptCustom = field(default_factory=ScriptCustom)
    config: ScriptConfig = field(default_factory=ScriptConfig)
    code: str = ""

    @property
    def current_version(self) -> str:
        return self.meta.version

    @property
    def notify_preference(self) -> Optional[bool]:
        return self.config.notify_updates

    @property
    def should_auto_check(self) -> bool:
        return self.config.should_update

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScriptItem":
        props = data.get("props") if isinstance(data.get("props"), dict) else {}
        item_id = data.get("id", props.get("id"))
        if item_id is None:
            raise ValueError("script entry has no id")
        return cls(
            id=item_id,
            meta=ScriptMeta.from_dict(data.get("meta")),
            custom=ScriptCustom.from_dict(data.get("custom")),
            config=ScriptConfig.from_dict(data.get("config")),
            code=data["code"] if isinstance(data.get("code"), str) else "",
        )


@dataclass
class UpdateProgress:
    """Snapshot of a single script's check, broadcast to progress listeners."""

    message: str = ""
    checking: bool = False
    error: Optional[str] = None


class MalformedContentError(Exception):
    """Downloaded code could not be parsed; ``progress`` holds the state reached."""

    def __init__(self, message: str, progress: Optional[UpdateProgress] = None):
        super().__init__(message)
        self.progress = progress or UpdateProgress(message=message, error=message)


@dataclass
class UpdateResult:
    """Outcome of the fetch stage. ``kind`` is ``None`` on success."""

    kind: Optional[FailureKind] = None
    content: Optional[str] = None
    error: Optional[str] = None
    progress: UpdateProgress = field(default_factory=UpdateProgress)

    @property
    def ok(self) -> bool:
        return self.kind is None


@dataclass
class Note:
    item: ScriptItem
    text: str


@dataclass
class CheckOutcome:
    succeeded: bool
    note: Optional[Note] = None
    kind: Optional[FailureKind] = None


@dataclass
class BatchResult:
    results: List[bool]
    notes: List[Note]

    @property
    def any_succeeded(self) -> bool:
        return any(self.results)


@dataclass
class NotificationEntry:
    title: str
    message: str


@dataclass
class Notification:
    """What to show the user after a batch; rendering is up to the notifier."""

    text: str
    title: Optional[str] = None
    type: str = "basic"
    items: List[NotificationEntry] = field(default_factory=list)
    on_click: Optional[Callable[[], None]] = None
    payload: Any = None


def _str(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _flag(value: object, default: Optional[bool]) -> Optional[bool]:
    """Read a JSON boolean; strings such as ``"false"`` are parsed, junk keeps ``default``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    return default


__all__ = [
    "ItemId",
    "FailureKind",
    "ScriptMeta",
    "ScriptCustom",
    "ScriptConfig",
    "ScriptItem",
    "UpdateProgress",
    "MalformedContentError",
    "UpdateResult",
    "Note",
    "CheckOutcome",
    "BatchResult",
    "NotificationEntry",
    "Notification",
]

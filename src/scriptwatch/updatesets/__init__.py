"""Update-check building blocks split into small modules.

Each module holds one cohesive part of the check logic (version ordering,
source resolution, fetching, de-duplication, the per-script workflow, batch
fan-out and notification planning); they are re-exported here for easy
import.
"""

from __future__ import annotations

from .types import (
    BatchResult,
    CheckOutcome,
    FailureKind,
    ItemId,
    MalformedContentError,
    Note,
    Notification,
    NotificationEntry,
    ScriptConfig,
    ScriptCustom,
    ScriptItem,
    ScriptMeta,
    UpdateProgress,
    UpdateResult,
)
from .version import compare_versions, is_version_newer
from .metablock import meta_version, parse_meta, parse_script_meta, requirement_urls
from .sources import display_name, resolve_update_urls
from .fetch import MetadataFetcher
from .dedup import InFlightRegistry, UpdateDeduplicator
from .workflow import UpdateWorkflow
from .batch import BatchRunner
from .notify import NotificationPlanner

__all__ = [
    "BatchResult",
    "CheckOutcome",
    "FailureKind",
    "ItemId",
    "MalformedContentError",
    "Note",
    "Notification",
    "NotificationEntry",
    "ScriptConfig",
    "ScriptCustom",
    "ScriptItem",
    "ScriptMeta",
    "UpdateProgress",
    "UpdateResult",
    "compare_versions",
    "is_version_newer",
    "meta_version",
    "parse_meta",
    "parse_script_meta",
    "requirement_urls",
    "display_name",
    "resolve_update_urls",
    "MetadataFetcher",
    "InFlightRegistry",
    "UpdateDeduplicator",
    "UpdateWorkflow",
    "BatchRunner",
    "NotificationPlanner",
]

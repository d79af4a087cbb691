"""Check userscripts for updates.

The :class:`UpdateOrchestrator` runs one check workflow per script (never two
at once for the same script), collects what happened and raises a single
notification per batch. Storage, HTTP, options and UI are injected; default
implementations live in :mod:`.registry`, :mod:`.transport`, :mod:`.options`
and :mod:`.consoles`.
"""

from .orchestrator import UpdateOrchestrator
from .updatesets import (
    CheckOutcome,
    FailureKind,
    Note,
    Notification,
    ScriptItem,
    UpdateProgress,
    compare_versions,
)
from .i18n import Localizer
from .options import JsonOptionsStore
from .registry import MemoryRegistry
from .transport import AiohttpTransport, TransportError
from .cli import main

__all__ = [
    "UpdateOrchestrator",
    "CheckOutcome",
    "FailureKind",
    "Note",
    "Notification",
    "ScriptItem",
    "UpdateProgress",
    "compare_versions",
    "Localizer",
    "JsonOptionsStore",
    "MemoryRegistry",
    "AiohttpTransport",
    "TransportError",
    "main",
]

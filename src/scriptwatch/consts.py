"""Shared constants (HTTP headers, option keys, defaults)."""

from __future__ import annotations
from typing import Dict

NO_HTTP_CACHE: Dict[str, str] = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
}
META_ACCEPT = "text/x-userscript-meta,*/*"

# Option keys understood by the orchestrator
OPT_NOTIFY_UPDATES = "notifyUpdates"
OPT_NOTIFY_UPDATES_GLOBAL = "notifyUpdatesGlobal"
OPT_LAST_UPDATE = "lastUpdate"
OPT_AUTO_UPDATE = "autoUpdate"  # days between bulk checks, 0 = never

DEFAULT_OPTIONS: Dict[str, object] = {
    OPT_NOTIFY_UPDATES: True,
    OPT_NOTIFY_UPDATES_GLOBAL: False,
    OPT_LAST_UPDATE: 0,
    OPT_AUTO_UPDATE: 1,
}

DEFAULT_TIMEOUT = 30.0

__all__ = [
    "NO_HTTP_CACHE",
    "META_ACCEPT",
    "OPT_NOTIFY_UPDATES",
    "OPT_NOTIFY_UPDATES_GLOBAL",
    "OPT_LAST_UPDATE",
    "OPT_AUTO_UPDATE",
    "DEFAULT_OPTIONS",
    "DEFAULT_TIMEOUT",
]

"""User-facing message catalog.

Messages are looked up by key and formatted with positional ``str.format``
arguments. Only an English catalog ships with the package; callers can pass
their own mapping to :class:`Localizer` to translate.
"""

from __future__ import annotations
from typing import Mapping, Optional, Sequence

MESSAGES_EN = {
    "msgCheckingForUpdate": "Checking for updates...",
    "msgNoUpdate": "No update found.",
    "msgNewVersion": "New version found.",
    "msgUpdating": "Updating...",
    "msgErrorFetchingScript": "Error fetching script!",
    "msgErrorFetchingUpdateInfo": "Error fetching update info!",
    "msgScriptUpdated": "Script [{0}] is updated!",
    "titleScriptUpdated": "Update",
    "genericError": "Error",
}


class Localizer:
    """Translate message keys; unknown keys are returned unchanged."""

    def __init__(self, messages: Optional[Mapping[str, str]] = None):
        self.messages = dict(MESSAGES_EN if messages is None else messages)

    def translate(self, key: str, args: Optional[Sequence[object]] = None) -> str:
        template = self.messages.get(key, key)
        if not args:
            return template
        try:
            return template.format(*args)
        except (IndexError, KeyError, ValueError):
            return template


__all__ = ["MESSAGES_EN", "Localizer"]

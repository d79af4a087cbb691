"""Turn a batch's notes into at most one notification.

One note becomes a plain notification that opens the script's editor when
clicked; several notes become a list notification (one entry per script) that
opens the settings page instead.
"""

from __future__ import annotations

import functools
from typing import List, Optional

from ..consts import OPT_NOTIFY_UPDATES, OPT_NOTIFY_UPDATES_GLOBAL
from .sources import display_name
from .types import Note, Notification, NotificationEntry, ScriptItem


class NotificationPlanner:
    def __init__(self, options, localizer, navigator=None):
        self.options = options
        self.localizer = localizer
        self.navigator = navigator

    def can_notify(self, item: ScriptItem) -> bool:
        """Whether a successful update of ``item`` should be announced.

        With ``notifyUpdatesGlobal`` set, the global ``notifyUpdates`` toggle
        applies to every script; otherwise a per-script preference (when set)
        overrides it.
        """
        allowed = bool(self.options.get(OPT_NOTIFY_UPDATES))
        if self.options.get(OPT_NOTIFY_UPDATES_GLOBAL):
            return allowed
        pref = item.notify_preference
        return allowed if pref is None else bool(pref)

    def plan(self, notes: List[Note]) -> Optional[Notification]:
        if not notes:
            return None
        if len(notes) == 1:
            return self._single(notes[0])
        return self._multi(notes)

    def _single(self, note: Note) -> Notification:
        on_click = None
        if self.navigator is not None:
            on_click = functools.partial(self.navigator.open_editor, note.item.id)
        return Notification(text=note.text, on_click=on_click)

    def _multi(self, notes: List[Note]) -> Notification:
        return Notification(
            text=self.localizer.translate("titleScriptUpdated"),
            type="list",
            items=[
                NotificationEntry(title=display_name(n.item), message=n.text)
                for n in notes
            ],
            on_click=self.navigator.open_settings if self.navigator else None,
        )


__all__ = ["NotificationPlanner"]

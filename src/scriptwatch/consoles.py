"""Terminal implementations of the notifier, navigator and progress listener.

Used by the command line entry point; applications embedding the
orchestrator provide their own.
"""

from __future__ import annotations

import logging

from .logging_utils import log_event
from .ui import BOLD, CYAN, GRAY, c, info, ok
from .updatesets.types import ItemId, Notification, UpdateProgress


class ConsoleNotifier:
    """Print notifications; ``click`` runs the notification's click action."""

    def __init__(self, click: bool = False):
        self.click = click
        self.shown = []

    def notify(self, notification: Notification) -> None:
        self.shown.append(notification)
        if notification.type == "list":
            info(c(notification.text, BOLD))
            for entry in notification.items:
                for i, line in enumerate(entry.message.splitlines()):
                    label = entry.title if i == 0 else " " * len(entry.title)
                    print(f"  {c(label, CYAN)}  {line}")
        else:
            for line in notification.text.splitlines():
                ok(line)
        if self.click and notification.on_click is not None:
            notification.on_click()


class ConsoleNavigator:
    """Point the user at the script editor or settings by printing a hint."""

    def open_editor(self, item_id: ItemId) -> None:
        print(c(f"  → open the editor for script #{item_id}", GRAY))

    def open_settings(self) -> None:
        print(c("  → open the settings page", GRAY))


class ConsoleProgressListener:
    """Log every progress snapshot; print it too when ``echo`` is set."""

    def __init__(self, echo: bool = False):
        self.echo = echo

    def __call__(self, item_id: ItemId, progress: UpdateProgress) -> None:
        log_event(
            "update_progress",
            level=logging.DEBUG,
            item_id=item_id,
            progress=progress.message,
            checking=progress.checking,
            error=progress.error,
        )
        if self.echo:
            suffix = f" ({progress.error})" if progress.error else ""
            print(c(f"  #{item_id}: {progress.message}{suffix}", GRAY))


__all__ = ["ConsoleNotifier", "ConsoleNavigator", "ConsoleProgressListener"]

"""Update source selection.

Resolves where a script is checked and downloaded from, and how it is named
in user-facing text. User overrides win over declared metadata; the update
URL falls back to the download URL, which in turn falls back to the URL the
script was last installed from.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .types import ScriptItem


def resolve_update_urls(item: ScriptItem) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(download_url, update_url)`` for ``item``; either may be ``None``."""
    download_url = (
        item.custom.download_url
        or item.meta.download_url
        or item.custom.last_install_url
        or None
    )
    update_url = item.custom.update_url or item.meta.update_url or download_url
    return download_url, update_url or None


def display_name(item: ScriptItem) -> str:
    """First non-empty of the user name, the declared name, then ``#<id>``."""
    return item.custom.name or item.meta.name or f"#{item.id}"


__all__ = ["resolve_update_urls", "display_name"]

"""Userscript metadata block parsing.

A userscript declares its metadata in a comment block::

    // ==UserScript==
    // @name        Example
    // @version     1.2.0
    // @require     https://example.com/lib.js
    // @resource    css https://example.com/style.css
    // ==/UserScript==

Update servers usually answer the metadata URL with just this block, while a
download returns the whole script. :func:`parse_meta` handles both and
returns a plain dict; :func:`parse_script_meta` wraps it in a
:class:`ScriptMeta`.

Notes
- Localized keys such as ``@name:fr`` are ignored.
- Multi-valued keys (``@require``, ``@resource``) accumulate; any other
  repeated key keeps its last value.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from .types import ScriptMeta

_BLOCK_RE = re.compile(
    r"//\s*==UserScript==\s*$(.*?)^\s*//\s*==/UserScript==", re.M | re.S
)
_LINE_RE = re.compile(r"^\s*//\s*@([\w-]+)(:\S+)?(?:\s+(.*?))?\s*$")
_LIST_KEYS = {"require", "match", "include", "exclude", "grant", "connect"}


def parse_meta(code: str) -> Optional[Dict[str, object]]:
    """Return the metadata block of ``code`` as a dict, or ``None`` if absent."""
    m = _BLOCK_RE.search(code or "")
    if not m:
        return None
    meta: Dict[str, object] = {}
    lists: Dict[str, List[str]] = {}
    resources: Dict[str, str] = {}
    for line in m.group(1).splitlines():
        lm = _LINE_RE.match(line)
        if not lm or lm.group(2):
            continue
        key, value = lm.group(1), lm.group(3) or ""
        if key in _LIST_KEYS:
            if value:
                lists.setdefault(key, []).append(value)
        elif key == "resource":
            name, _, url = value.partition(" ")
            if name and url.strip():
                resources[name] = url.strip()
        else:
            meta[key] = value
    meta.update(lists)
    if resources:
        meta["resource"] = resources
    return meta


def parse_script_meta(code: str) -> Optional[ScriptMeta]:
    """Like :func:`parse_meta` but returns a :class:`ScriptMeta`."""
    raw = parse_meta(code)
    if raw is None:
        return None
    return ScriptMeta.from_dict(raw)


def meta_version(code: str) -> str:
    """Return the declared ``@version`` or an empty string."""
    raw = parse_meta(code) or {}
    version = raw.get("version")
    return version if isinstance(version, str) else ""


def requirement_urls(meta: ScriptMeta) -> List[str]:
    """All external URLs a script depends on, in declaration order."""
    urls = list(meta.require)
    urls.extend(url for url in meta.resources.values() if url not in urls)
    return urls


__all__ = ["parse_meta", "parse_script_meta", "meta_version", "requirement_urls"]

"""Version comparison helpers.

Implements a tolerant semver-ish comparator: numeric chunks compare
numerically, alphanumeric chunks lexically, an optional leading "v" is
ignored and missing trailing chunks count as ``0`` (so ``1.0 == 1.0.0``).
A numeric chunk outranks an alphanumeric one at the same position, which makes
``1.2.3-beta`` older than ``1.2.3``.
"""

from __future__ import annotations

import re
from itertools import zip_longest
from typing import List, Union

_Part = Union[int, str]

_NUMERIC = re.compile(r"[0-9]+")


def compare_versions(a: str, b: str) -> int:
    """Return ``-1``, ``0`` or ``1`` as ``a`` is older, equal or newer than ``b``."""
    return _compare_parts(_version_parts(a), _version_parts(b))


def is_version_newer(current: str, candidate: str) -> bool:
    """Return True if ``candidate`` is strictly newer than ``current``."""
    return compare_versions(current, candidate) < 0


def _version_parts(version: str) -> List[_Part]:
    version = (version or "").strip()
    if version[:1] in {"v", "V"}:
        version = version[1:]
    parts: List[_Part] = []
    for chunk in re.split(r"[.\-+_]", version):
        if not chunk:
            continue
        if _NUMERIC.fullmatch(chunk):
            parts.append(int(chunk))
        else:
            parts.append(chunk.lower())
    return parts


def _compare_parts(left: List[_Part], right: List[_Part]) -> int:
    for a, b in zip_longest(left, right, fillvalue=0):
        if a == b:
            continue
        if isinstance(a, int) and isinstance(b, int):
            return -1 if a < b else 1
        if isinstance(a, int):
            return 1
        if isinstance(b, int):
            return -1
        return -1 if a < b else 1
    return 0


__all__ = ["compare_versions", "is_version_newer"]

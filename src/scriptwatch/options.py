"""Persisted checker options.

:class:`JsonOptionsStore` keeps the handful of options the orchestrator
reads and writes (notification toggles, the last bulk-check time and the
bulk-check interval) and mirrors them to a JSON file when given a path.

Design notes:
 - Persistence format is a simple JSON object at a path chosen by callers.
 - Keys the store does not know about are preserved on save.
 - Methods never raise for I/O or decoding errors; they log a short message
   and fall back to defaults so a broken options file never blocks a check.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .consts import DEFAULT_OPTIONS

logger = logging.getLogger(__name__)


class JsonOptionsStore:
    def __init__(
        self,
        values: Optional[Dict[str, Any]] = None,
        path: Optional[Path] = None,
    ):
        self.values: Dict[str, Any] = dict(DEFAULT_OPTIONS)
        self.values.update(values or {})
        self.path = path

    def get(self, key: str) -> Any:
        return self.values.get(key, DEFAULT_OPTIONS.get(key))

    def set(self, key: str, value: Any) -> None:
        """Set ``key`` and write the file right away when a path is set."""
        self.values[key] = value
        if self.path is not None:
            self.save(self.path)

    def save(self, path: Path) -> None:
        """Write options to ``path`` as JSON.

        - Creates parent directories as needed.
        - Preserves keys already present in the file.
        - Never raises; logs a warning and returns on failure.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            try:
                existing = (
                    json.loads(path.read_text(encoding="utf-8"))
                    if path.exists()
                    else {}
                )
                if not isinstance(existing, dict):
                    existing = {}
            except Exception:
                existing = {}
            existing.update(self.values)
            path.write_text(json.dumps(existing, indent=2), encoding="utf-8")
        except Exception as e:
            logger.warning("Could not save options: %s", e)

    @classmethod
    def load(cls, path: Path) -> "JsonOptionsStore":
        """Load options from ``path``; fall back to defaults on error.

        The returned store writes back to ``path`` on every :meth:`set`.
        """
        values: Dict[str, Any] = {}
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    values = data
                else:
                    logger.warning("Ignoring options file %s: not an object", path)
            except Exception as e:
                logger.warning("Could not load options: %s", e)
        return cls(values, path=path)


__all__ = ["JsonOptionsStore"]

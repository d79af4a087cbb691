"""Small helpers shared by the command line entry point."""

from __future__ import annotations
import re
from importlib.metadata import version as pkg_version
from pathlib import Path


def get_version() -> str:
    """Return the package version string.

    Lookup order (first match wins):
    1) ``importlib.metadata.version('scriptwatch')`` (installed package)
    2) ``project.version`` scanned from ``pyproject.toml`` (source checkout)
    3) Fallback string ``"0.0.0+unknown"``
    """
    try:
        return pkg_version("scriptwatch")
    except Exception:
        pass

    pyproj = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproj.exists():
        try:
            text = pyproj.read_text(encoding="utf-8")
            m = re.search(r"(?ms)^\[project\].*?^version\s*=\s*\"([^\"]+)\"", text)
            if m:
                return m.group(1)
        except OSError:
            pass

    return "0.0.0+unknown"


__all__ = ["get_version"]

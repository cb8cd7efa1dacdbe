"""
KATRIN - script language toolkit for narrative games.

Lexes and parses KATRIN scripts into ordered instruction programs for a
game runtime.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ir
from .core.errors import KatrinError, ManifestError, ParseError
from .core.parser import parse_script


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("katrin-lang")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "parse_script",
    "KatrinError",
    "ManifestError",
    "ParseError",
]

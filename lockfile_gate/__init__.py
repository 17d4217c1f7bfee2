from __future__ import annotations

from .validator import find_missing_fields

__all__ = ["__version__", "find_missing_fields"]
__version__ = "0.1.0"

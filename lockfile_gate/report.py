from __future__ import annotations

from typing import Any, Sequence

from .config import Policy

INDENT = "    "


def lockfile_name(document: Any) -> str | None:
    name = document.get("name") if isinstance(document, dict) else None
    return name if isinstance(name, str) else None


def format_report(
    document: Any, missing: Sequence[str], policy: Policy | None = None
) -> list[str]:
    """Render the violation report; empty when nothing is missing."""
    if not missing:
        return []

    filename = (policy or Policy()).lockfile_name
    name = lockfile_name(document)
    prefix = f"[ERROR] [{name}] " if name is not None else "[ERROR] "
    lines = [
        f"{prefix}{filename} is missing the following resolved/integrity fields:"
    ]
    lines.extend(f"{INDENT}{key}" for key in missing)
    return lines

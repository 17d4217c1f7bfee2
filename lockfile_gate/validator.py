"""Check that every installed dependency in a lockfile is fully resolved.

Only the ``packages`` section is inspected. An entry must carry both an
``integrity`` checksum and a ``resolved`` location unless it is the root
project (empty key), a workspace member (key outside ``node_modules``) or a
symlink (``link: true``).
"""

from __future__ import annotations

from typing import Any

from .config import Policy

_DEFAULT_POLICY = Policy()


def is_missing(entry: Any, field: str) -> bool:
    """Absent or JSON null. A value of the wrong type still counts as present."""
    if not isinstance(entry, dict):
        return True
    return entry.get(field) is None


def requires_fields(key: str, entry: Any, policy: Policy = _DEFAULT_POLICY) -> bool:
    # empty key is the root project itself
    if not key:
        return False
    if not key.startswith(policy.dependency_prefix):
        return False
    # `is True` so that a numeric 1 does not pass as a symlink
    if isinstance(entry, dict) and entry.get(policy.link_field) is True:
        return False
    return True


def find_missing_fields(document: Any, policy: Policy | None = None) -> list[str]:
    """Return the ``packages`` keys whose entries lack a required field.

    Keys come back in document order. A document without a ``packages``
    object has nothing to check and yields an empty list.
    """
    policy = policy or _DEFAULT_POLICY

    packages = document.get("packages") if isinstance(document, dict) else None
    if not isinstance(packages, dict):
        return []

    missing: list[str] = []
    for key, entry in packages.items():
        if not requires_fields(key, entry, policy):
            continue
        if any(is_missing(entry, field) for field in policy.required_fields):
            missing.append(key)
    return missing

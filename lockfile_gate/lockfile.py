from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .config import Policy
from .util import log_event, setup_json_logger

_LOG = setup_json_logger("lockfile_gate.lockfile")


class LockfileError(Exception):
    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class LockfileReadError(LockfileError):
    """The lockfile is missing, unreadable or not UTF-8."""


class LockfileParseError(LockfileError):
    """The lockfile is not syntactically valid JSON."""


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _ensure_encodable(document: Any) -> None:
    # "\ud800" decodes to a lone surrogate that cannot be written as UTF-8
    json.dumps(document, ensure_ascii=False).encode("utf-8")


def lockfile_path(directory: str | Path, policy: Policy | None = None) -> Path:
    name = (policy or Policy()).lockfile_name
    return Path(directory) / name


def read_lockfile(directory: str | Path, policy: Policy | None = None) -> str:
    path = lockfile_path(directory, policy)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log_event(
            _LOG,
            "lockfile.read.failure",
            path=str(path),
            error=type(exc).__name__,
        )
        raise LockfileReadError(
            f"Could not read {path.name} at {path}", path
        ) from exc


def _parse_failure(message: str, path: Path | None) -> LockfileParseError:
    log_event(
        _LOG,
        "lockfile.parse.failure",
        path=str(path) if path else None,
        error=message,
    )
    return LockfileParseError(message, path or Path("-"))


def parse_lockfile(text: str, path: Path | None = None) -> Any:
    """Parse strict JSON.

    ``NaN``, ``Infinity``, unpaired surrogate escapes and nesting deeper than
    the interpreter's recursion limit are all parse errors.
    """
    try:
        document = json.loads(text, parse_constant=_reject_constant)
        _ensure_encodable(document)
    except RecursionError as exc:
        raise _parse_failure(f"recursion limit exceeded: {exc}", path) from exc
    except UnicodeEncodeError as exc:
        raise _parse_failure("lone surrogate in string escape", path) from exc
    except ValueError as exc:
        # JSONDecodeError is a ValueError subclass
        raise _parse_failure(str(exc), path) from exc
    return document


def load_lockfile(directory: str | Path, policy: Policy | None = None) -> Any:
    text = read_lockfile(directory, policy)
    return parse_lockfile(text, lockfile_path(directory, policy))

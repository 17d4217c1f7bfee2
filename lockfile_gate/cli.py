from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .config import load_policy
from .lockfile import LockfileError, load_lockfile
from .report import format_report
from .util import begin_request, elapsed_ms, log_event, setup_json_logger
from .validator import find_missing_fields

_LOG = setup_json_logger("lockfile_gate.cli")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def run(directory: Path) -> int:
    policy = load_policy()
    try:
        document = load_lockfile(directory, policy)
    except LockfileError as exc:
        print(f"[ERROR] {exc}")
        return EXIT_FAILURE

    missing = find_missing_fields(document, policy)
    for line in format_report(document, missing, policy):
        print(line)
    return EXIT_FAILURE if missing else EXIT_SUCCESS


def _run_logged(directory: Path) -> int:
    started = time.perf_counter()
    log_event(_LOG, "cli.command.start", directory=directory)
    try:
        rc = run(directory)
    except Exception as exc:
        log_event(
            _LOG,
            "cli.command.error",
            directory=directory,
            error=type(exc).__name__,
            detail=str(exc),
            gate_outcome="error",
            latency_ms=elapsed_ms(started),
        )
        raise

    log_event(
        _LOG,
        "cli.command.finish",
        directory=directory,
        gate_outcome="success" if rc == EXIT_SUCCESS else "failure",
        latency_ms=elapsed_ms(started),
    )
    return rc


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="lockfile-gate",
        description="Fail when package-lock.json has entries without integrity or resolved.",
    )
    p.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing package-lock.json (default: current directory).",
    )
    args = p.parse_args(sys.argv[1:] if argv is None else argv)

    begin_request()
    return _run_logged(Path(args.directory))


if __name__ == "__main__":
    raise SystemExit(main())

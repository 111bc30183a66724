"""Structured logging and verbosity levels for Metadelta runs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # Summary only
    VERBOSE = 1   # + per-stage progress
    DEBUG = 2     # + per-artifact auto-wire details, timing


@dataclass
class CompareLog:
    """Structured record of one compare/package run.

    The dict format is::

        {
            "run_id": "20250101T120000Z",
            "left_count": 12,
            "right_count": 10,
            "counts": {"added": 2, "removed": 0, "changed": 3, "unchanged": 7},
            "selected": 1,
            "expanded_keys": ["CustomField/Account.Phone", "CustomObject/Account"],
            "manifest_members": 2,
            "files_written": 0,
            "total_time": 0.01,
        }
    """

    run_id: str = ""
    left_count: int = 0
    right_count: int = 0
    counts: dict[str, int] = field(default_factory=dict)
    selected: int = 0
    expanded_keys: list[str] = field(default_factory=list)
    manifest_members: int = 0
    files_written: int = 0
    total_time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "left_count": self.left_count,
            "right_count": self.right_count,
            "counts": dict(self.counts),
            "selected": self.selected,
            "expanded_keys": list(self.expanded_keys),
            "manifest_members": self.manifest_members,
            "files_written": self.files_written,
            "total_time": self.total_time,
        }


class CompareLogger:
    """Structured logger for Metadelta runs.

    Writes JSONL log files to log_dir/ and optionally emits console
    output via Rich based on verbosity level.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
        console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.log_dir = log_dir
        self.console = console or Console()
        self.run_log = CompareLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._log_file = None
        self._log_path: Path | None = None
        self._start = time.time()

        if log_dir is not None:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_path = log_dir / f"{self.run_log.run_id}.jsonl"
            self._log_file = open(self._log_path, "a")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file."""
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            self._log_file.write(json.dumps(event) + "\n")
            self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        if self.verbosity >= min_verbosity:
            self.console.print(message)

    # -- Comparison events --

    def compare_start(self, left_count: int, right_count: int) -> None:
        self.run_log.left_count = left_count
        self.run_log.right_count = right_count
        self._write_event({
            "event": "compare_start",
            "left_count": left_count,
            "right_count": right_count,
        })
        self._console_print(
            f"  [bold]Comparing:[/bold] {left_count} left, {right_count} right",
            Verbosity.VERBOSE,
        )

    def compare_finish(self, counts: dict[str, int]) -> None:
        self.run_log.counts = dict(counts)
        self._write_event({"event": "compare_finish", **counts})
        self._console_print(
            "    "
            + ", ".join(f"{n} {status}" for status, n in counts.items()),
            Verbosity.VERBOSE,
        )

    # -- Packaging events --

    def auto_wired(self, key: str) -> None:
        """Log an artifact pulled in by dependency expansion."""
        self._write_event({"event": "auto_wired", "key": key})
        self._console_print(f"      [green]+[/green] {key} [dim](auto-wired)[/dim]", Verbosity.DEBUG)

    def expand_finish(self, selected: int, expanded_keys: list[str]) -> None:
        self.run_log.selected = selected
        self.run_log.expanded_keys = list(expanded_keys)
        self._write_event({
            "event": "expand_finish",
            "selected": selected,
            "expanded": len(expanded_keys),
        })
        self._console_print(
            f"  [bold]Expanded:[/bold] {selected} selected -> {len(expanded_keys)} artifacts",
            Verbosity.VERBOSE,
        )

    def manifest_built(self, types: int, members: int) -> None:
        self.run_log.manifest_members = members
        self._write_event({"event": "manifest_built", "types": types, "members": members})
        self._console_print(
            f"  [bold]Manifest:[/bold] {members} members across {types} types",
            Verbosity.VERBOSE,
        )

    def files_written(self, count: int, output_dir: Path) -> None:
        self.run_log.files_written = count
        self._write_event({"event": "files_written", "count": count, "output_dir": str(output_dir)})
        self._console_print(f"  [bold]Wrote[/bold] {count} files to {output_dir}", Verbosity.VERBOSE)

    # -- Run lifecycle --

    def finish(self) -> CompareLog:
        """Finalize timing, close the log file and return the run record."""
        self.run_log.total_time = round(time.time() - self._start, 3)
        self._write_event({"event": "run_finish", "total_time": self.run_log.total_time})
        self._console_print(f"[dim]Done in {self.run_log.total_time:.2f}s[/dim]", Verbosity.DEBUG)
        self.close()
        return self.run_log

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None

"""Lightweight logging utilities for compiler-style warnings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List

WARN_CODES = {
    "unsupported-block": "W001",
    "untitled-page": "W002",
    "file-io-warning": "W003",
}


@dataclass(frozen=True)
class WarningEntry:
    """Captured warning with minimal metadata."""

    source: str
    element_type: str
    message: str
    code: str

    def format(self) -> str:
        return f"{self.source} [{self.code}][{self.element_type}] {self.message}"


class WarningLogger:
    """Collect warnings and write them to a timestamped log file."""

    def __init__(self, root_name: str, *, log_dir: Path | None = None) -> None:
        sanitized = re.sub(r"[^A-Za-z0-9_-]", "_", root_name) or "notion"
        timestamp = datetime.now().strftime("%Y-%m-%d-%H%M")
        self.log_path = (log_dir or Path("logs")) / f"{sanitized}_{timestamp}.log"
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._warnings: List[WarningEntry] = []

    @property
    def warnings(self) -> list[WarningEntry]:
        return list(self._warnings)

    def warn(
        self,
        *,
        source: str,
        element_type: str,
        message: str,
        code: str,
    ) -> None:
        entry = self._record(source, element_type, message, code)
        with self.log_path.open("a", encoding="utf-8") as handle:
            handle.write(f"{entry.format()}\n")

    def summary(self) -> str:
        return f"Found {len(self._warnings)} warnings. See {self.log_path.name}"

    def has_warnings(self) -> bool:
        return bool(self._warnings)

    def _record(
        self, source: str, element_type: str, message: str, code: str
    ) -> WarningEntry:
        entry = WarningEntry(
            source=source or "<unknown>",
            element_type=element_type,
            message=message,
            code=WARN_CODES.get(code, code),
        )
        self._warnings.append(entry)
        return entry


class NullLogger(WarningLogger):
    """Logger that keeps warnings in memory but never touches disk."""

    def __init__(self) -> None:
        self.log_path = Path("/dev/null")
        self._warnings: list[WarningEntry] = []

    def warn(
        self,
        *,
        source: str,
        element_type: str,
        message: str,
        code: str,
    ) -> None:
        self._record(source, element_type, message, code)

    def summary(self) -> str:
        return f"Found {len(self._warnings)} warnings."


__all__ = ["WarningLogger", "WarningEntry", "NullLogger", "WARN_CODES"]

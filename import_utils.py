"""Shared helpers for maintenance scripts (logging, zip code lists)."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional


def _now() -> str:
    """Return a short UTC timestamp for log lines."""
    return datetime.now(timezone.utc).strftime("%H:%M:%S")


def log_header(title: str) -> None:
    """Print a standardized header block for console output."""
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def log_step(message: str) -> None:
    """Print a single timestamped log line."""
    print(f"[{_now()}] {message}")


def split_zip_args(values: Optional[Iterable[str]]) -> List[str]:
    """Flatten repeated / comma-separated --zip values, keeping first-seen order."""
    zips: List[str] = []
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if part and part not in zips:
                zips.append(part)
    return zips


def read_zip_file(path: Path) -> List[str]:
    """Read one zip code per line; blank lines and '#' comments are ignored."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return split_zip_args(
        line.split("#", 1)[0] for line in lines
    )

"""Result models shared by the driver and the CLI."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class FormatResult:
    """In-memory outcome of formatting one file."""

    path: Path
    original: bytes
    formatted: bytes

    @property
    def changed(self) -> bool:
        return self.original != self.formatted


@dataclass
class BatchResult:
    """Outcome of a multi-file run.

    ``results`` holds every formatted file; ``errors`` holds each failure
    collected while reading, formatting or writing.
    """

    results: List[FormatResult] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

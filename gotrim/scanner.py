"""Expands command-line path arguments into the Go files to format."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "vendor",
    "testdata",
    "node_modules",
}

_GO_SUFFIX = ".go"


@dataclass
class IgnoreRule:
    """Represents an exclude pattern from .gotrim.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


class GoFileScanner:
    """Walks directories for ``.go`` files; explicit file arguments pass through."""

    def __init__(self, exclude_paths: Iterable[str] = ()) -> None:
        rules = (build_ignore_rule(pattern) for pattern in exclude_paths)
        self._rules: List[IgnoreRule] = [rule for rule in rules if rule is not None]

    def expand(self, paths: Sequence[str | Path]) -> List[Path]:
        files: List[Path] = []
        seen = set()
        for raw in paths:
            path = Path(raw)
            candidates = self._walk(path) if path.is_dir() else [path]
            for candidate in candidates:
                if candidate not in seen:
                    seen.add(candidate)
                    files.append(candidate)
        return files

    def _walk(self, root: Path) -> List[Path]:
        found: List[Path] = []
        for current, dirnames, filenames in os.walk(root):
            current_path = Path(current)
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not self._skip_dir(name, self._relative(current_path / name, root))
            )
            for filename in sorted(filenames):
                if not filename.endswith(_GO_SUFFIX) or filename.startswith("."):
                    continue
                candidate = current_path / filename
                if self._ignored(self._relative(candidate, root), is_dir=False):
                    continue
                found.append(candidate)
        return found

    def _skip_dir(self, name: str, rel_path: str) -> bool:
        # The go tool ignores these directory names as well.
        if name in _EXCLUDED_DIRS or name.startswith((".", "_")):
            return True
        return self._ignored(rel_path, is_dir=True)

    def _ignored(self, rel_path: str, *, is_dir: bool) -> bool:
        return any(rule.matches(rel_path, is_dir) for rule in self._rules)

    @staticmethod
    def _relative(path: Path, root: Path) -> str:
        return path.relative_to(root).as_posix()


__all__ = ["GoFileScanner", "IgnoreRule", "build_ignore_rule"]

"""Unified diff rendering for the -d output mode."""

from __future__ import annotations

import difflib


def render_diff(original: bytes, updated: bytes, path: str) -> str:
    before = original.decode("utf-8", errors="replace")
    after = updated.decode("utf-8", errors="replace")
    diff = difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"{path} (original)",
        tofile=f"{path} (formatted)",
    )
    return "".join(diff)


__all__ = ["render_diff"]

"""Passes that run on rendered source text."""

from .diff import render_diff
from .organizer import ImportOrganizer, ImportSpec, OrganizeError

__all__ = ["ImportOrganizer", "ImportSpec", "OrganizeError", "render_diff"]

"""gotrim: trims blank lines inside Go blocks and import groups."""

__version__ = "0.1.0"

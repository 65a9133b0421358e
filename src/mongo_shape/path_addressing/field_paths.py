"""Dot-separated field paths."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldPath:
    """Ordered segments addressing one position (or a wildcard fan-out) in a tree."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> FieldPath:
        """Split a dot path, rejecting empty segments."""
        segments = tuple(text.split("."))
        if not text or any(not segment for segment in segments):
            raise ValueError(f"Invalid field path: {text!r}")
        return cls(segments)

    @classmethod
    def coerce(cls, path: FieldPath | str) -> FieldPath:
        """Accept either a parsed path or raw dot text without validating segments."""
        if isinstance(path, FieldPath):
            return path
        return cls(tuple(path.split(".")))

    def __str__(self) -> str:
        return ".".join(self.segments)


def join_path(prefix: str, segment: str | int) -> str:
    """Append one segment to a rendered dot path."""
    return str(segment) if not prefix else f"{prefix}.{segment}"


def parse_index(segment: str) -> int | None:
    """Return the array index a segment names, or None for anything else."""
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None

"""Shared helpers for artifact reporting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import FilesystemError


def file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError as exc:
        raise FilesystemError(f"Unable to stat {path}: {exc}") from exc


def format_kb(size: int) -> str:
    return f"{size / 1024:.2f}"


def format_mb(size: int) -> str:
    return f"{size / (1024 * 1024):.2f}"


@dataclass(frozen=True, slots=True)
class SizeComparison:
    """Size of a new artifact relative to a companion from a previous run."""

    label: str
    path: Path
    size: int
    reference_size: int

    @property
    def reduction(self) -> float:
        """Percentage reduction; negative when the new artifact is larger."""

        if self.reference_size == 0:
            return 0.0
        return (1 - self.size / self.reference_size) * 100

    def describe(self) -> str:
        return (
            f"Reduction vs {self.label} build: {self.reduction:.1f}% "
            f"({format_kb(self.reference_size)} KB -> {format_kb(self.size)} KB)"
        )

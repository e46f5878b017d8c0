from __future__ import annotations

from dataclasses import dataclass


DEFAULT_COMPAT = "1.13"
DEFAULT_HEADER = "% Created via tikz_export"
DEFAULT_PRECISION = 6


@dataclass(frozen=True)
class CanvasSize:
    """Picture size in millimetres."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("canvas width/height must be >= 0")

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


DEFAULT_CANVAS_SIZE = CanvasSize(width=100, height=100)


@dataclass(frozen=True)
class ExportConfig:
    compat: str = DEFAULT_COMPAT
    precision: int = DEFAULT_PRECISION
    header: str = DEFAULT_HEADER

    def __post_init__(self) -> None:
        if not self.compat.strip():
            raise ValueError("compat version must be non-empty")
        if not 0 <= self.precision <= 17:
            raise ValueError("precision must be in [0, 17]")
        if not self.header.startswith("%"):
            raise ValueError("header must be a comment line starting with '%'")


def resolve_canvas_size(size: CanvasSize | tuple[int, int] | None) -> CanvasSize:
    if size is None:
        return DEFAULT_CANVAS_SIZE
    if not isinstance(size, CanvasSize):
        width, height = size
        size = CanvasSize(width=int(width), height=int(height))
    if size.is_empty:
        return DEFAULT_CANVAS_SIZE
    return size

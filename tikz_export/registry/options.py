from __future__ import annotations

import logging
from typing import Iterator

from tikz_export.config import DEFAULT_COMPAT, DEFAULT_PRECISION
from tikz_export.elements.base import Element
from tikz_export.formatting import format_colormap, format_line
from tikz_export.registry.colors import ColorRegistry
from tikz_export.scene import Color, Colormap

LOGGER = logging.getLogger(__name__)

COMPATIBILITY_SLOT = 0
MAJOR_GRID_STYLE_SLOT = 2
MINOR_GRID_STYLE_SLOT = 3


class PgfPlotOptions(Element):
    """Document-wide ``\\pgfplotsset`` directives.

    The compatibility and grid-style slots are overwritten in place; every
    other directive is appended in insertion order.
    """

    def __init__(self, colors: ColorRegistry, *, precision: int = DEFAULT_PRECISION) -> None:
        self._colors = colors
        self._precision = precision
        self._options: list[str] = [
            f"compat={DEFAULT_COMPAT}",
            "set layers",
            "major grid style={solid,very thin,white!80!black}",
            "minor grid style={dashed,very thin,white!90!black}",
        ]

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __getitem__(self, index: int) -> str:
        return self._options[index]

    def append(self, option: str) -> None:
        self._options.append(option)

    def set_compatibility(self, version: str) -> None:
        self._options[COMPATIBILITY_SLOT] = f"compat={version}"

    def set_major_grid_style(self, color: Color, dash: str, width: float) -> None:
        self._options[MAJOR_GRID_STYLE_SLOT] = f"major grid style={{{self._grid_line(color, dash, width)}}}"
        LOGGER.debug("major grid style set to %s", self._options[MAJOR_GRID_STYLE_SLOT])

    def set_minor_grid_style(self, color: Color, dash: str, width: float) -> None:
        self._options[MINOR_GRID_STYLE_SLOT] = f"minor grid style={{{self._grid_line(color, dash, width)}}}"
        LOGGER.debug("minor grid style set to %s", self._options[MINOR_GRID_STYLE_SLOT])

    def add_colormap(self, colormap: Colormap) -> None:
        self._options.append(format_colormap(colormap, self._precision))

    def body(self) -> Iterator[str]:
        for option in self._options:
            if not option.strip():
                continue
            yield f"\\pgfplotsset{{{option}}}"

    def _grid_line(self, color: Color, dash: str, width: float) -> str:
        # grid lines are drawn at half the scene's line width
        return format_line(self._colors, color, dash, 0.5 * width, self._precision)

from __future__ import annotations

from typing import Iterator

from tikz_export.elements.base import Element
from tikz_export.scene import BLACK, WHITE, Color

KNOWN_COLORS: dict[Color, str] = {BLACK: "black", WHITE: "white"}


class ColorRegistry(Element):
    """Colors referenced by the document, named ``colorDefNN`` in first-seen order.

    Black and white map to the built-in xcolor names and are never defined.
    """

    def __init__(self) -> None:
        self._colors: list[Color] = []
        self._index: dict[Color, int] = {}

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self._colors)

    def __contains__(self, color: object) -> bool:
        return color in KNOWN_COLORS or color in self._index

    def add(self, color: Color) -> None:
        if color in KNOWN_COLORS or color in self._index:
            return
        self._index[color] = len(self._colors)
        self._colors.append(color)

    def resolve_name(self, color: Color) -> str:
        known = KNOWN_COLORS.get(color)
        if known is not None:
            return known
        self.add(color)
        return _color_name(self._index[color])

    def remove(self, color: Color) -> bool:
        """Drop a color; later colors shift down one slot."""
        if color not in self._index:
            return False
        self._colors.remove(color)
        self._index = {c: i for i, c in enumerate(self._colors)}
        return True

    def clear(self) -> None:
        self._colors.clear()
        self._index.clear()

    @staticmethod
    def format_rgb(color: Color) -> str:
        return f"{color.r / 255.0:.6f},{color.g / 255.0:.6f},{color.b / 255.0:.6f}"

    @property
    def preamble(self) -> str:
        return ""

    def body(self) -> Iterator[str]:
        for i, color in enumerate(self._colors):
            yield f"\\definecolor{{{_color_name(i)}}}{{rgb}}{{{self.format_rgb(color)}}}"

    @property
    def postamble(self) -> str:
        return ""


def _color_name(index: int) -> str:
    return f"colorDef{index:02d}"

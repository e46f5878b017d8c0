from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

import numpy as np

from tikz_export.elements.base import LeafElement
from tikz_export.formatting import format_dash, format_line, format_marker, format_value, marker_shape
from tikz_export.scene import BLACK, AxisContainer, AxisScale, Color, Legend, LinePlot, Node
from tikz_export.text import escape_text

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext

ROW_END = "\\\\"
TABLE_END = "};"


class LinePlotElement(LeafElement):
    """``\\addplot`` with an inline x/y table and an optional legend entry."""

    def __init__(self) -> None:
        self.context: ExportContext | None = None
        self.line_plot: LinePlot | None = None
        self.scales: tuple[AxisScale, AxisScale, AxisScale] = ("linear", "linear", "linear")

        self.line_color: Color = BLACK
        self.line_dash: str = "solid"
        self.line_width: float = 1.0

        self.marker_color: Color = BLACK
        self.marker_style: str = "none"
        self.marker_size: float = 1.0

        self.legend_text: str | None = None

    @property
    def preamble(self) -> str:
        if self.context is None:
            return ""
        return f"\\addplot[{','.join(self._style_options())}]"

    def body(self) -> Iterator[str]:
        if self.context is None or self.line_plot is None:
            return
        yield "  table[x=x, y=y, row sep=crcr]{"
        yield f"  x\ty{ROW_END}"
        x, y = self._xy(self.line_plot)
        precision = self.context.precision
        for xv, yv in zip(x.tolist(), y.tolist()):
            yield f"  {format_value(xv, precision)}\t{format_value(yv, precision)}{ROW_END}"
        yield TABLE_END

    @property
    def postamble(self) -> str:
        if not self.legend_text:
            return ""
        return f"\\addlegendentry{{{escape_text(self.legend_text)}}}"

    def bind(self, node: Node, context: "ExportContext") -> None:
        self.context = context
        if not isinstance(node, LinePlot):
            return
        self.line_plot = node
        self.scales = axis_scales(node)

        self.line_color = node.line.color or BLACK
        context.colors.add(self.line_color)
        self.line_dash = node.line.dash
        format_dash(self.line_dash)
        self.line_width = node.line.width

        self.marker_color = node.marker.fill or self.line_color
        context.colors.add(self.marker_color)
        self.marker_style = node.marker.style
        if self.marker_style != "none":
            marker_shape(self.marker_style)
        self.marker_size = max(node.marker.size / 2, 1)

        self.legend_text = legend_caption(node)

    def _style_options(self) -> list[str]:
        assert self.context is not None
        colors = self.context.colors
        precision = self.context.precision
        options = [format_line(colors, self.line_color, self.line_dash, self.line_width, precision)]
        if self.marker_style != "none":
            options.append(format_marker(colors, self.marker_color, self.marker_style, self.marker_size, precision))
        return options

    def _xy(self, line_plot: LinePlot) -> tuple[np.ndarray, np.ndarray]:
        positions = line_plot.coordinates()
        return (
            to_linear(positions[0], self.scales[0]),
            to_linear(positions[1], self.scales[1]),
        )


def axis_scales(node: Node) -> tuple[AxisScale, AxisScale, AxisScale]:
    container = node.first_up(AxisContainer)
    if container is None:
        return ("linear", "linear", "linear")
    return (container.x_axis.scale, container.y_axis.scale, container.z_axis.scale)


def legend_caption(node: Node) -> str | None:
    container = node.first_up(AxisContainer)
    if container is None:
        return None
    legend = container.first(Legend)
    if legend is None:
        return None
    return legend.caption_for(node)


def to_linear(values: np.ndarray, scale: str) -> np.ndarray:
    """Map stored axis values back to data space (``10**v`` on log axes)."""
    if scale == "log":
        with np.errstate(over="ignore"):
            return np.power(10.0, values)
    return values

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

import numpy as np

from tikz_export.elements.plot import ROW_END, TABLE_END, LinePlotElement, legend_caption, to_linear
from tikz_export.errors import SceneGeometryError
from tikz_export.formatting import format_dash, format_error_bars, format_value
from tikz_export.scene import BLACK, Color, ErrorBarPlot, Node

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext


class ErrorBarPlotElement(LinePlotElement):
    """Line plot with a symmetric ``y error`` column.

    pgfplots has no asymmetric error column, so each row exports the larger of
    the two deviations.
    """

    def __init__(self) -> None:
        super().__init__()
        self.error_bar_plot: ErrorBarPlot | None = None
        self.error_bar_color: Color = BLACK
        self.error_bar_dash: str = "solid"
        self.error_bar_width: float = 1.0

    @property
    def preamble(self) -> str:
        if self.context is None:
            return ""
        options = self._style_options()
        options.append(
            format_error_bars(
                self.context.colors,
                self.error_bar_color,
                self.error_bar_dash,
                self.error_bar_width,
                self.context.precision,
            )
        )
        return f"\\addplot+[{','.join(options)}]"

    def body(self) -> Iterator[str]:
        if self.context is None or self.line_plot is None or self.error_bar_plot is None:
            return
        yield "  table[x=x, y=y, y error=ye, row sep=crcr]{"
        yield f"  x\ty\tye{ROW_END}"
        x, y = self._xy(self.line_plot)
        ye = symmetric_error(y, *self.error_bar_plot.endpoints(), y_scale=self.scales[1])
        precision = self.context.precision
        for xv, yv, ev in zip(x.tolist(), y.tolist(), ye.tolist()):
            yield (
                f"  {format_value(xv, precision)}\t{format_value(yv, precision)}"
                f"\t{format_value(ev, precision)}{ROW_END}"
            )
        yield TABLE_END

    def bind(self, node: Node, context: "ExportContext") -> None:
        self.context = context
        if not isinstance(node, ErrorBarPlot):
            return

        self.error_bar_color = node.error_bar.color or BLACK
        context.colors.add(self.error_bar_color)
        self.error_bar_dash = node.error_bar.dash
        format_dash(self.error_bar_dash)
        self.error_bar_width = node.error_bar.width

        lower, upper = node.endpoints()
        check_endpoints(node.line_plot.coordinates()[1], lower, upper)
        self.error_bar_plot = node
        super().bind(node.line_plot, context)
        if self.legend_text is None:
            self.legend_text = legend_caption(node)


def symmetric_error(y: np.ndarray, lower: np.ndarray, upper: np.ndarray, *, y_scale: str) -> np.ndarray:
    """``max(|lower - y|, |upper - y|)`` with endpoints mapped to data space first.

    ``y`` is already in data space.
    """
    check_endpoints(y, lower, upper)
    lower = to_linear(lower, y_scale)
    upper = to_linear(upper, y_scale)
    return np.maximum(np.abs(lower - y), np.abs(upper - y))


def check_endpoints(y: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> None:
    if lower.shape != y.shape or upper.shape != y.shape:
        raise SceneGeometryError(
            f"error bar endpoints must match the line length: {lower.size}/{upper.size} != {y.size}"
        )

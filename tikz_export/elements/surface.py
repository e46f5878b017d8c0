from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

import numpy as np

from tikz_export.elements.base import LeafElement
from tikz_export.elements.plot import ROW_END, TABLE_END, axis_scales, to_linear
from tikz_export.formatting import format_value
from tikz_export.scene import AxisScale, FastSurface, Node, Surface

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext

LOGGER = logging.getLogger(__name__)

SURFACE_OPTIONS = "surf,z buffer=sort,shader=faceted"


class SurfacePlotElement(LeafElement):
    """``\\addplot3`` surface for both grid (``Surface``) and flat (``FastSurface``) geometry."""

    def __init__(self) -> None:
        self.context: ExportContext | None = None
        self.surface: Surface | FastSurface | None = None
        self.scales: tuple[AxisScale, AxisScale, AxisScale] = ("linear", "linear", "linear")

    @property
    def preamble(self) -> str:
        if isinstance(self.surface, Surface):
            rows = self.surface.grid().shape[0]
            return f"\\addplot3[{SURFACE_OPTIONS},mesh/rows={rows}]"
        return f"\\addplot3[{SURFACE_OPTIONS}]"

    def body(self) -> Iterator[str]:
        if self.context is None or self.surface is None:
            return
        yield "  table[row sep=crcr]{"
        if isinstance(self.surface, Surface):
            rows = self._grid_rows(self.surface)
        else:
            rows = self._flat_rows(self.surface)
        precision = self.context.precision
        for xv, yv, zv in rows:
            yield (
                f"  {format_value(xv, precision)}\t{format_value(yv, precision)}"
                f"\t{format_value(zv, precision)}{ROW_END}"
            )
        yield TABLE_END

    def bind(self, node: Node, context: "ExportContext") -> None:
        self.context = context
        if not isinstance(node, (Surface, FastSurface)):
            return
        self.surface = node
        self.scales = axis_scales(node)
        context.options.add_colormap(node.colormap)

    def _to_linear(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        sx, sy, sz = self.scales
        return to_linear(x, sx), to_linear(y, sy), to_linear(z, sz)

    def _grid_rows(self, surface: Surface) -> Iterator[tuple[float, float, float]]:
        grid = surface.grid()
        x, y, z = self._to_linear(grid[:, :, 0], grid[:, :, 1], grid[:, :, 2])
        for i in range(grid.shape[0]):
            yield from zip(x[i].tolist(), y[i].tolist(), z[i].tolist())

    def _flat_rows(self, surface: FastSurface) -> Iterator[tuple[float, float, float]]:
        vertices = surface.vertices()
        x, y, z = self._to_linear(vertices[0], vertices[1], vertices[2])
        finite = np.isfinite(x) & np.isfinite(y) & np.isfinite(z)
        skipped = int(finite.size - np.count_nonzero(finite))
        if skipped:
            LOGGER.debug("skipped %d non-finite surface vertices", skipped)
        yield from zip(x[finite].tolist(), y[finite].tolist(), z[finite].tolist())

"""Read-only scene graph consumed by the exporter.

The node classes mirror the plotting library's scene model: a ``Scene`` root
holding an ``AxisContainer`` (the plot cube) which in turn holds data-bearing
plots, an optional ``Title`` and an optional ``Legend``. Geometry is kept as
supplied (numpy arrays, sequences, pandas objects or torch tensors) and only
coerced when the exporter reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import itertools
import re
from typing import Any, Iterator, Literal, TypeAlias, TypeVar

import numpy as np

from tikz_export.adapters import as_grid, as_positions, as_vector

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{6})([0-9a-fA-F]{2})?$")
_NODE_IDS = itertools.count(1)

DashStyle = Literal["solid", "dashed", "dotted", "dashdotted"]
MarkerStyle = Literal[
    "none",
    "dot",
    "circle",
    "square",
    "diamond",
    "triangle_up",
    "triangle_down",
    "plus",
    "cross",
    "star",
]
AxisScale = Literal["linear", "log"]
TickMode = Literal["none", "data", "custom", "auto"]

N = TypeVar("N", bound="Node")


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError("color channels must be in [0, 255]")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        match = _HEX_COLOR.match(value)
        if match is None:
            raise ValueError(f"color must be a hex string (#RRGGBB or #RRGGBBAA): {value!r}")
        rgb = match.group(1)
        alpha = int(match.group(2), 16) if match.group(2) else 255
        return cls(int(rgb[0:2], 16), int(rgb[2:4], 16), int(rgb[4:6], 16), alpha)


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class LineStyle:
    color: Color | None = None
    dash: DashStyle = "solid"
    width: float = 1.0


@dataclass(frozen=True)
class MarkerSpec:
    style: MarkerStyle = "none"
    fill: Color | None = None
    size: float = 6.0


@dataclass(frozen=True)
class GridLineSpec:
    visible: bool = False
    color: Color | None = None
    dash: DashStyle = "solid"
    width: float = 1.0


@dataclass(frozen=True)
class AxisSpec:
    label: str = ""
    scale: AxisScale = "linear"
    min: float | None = None
    max: float | None = None
    tick_length: float = 0.5
    ticks_visible: bool = True
    tick_mode: TickMode = "auto"
    tick_positions: tuple[float, ...] = ()
    major_grid: GridLineSpec = GridLineSpec(visible=True)
    minor_grid: GridLineSpec = GridLineSpec(dash="dashed")


@dataclass(frozen=True)
class Colormap:
    name: str
    keypoints: tuple[tuple[float, Color], ...]

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("colormap name must be non-empty")
        if len(self.keypoints) < 2:
            raise ValueError("colormap needs at least two keypoints")


DEFAULT_COLORMAP = Colormap(
    name="jet",
    keypoints=(
        (0.0, Color(0, 0, 128)),
        (0.125, Color(0, 0, 255)),
        (0.375, Color(0, 255, 255)),
        (0.625, Color(255, 255, 0)),
        (0.875, Color(255, 0, 0)),
        (1.0, Color(128, 0, 0)),
    ),
)


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    zmin: float
    zmax: float


@dataclass(eq=False)
class Node:
    id: int = field(default_factory=lambda: next(_NODE_IDS))
    parent: "Group | None" = field(default=None, init=False, repr=False)

    def first_up(self, kind: type[N]) -> N | None:
        node = self.parent
        while node is not None:
            if isinstance(node, kind):
                return node
            node = node.parent
        return None


@dataclass(eq=False)
class Group(Node):
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def add(self, *nodes: Node) -> "Group":
        for node in nodes:
            node.parent = self
            self.children.append(node)
        return self

    def find(self, kind: type[N]) -> Iterator[N]:
        """Depth-first, pre-order search over all descendants."""
        for child in self.children:
            if isinstance(child, kind):
                yield child
            if isinstance(child, Group):
                yield from child.find(kind)

    def first(self, kind: type[N]) -> N | None:
        return next(self.find(kind), None)


@dataclass(eq=False)
class Scene(Group):
    pass


@dataclass(eq=False)
class Title(Node):
    text: str = ""


@dataclass(eq=False)
class LegendItem(Node):
    provider_id: int | None = None
    text: str = ""


@dataclass(eq=False)
class Legend(Group):
    visible: bool = True
    location: tuple[float, float] = (0.95, 0.05)
    border: Color | None = None
    background: Color | None = None

    def add_item(self, provider: Node, text: str) -> LegendItem:
        item = LegendItem(provider_id=provider.id, text=text)
        self.add(item)
        return item

    def caption_for(self, node: Node) -> str | None:
        for item in self.find(LegendItem):
            if item.provider_id == node.id:
                return item.text
        return None


@dataclass(eq=False)
class LinePlot(Node):
    """Polyline with optional markers; ``positions`` has rows x, y (and z)."""

    positions: Any = field(default_factory=lambda: np.zeros((3, 0), dtype=np.float32))
    line: LineStyle = LineStyle()
    marker: MarkerSpec = MarkerSpec()

    def coordinates(self) -> np.ndarray:
        return as_positions(self.positions, rows=(2, 3), label="line plot positions")


@dataclass(eq=False)
class ErrorBarPlot(Group):
    """Line plot plus per-point deviation endpoints in axis space."""

    line_plot: LinePlot = field(default_factory=LinePlot)
    lower: Any = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    upper: Any = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    error_bar: LineStyle = LineStyle()

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.line_plot not in self.children:
            self.add(self.line_plot)

    def endpoints(self) -> tuple[np.ndarray, np.ndarray]:
        return (
            as_vector(self.lower, label="error bar lower endpoints"),
            as_vector(self.upper, label="error bar upper endpoints"),
        )


@dataclass(eq=False)
class Surface(Node):
    """Dense grid surface; ``positions`` has shape (rows, cols, 3) holding x, y, z."""

    positions: Any = field(default_factory=lambda: np.zeros((0, 0, 3), dtype=np.float32))
    colormap: Colormap = DEFAULT_COLORMAP

    def grid(self) -> np.ndarray:
        return as_grid(self.positions, label="surface positions")


@dataclass(eq=False)
class FastSurface(Node):
    """Surface given as a flat vertex list; ``positions`` has rows x, y, z."""

    positions: Any = field(default_factory=lambda: np.zeros((3, 0), dtype=np.float32))
    colormap: Colormap = DEFAULT_COLORMAP

    def vertices(self) -> np.ndarray:
        return as_positions(self.positions, rows=(3,), label="fast surface positions")


@dataclass(eq=False)
class AxisContainer(Group):
    """Plot cube: three axes, the plots they frame, optional title and legend."""

    two_d_mode: bool = True
    x_axis: AxisSpec = AxisSpec()
    y_axis: AxisSpec = AxisSpec()
    z_axis: AxisSpec = AxisSpec()
    view: tuple[float, float] | None = None

    def data_limits(self) -> DataLimits:
        """Extent of all contained geometry in stored (axis) space."""
        xs: list[np.ndarray] = []
        ys: list[np.ndarray] = []
        zs: list[np.ndarray] = []
        for line_plot in self.find(LinePlot):
            pos = line_plot.coordinates()
            xs.append(pos[0])
            ys.append(pos[1])
            if pos.shape[0] == 3:
                zs.append(pos[2])
        for error_plot in self.find(ErrorBarPlot):
            lower, upper = error_plot.endpoints()
            ys.extend((lower, upper))
        for surface in self.find(Surface):
            grid = surface.grid()
            xs.append(grid[:, :, 0].reshape(-1))
            ys.append(grid[:, :, 1].reshape(-1))
            zs.append(grid[:, :, 2].reshape(-1))
        for fast_surface in self.find(FastSurface):
            vertices = fast_surface.vertices()
            xs.append(vertices[0])
            ys.append(vertices[1])
            zs.append(vertices[2])
        xmin, xmax = _extent(xs)
        ymin, ymax = _extent(ys)
        zmin, zmax = _extent(zs)
        return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax, zmin=zmin, zmax=zmax)


SceneNode: TypeAlias = AxisContainer | LinePlot | Surface | FastSurface | ErrorBarPlot | Legend | LegendItem | Title


def _extent(chunks: list[np.ndarray]) -> tuple[float, float]:
    if not chunks:
        return 0.0, 1.0
    values = np.concatenate([c.reshape(-1) for c in chunks])
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return 0.0, 1.0
    return float(np.min(finite)), float(np.max(finite))

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Literal

import numpy as np

from tikz_export.elements.base import GroupElement
from tikz_export.elements.binder import bind_plots
from tikz_export.elements.plot import to_linear
from tikz_export.errors import UnsupportedSceneError
from tikz_export.formatting import format_value
from tikz_export.scene import BLACK, WHITE, AxisContainer, AxisSpec, Color, Group, Legend, Title
from tikz_export.text import escape_text

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext

TickAlign = Literal["inside", "center", "outside"]

SCALE_MODES: dict[str, str] = {"linear": "normal", "log": "log"}
TICK_ALIGNS: tuple[str, ...] = ("inside", "center", "outside")
TICK_MODES: tuple[str, ...] = ("none", "data", "custom", "auto")

DEFAULT_GRID_COLOR = Color(230, 230, 230)
DEFAULT_3D_VIEW = (60.0, 60.0)


@dataclass
class AxisConfig:
    label: str = ""
    scale: str = "linear"
    min: float = 0.0
    max: float = 1.0
    tick_mode: str = "auto"
    ticks: tuple[float, ...] = ()
    tick_align: str = "center"
    major_ticks: bool = True
    minor_ticks: bool = False
    major_grid: bool = False
    minor_grid: bool = False

    def set_ticks(self, ticks: Iterable[float]) -> None:
        self.ticks = tuple(float(t) for t in ticks)
        self.tick_mode = "custom"


def tick_align_from_length(tick_length: float) -> TickAlign:
    if tick_length < 0:
        return "inside"
    if tick_length > 0:
        return "outside"
    return "center"


class AxisElement(GroupElement):
    """``axis`` environment bound to an axis container, holding its plots."""

    def __init__(self) -> None:
        super().__init__()
        self.context: ExportContext | None = None

        self.title: str = ""
        self.two_d_mode: bool = True
        self.view_azimuth: float = 0.0
        self.view_elevation: float = 0.0

        self.x = AxisConfig()
        self.y = AxisConfig()
        self.z = AxisConfig()

        self.major_grid_color: Color = DEFAULT_GRID_COLOR
        self.major_grid_dash: str = "solid"
        self.major_grid_width: float = 1.0
        self.minor_grid_color: Color = DEFAULT_GRID_COLOR
        self.minor_grid_dash: str = "dashed"
        self.minor_grid_width: float = 1.0

        self.legend_visible: bool = False
        self.legend_location: tuple[float, float] = (0.0, 0.0)
        self.legend_border_color: Color = BLACK
        self.legend_background_color: Color = WHITE

    @property
    def preamble(self) -> str:
        return "\\begin{axis}["

    def body(self) -> Iterator[str]:
        if self.context is None:
            return
        yield from self._option_lines(self.context)
        yield "]"
        yield from super().body()

    @property
    def postamble(self) -> str:
        return "\\end{axis}"

    def configure_axes(
        self,
        *,
        tick_align: str | None = None,
        major_ticks: bool | None = None,
        minor_ticks: bool | None = None,
        major_grid: bool | None = None,
        minor_grid: bool | None = None,
    ) -> "AxisElement":
        """Apply the given settings to X, Y and Z alike; ``None`` leaves a setting as is."""
        for cfg in (self.x, self.y, self.z):
            if tick_align is not None:
                cfg.tick_align = tick_align
            if major_ticks is not None:
                cfg.major_ticks = major_ticks
            if minor_ticks is not None:
                cfg.minor_ticks = minor_ticks
            if major_grid is not None:
                cfg.major_grid = major_grid
            if minor_grid is not None:
                cfg.minor_grid = minor_grid
        return self

    def bind(self, group: Group, context: "ExportContext") -> None:
        self.context = context
        if not isinstance(group, AxisContainer):
            return

        title = group.first(Title)
        self.title = title.text if title is not None else ""
        self.two_d_mode = group.two_d_mode
        if group.view is not None:
            self.view_azimuth, self.view_elevation = group.view
        elif not self.two_d_mode:
            self.view_azimuth, self.view_elevation = DEFAULT_3D_VIEW

        limits = group.data_limits()
        self.x = _bind_axis(group.x_axis, limits.xmin, limits.xmax)
        self.y = _bind_axis(group.y_axis, limits.ymin, limits.ymax)
        self.z = _bind_axis(group.z_axis, limits.zmin, limits.zmax)

        # pgfplots has one grid style per document; the X axis grid is the template
        major = group.x_axis.major_grid
        self.major_grid_color = major.color or DEFAULT_GRID_COLOR
        context.colors.add(self.major_grid_color)
        self.major_grid_dash = major.dash
        self.major_grid_width = major.width
        context.options.set_major_grid_style(self.major_grid_color, self.major_grid_dash, self.major_grid_width)

        minor = group.x_axis.minor_grid
        self.minor_grid_color = minor.color or DEFAULT_GRID_COLOR
        context.colors.add(self.minor_grid_color)
        self.minor_grid_dash = minor.dash
        self.minor_grid_width = minor.width
        context.options.set_minor_grid_style(self.minor_grid_color, self.minor_grid_dash, self.minor_grid_width)

        legend = group.first(Legend)
        if legend is not None:
            self.legend_visible = legend.visible
            self.legend_location = legend.location
            self.legend_border_color = legend.border or BLACK
            context.colors.add(self.legend_border_color)
            self.legend_background_color = legend.background or WHITE
            context.colors.add(self.legend_background_color)

        bind_plots(self, group, context)

    def _option_lines(self, context: "ExportContext") -> Iterator[str]:
        precision = context.precision
        yield f"  width={context.canvas_size.width}mm,"
        yield f"  height={context.canvas_size.height}mm,"
        if self.title:
            yield f"  title={{{escape_text(self.title)}}},"
        if not self.two_d_mode:
            yield f"  view={{{format_value(self.view_azimuth, precision)}}}{{{format_value(self.view_elevation, precision)}}},"

        yield from _axis_lines("x", self.x, precision)
        yield from _axis_lines("y", self.y, precision)
        if not self.two_d_mode:
            yield from _axis_lines("z", self.z, precision)

        if self.legend_visible:
            yield self._legend_style(context)

    def _legend_style(self, context: "ExportContext") -> str:
        colors = context.colors
        precision = context.precision
        fill = colors.resolve_name(self.legend_background_color)
        draw = colors.resolve_name(self.legend_border_color)
        x, y = self.legend_location
        at = f"at={{({format_value(x, precision)},{format_value(1.0 - y, precision)})}}"
        return f"  legend style={{legend cell align=left,align=left,fill={fill},draw={draw},{at}}},"


def _bind_axis(axis: AxisSpec, data_min: float, data_max: float) -> AxisConfig:
    if axis.scale not in SCALE_MODES:
        raise UnsupportedSceneError(f"unsupported axis scale mode: {axis.scale!r}")
    if axis.tick_mode not in TICK_MODES:
        raise UnsupportedSceneError(f"unsupported tick mode: {axis.tick_mode!r}")

    vmin = axis.min if axis.min is not None else data_min
    vmax = axis.max if axis.max is not None else data_max
    vmin = float(to_linear(np.float64(vmin), axis.scale))
    vmax = float(to_linear(np.float64(vmax), axis.scale))

    return AxisConfig(
        label=axis.label,
        scale=axis.scale,
        min=vmin,
        max=vmax,
        tick_mode=axis.tick_mode,
        ticks=tuple(axis.tick_positions),
        tick_align=tick_align_from_length(axis.tick_length),
        major_ticks=axis.ticks_visible,
        minor_ticks=False,
        major_grid=axis.major_grid.visible,
        minor_grid=axis.minor_grid.visible,
    )


def _axis_lines(name: str, cfg: AxisConfig, precision: int) -> Iterator[str]:
    if cfg.label:
        yield f"  {name}label={{{escape_text(cfg.label)}}},"

    mode = SCALE_MODES.get(cfg.scale)
    if mode is None:
        raise UnsupportedSceneError(f"unsupported axis scale mode: {cfg.scale!r}")
    yield f"  {name}mode={mode},"
    yield f"  {name}min={format_value(cfg.min, precision)},"
    yield f"  {name}max={format_value(cfg.max, precision)},"

    if cfg.tick_mode == "none":
        yield f"  {name}tick=\\empty,"
    elif cfg.tick_mode == "data":
        yield f"  {name}tick=data,"
    elif cfg.tick_mode == "custom":
        if cfg.ticks:
            yield f"  {name}tick={{{','.join(format_value(t, precision) for t in cfg.ticks)}}},"
    elif cfg.tick_mode != "auto":
        raise UnsupportedSceneError(f"unsupported tick mode: {cfg.tick_mode!r}")

    if cfg.tick_align not in TICK_ALIGNS:
        raise UnsupportedSceneError(f"unsupported tick alignment: {cfg.tick_align!r}")
    yield f"  {name}tick align={cfg.tick_align},"

    yield f"  {name}majorticks={'true' if cfg.major_ticks else 'false'},"
    yield f"  {name}minorticks={'true' if cfg.minor_ticks else 'false'},"
    if cfg.major_grid:
        yield f"  {name}majorgrids,"
    if cfg.minor_grid:
        yield f"  {name}minorgrids,"

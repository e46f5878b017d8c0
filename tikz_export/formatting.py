from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math
import re
from typing import TYPE_CHECKING

from tikz_export.config import DEFAULT_PRECISION
from tikz_export.errors import UnsupportedSceneError
from tikz_export.scene import Color, Colormap

if TYPE_CHECKING:
    from tikz_export.registry.colors import ColorRegistry

DASH_PATTERNS: dict[str, str] = {
    "solid": "solid",
    "dashed": "dashed",
    "dotted": "dotted",
    "dashdotted": "dashdotted",
}

MARKER_SHAPES: dict[str, str] = {
    "dot": "*",
    "circle": "o",
    "square": "square",
    "diamond": "diamond",
    "triangle_up": "triangle",
    "triangle_down": "triangle",
    "plus": "+",
    "cross": "x",
    "star": "asterisk",
}

_COLORMAP_NAME_JUNK = re.compile(r"[^A-Za-z0-9]")


def format_value(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Fixed-point notation with trailing zeros trimmed."""
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-precision)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    if q.is_zero() and value != 0.0:
        # magnitudes below the fixed precision keep their significant digits
        q = d.quantize(Decimal("1").scaleb(d.adjusted() - max(precision, 1) + 1))
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_dash(dash: str) -> str:
    pattern = DASH_PATTERNS.get(dash)
    if pattern is None:
        raise UnsupportedSceneError(f"unsupported dash style: {dash!r}")
    return pattern


def format_line(colors: "ColorRegistry", color: Color, dash: str, width: float, precision: int = DEFAULT_PRECISION) -> str:
    return f"color={colors.resolve_name(color)},{format_dash(dash)},line width={format_value(width, precision)}pt"


def marker_shape(style: str) -> str:
    shape = MARKER_SHAPES.get(style)
    if shape is None:
        raise UnsupportedSceneError(f"unsupported marker style: {style!r}")
    return shape


def format_marker(colors: "ColorRegistry", color: Color, style: str, size: float, precision: int = DEFAULT_PRECISION) -> str:
    shape = marker_shape(style)
    name = colors.resolve_name(color)
    options = f"solid,fill={name},draw={name}"
    if style == "triangle_down":
        options += ",rotate=180"
    return f"mark={shape},mark size={format_value(size, precision)}pt,mark options={{{options}}}"


def format_error_bars(colors: "ColorRegistry", color: Color, dash: str, width: float, precision: int = DEFAULT_PRECISION) -> str:
    line = format_line(colors, color, dash, width, precision)
    return f"error bars/.cd,y dir=both,y explicit,error bar style={{{line}}}"


def format_colormap(colormap: Colormap, precision: int = DEFAULT_PRECISION) -> str:
    name = _COLORMAP_NAME_JUNK.sub("", colormap.name) or "colormap"
    stops = "; ".join(
        f"rgb255({format_value(position, precision)}cm)=({color.r},{color.g},{color.b})"
        for position, color in colormap.keypoints
    )
    return f"colormap={{{name}}}{{{stops}}}"

from tikz_export.elements.axis import AxisConfig, AxisElement, tick_align_from_length
from tikz_export.elements.base import Element, GroupElement, LeafElement, iter_lines
from tikz_export.elements.binder import PLOT_BINDERS, bind_element, bind_group, bind_plots, has_supported_plots
from tikz_export.elements.errorbar import ErrorBarPlotElement, symmetric_error
from tikz_export.elements.picture import TikzPicture
from tikz_export.elements.plot import LinePlotElement
from tikz_export.elements.surface import SurfacePlotElement

__all__ = [
    "AxisConfig",
    "AxisElement",
    "Element",
    "ErrorBarPlotElement",
    "GroupElement",
    "LeafElement",
    "LinePlotElement",
    "PLOT_BINDERS",
    "SurfacePlotElement",
    "TikzPicture",
    "bind_element",
    "bind_group",
    "bind_plots",
    "has_supported_plots",
    "iter_lines",
    "symmetric_error",
]

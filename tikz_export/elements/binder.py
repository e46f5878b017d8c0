from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tikz_export.elements.base import GroupElement, LeafElement
from tikz_export.elements.errorbar import ErrorBarPlotElement
from tikz_export.elements.plot import LinePlotElement
from tikz_export.elements.surface import SurfacePlotElement
from tikz_export.scene import ErrorBarPlot, FastSurface, Group, LinePlot, Node, Surface

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext

LeafFactory = Callable[[], LeafElement]
GroupFactory = Callable[[], GroupElement]

# Binding order is emission order.
PLOT_BINDERS: tuple[tuple[type[Node], LeafFactory], ...] = (
    (ErrorBarPlot, ErrorBarPlotElement),
    (LinePlot, LinePlotElement),
    (Surface, SurfacePlotElement),
    (FastSurface, SurfacePlotElement),
)


def bind_plots(target: GroupElement, group: Group, context: "ExportContext") -> None:
    for kind, factory in PLOT_BINDERS:
        for node in group.find(kind):
            # line plots owned by an error bar plot are bound through it
            if isinstance(node, LinePlot) and isinstance(node.parent, ErrorBarPlot):
                continue
            bind_element(target, factory, node, context)


def bind_element(target: GroupElement, factory: LeafFactory, node: Node | None, context: "ExportContext") -> LeafElement | None:
    if node is None:
        return None
    element = factory()
    element.bind(node, context)
    target.add(element)
    return element


def bind_group(target: GroupElement, factory: GroupFactory, group: Group | None, context: "ExportContext") -> GroupElement | None:
    if group is None:
        return None
    element = factory()
    element.bind(group, context)
    target.add(element)
    return element


def has_supported_plots(group: Group) -> bool:
    return any(group.first(kind) is not None for kind, _ in PLOT_BINDERS)

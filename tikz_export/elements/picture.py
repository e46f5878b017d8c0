from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from tikz_export.config import CanvasSize, ExportConfig, resolve_canvas_size
from tikz_export.elements.axis import AxisElement
from tikz_export.elements.base import GroupElement
from tikz_export.elements.binder import bind_group, has_supported_plots
from tikz_export.scene import AxisContainer, Group

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext

LOGGER = logging.getLogger(__name__)


class TikzPicture(GroupElement):
    """Document root: header, color definitions, global options and the axis.

    A picture whose scene has no axis container or no supported plots is
    empty and renders no lines at all.
    """

    def __init__(self, canvas_size: CanvasSize | tuple[int, int] | None = None, *, config: ExportConfig | None = None) -> None:
        super().__init__()
        self.canvas_size = resolve_canvas_size(canvas_size)
        self.config = config or ExportConfig()
        self.context: ExportContext | None = None
        self._empty = True

    @property
    def is_empty(self) -> bool:
        return self._empty

    @property
    def preamble(self) -> str:
        if self._empty:
            return ""
        return self.config.header

    def body(self) -> Iterator[str]:
        if self._empty or self.context is None:
            return
        yield from self.context.colors.body()
        yield ""
        yield "\\begin{tikzpicture}"
        yield from self.context.options.body()
        yield from super().body()

    @property
    def postamble(self) -> str:
        if self._empty:
            return ""
        return "\\end{tikzpicture}"

    def bind(self, group: Group, context: "ExportContext") -> None:
        self.context = context
        context.canvas_size = self.canvas_size
        self.clear()

        container = group.first(AxisContainer)
        if container is None:
            LOGGER.debug("scene has no axis container; document is empty")
            self._empty = True
            return
        if not has_supported_plots(container):
            LOGGER.debug("axis container holds no supported plots; document is empty")
            self._empty = True
            return

        bind_group(self, AxisElement, container, context)
        self._empty = False

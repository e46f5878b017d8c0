from __future__ import annotations

from dataclasses import dataclass, field

from tikz_export.config import DEFAULT_CANVAS_SIZE, DEFAULT_COMPAT, CanvasSize, ExportConfig
from tikz_export.registry.colors import ColorRegistry
from tikz_export.registry.options import PgfPlotOptions


@dataclass
class ExportContext:
    """State shared by every binding step of one export.

    Build a fresh context per export; it is mutated while binding.
    """

    config: ExportConfig = field(default_factory=ExportConfig)
    canvas_size: CanvasSize = DEFAULT_CANVAS_SIZE
    colors: ColorRegistry = field(init=False)
    options: PgfPlotOptions = field(init=False)

    def __post_init__(self) -> None:
        self.colors = ColorRegistry()
        self.options = PgfPlotOptions(self.colors, precision=self.config.precision)
        if self.config.compat != DEFAULT_COMPAT:
            self.options.set_compatibility(self.config.compat)

    @property
    def precision(self) -> int:
        return self.config.precision

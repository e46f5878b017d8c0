from tikz_export.registry.colors import KNOWN_COLORS, ColorRegistry
from tikz_export.registry.context import ExportContext
from tikz_export.registry.options import PgfPlotOptions

__all__ = ["ColorRegistry", "ExportContext", "KNOWN_COLORS", "PgfPlotOptions"]

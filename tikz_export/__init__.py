from tikz_export.api import bind, export, export_file, export_string
from tikz_export.config import CanvasSize, ExportConfig
from tikz_export.elements import AxisElement, TikzPicture
from tikz_export.errors import SceneGeometryError, TikzExportError, UnsupportedSceneError
from tikz_export.registry import ColorRegistry, ExportContext, PgfPlotOptions
from tikz_export.text import escape_text
from tikz_export.writer import TikzWriter

__all__ = [
    "AxisElement",
    "CanvasSize",
    "ColorRegistry",
    "ExportConfig",
    "ExportContext",
    "PgfPlotOptions",
    "SceneGeometryError",
    "TikzExportError",
    "TikzPicture",
    "TikzWriter",
    "UnsupportedSceneError",
    "bind",
    "escape_text",
    "export",
    "export_file",
    "export_string",
]

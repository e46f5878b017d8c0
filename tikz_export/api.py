from __future__ import annotations

import io
import logging
from pathlib import Path

from tikz_export.config import CanvasSize, ExportConfig
from tikz_export.elements.picture import TikzPicture
from tikz_export.registry.context import ExportContext
from tikz_export.scene import Scene
from tikz_export.writer import TikzWriter

LOGGER = logging.getLogger(__name__)

CanvasArg = CanvasSize | tuple[int, int] | None


def bind(scene: Scene, canvas_size: CanvasArg = None, *, config: ExportConfig | None = None) -> TikzPicture:
    """Bind ``scene`` into a fresh document; nothing is rendered yet."""
    if scene is None:
        raise ValueError("scene must not be None")
    picture = TikzPicture(canvas_size, config=config)
    context = ExportContext(config=picture.config, canvas_size=picture.canvas_size)
    LOGGER.debug("binding scene %s at %sx%smm", scene.id, picture.canvas_size.width, picture.canvas_size.height)
    picture.bind(scene, context)
    LOGGER.debug("bound %d top-level element(s), empty=%s", len(picture), picture.is_empty)
    return picture


def export(
    scene: Scene,
    writer: TikzWriter,
    canvas_size: CanvasArg = None,
    *,
    config: ExportConfig | None = None,
) -> int:
    """Bind ``scene`` and stream it through ``writer``; returns the number of lines written."""
    if scene is None:
        raise ValueError("scene must not be None")
    if writer is None:
        raise ValueError("writer must not be None")
    picture = bind(scene, canvas_size, config=config)
    return writer.write(picture)


def export_string(scene: Scene, canvas_size: CanvasArg = None, *, config: ExportConfig | None = None) -> str:
    buffer = io.StringIO()
    export(scene, TikzWriter(buffer), canvas_size, config=config)
    return buffer.getvalue()


def export_file(
    scene: Scene,
    file_path: str | Path,
    canvas_size: CanvasArg = None,
    *,
    config: ExportConfig | None = None,
) -> Path:
    """Write the document to ``file_path`` (UTF-8); an empty document leaves an empty file."""
    if scene is None:
        raise ValueError("scene must not be None")
    if file_path is None or not str(file_path).strip():
        raise ValueError("file_path must be a non-empty path")
    path = Path(file_path)
    picture = bind(scene, canvas_size, config=config)
    with path.open("w", encoding="utf-8") as stream:
        TikzWriter(stream).write(picture)
    LOGGER.debug("wrote %d bytes to %s", path.stat().st_size, path)
    return path

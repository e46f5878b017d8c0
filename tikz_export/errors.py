from __future__ import annotations


class TikzExportError(Exception):
    """Base class for errors raised while exporting a scene."""


class UnsupportedSceneError(TikzExportError, ValueError):
    """The scene carries a setting the exporter does not understand."""


class SceneGeometryError(TikzExportError, ValueError):
    """Node geometry cannot be read as numeric coordinates."""

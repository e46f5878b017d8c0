from __future__ import annotations

import io
from pathlib import Path
import tempfile
import unittest

import numpy as np

from tikz_export import (
    CanvasSize,
    ExportConfig,
    SceneGeometryError,
    TikzWriter,
    UnsupportedSceneError,
    bind,
    export,
    export_file,
    export_string,
)
from tikz_export.scene import (
    AxisContainer,
    AxisSpec,
    Color,
    ErrorBarPlot,
    FastSurface,
    Legend,
    LinePlot,
    LineStyle,
    Scene,
)


def _line_scene() -> Scene:
    plot = LinePlot(positions=np.array([[0.0, 1.0, 2.0], [0.0, 1.0, 4.0]]), line=LineStyle(color=Color(255, 0, 0)))
    legend = Legend()
    legend.add_item(plot, "squares")
    return Scene(children=[AxisContainer(children=[plot, legend])])


class EmptyDocumentTests(unittest.TestCase):
    def test_container_without_plots_renders_nothing(self) -> None:
        scene = Scene(children=[AxisContainer(children=[Legend()])])
        first = export_string(scene)
        second = export_string(scene)
        self.assertEqual(first, "")
        self.assertEqual(first, second)
        self.assertTrue(bind(scene).is_empty)

    def test_scene_without_container_renders_nothing(self) -> None:
        scene = Scene(children=[LinePlot(positions=[[0, 1], [0, 1]])])
        self.assertEqual(export_string(scene), "")

    def test_empty_document_still_creates_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.tex"
            export_file(Scene(), path)
            self.assertTrue(path.exists())
            self.assertEqual(path.read_text(encoding="utf-8"), "")


class ArgumentValidationTests(unittest.TestCase):
    def test_none_scene_rejected(self) -> None:
        with self.assertRaises(ValueError):
            export_string(None)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            bind(None)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            export(None, TikzWriter(io.StringIO()))  # type: ignore[arg-type]

    def test_none_writer_rejected(self) -> None:
        with self.assertRaises(ValueError):
            export(_line_scene(), None)  # type: ignore[arg-type]

    def test_empty_path_rejected_before_binding(self) -> None:
        with self.assertRaises(ValueError):
            export_file(_line_scene(), "")
        with self.assertRaises(ValueError):
            export_file(None, "out.tex")  # type: ignore[arg-type]

    def test_unsupported_scene_leaves_no_file(self) -> None:
        plot = LinePlot(positions=[[0, 1], [0, 1]])
        scene = Scene(children=[AxisContainer(children=[plot], y_axis=AxisSpec(scale="ln"))])  # type: ignore[arg-type]
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.tex"
            with self.assertRaises(UnsupportedSceneError):
                export_file(scene, path)
            self.assertFalse(path.exists())

    def test_render_checks_run_before_file_is_opened(self) -> None:
        wavy = LinePlot(positions=[[0, 1], [0, 1]], line=LineStyle(dash="wavy"))  # type: ignore[arg-type]
        short = ErrorBarPlot(line_plot=LinePlot(positions=[[0, 1], [1, 2]]), lower=[0], upper=[2])
        cases = [
            (Scene(children=[AxisContainer(children=[wavy])]), UnsupportedSceneError),
            (Scene(children=[AxisContainer(children=[short])]), SceneGeometryError),
        ]
        with tempfile.TemporaryDirectory() as tmp:
            for i, (scene, error) in enumerate(cases):
                path = Path(tmp) / f"bad{i}.tex"
                with self.subTest(error=error.__name__):
                    with self.assertRaises(error):
                        export_file(scene, path)
                    self.assertFalse(path.exists())


class DocumentLayoutTests(unittest.TestCase):
    def test_document_structure(self) -> None:
        lines = export_string(_line_scene()).splitlines()
        self.assertEqual(lines[0], "% Created via tikz_export")
        self.assertEqual(
            lines[1:3],
            [
                "\\definecolor{colorDef00}{rgb}{0.901961,0.901961,0.901961}",
                "\\definecolor{colorDef01}{rgb}{1.000000,0.000000,0.000000}",
            ],
        )
        self.assertEqual(lines[3], "")
        self.assertEqual(lines[4], "\\begin{tikzpicture}")
        self.assertEqual(lines[5], "\\pgfplotsset{compat=1.13}")
        self.assertEqual(lines[6], "\\pgfplotsset{set layers}")
        self.assertTrue(lines[7].startswith("\\pgfplotsset{major grid style="))
        self.assertTrue(lines[8].startswith("\\pgfplotsset{minor grid style="))
        self.assertEqual(lines[9], "\\begin{axis}[")
        self.assertIn("\\addplot[color=colorDef01,solid,line width=1pt]", lines)
        self.assertIn("  2\t4\\\\", lines)
        self.assertEqual(lines[-3], "\\addlegendentry{squares}")
        self.assertEqual(lines[-2], "\\end{axis}")
        self.assertEqual(lines[-1], "\\end{tikzpicture}")

    def test_output_ends_with_newline(self) -> None:
        self.assertTrue(export_string(_line_scene()).endswith("\\end{tikzpicture}\n"))

    def test_plot_emission_order(self) -> None:
        surface = FastSurface(positions=np.array([[0.0, 1.0], [0.0, 1.0], [0.0, 1.0]]))
        line = LinePlot(positions=[[0, 1], [0, 1]])
        error = ErrorBarPlot(line_plot=LinePlot(positions=[[0, 1], [1, 2]]), lower=[0, 1], upper=[2, 3])
        scene = Scene(children=[AxisContainer(children=[surface, line, error], two_d_mode=False)])
        text = export_string(scene)
        self.assertLess(text.index("\\addplot+["), text.index("\\addplot["))
        self.assertLess(text.index("\\addplot["), text.index("\\addplot3["))
        self.assertIn("\\pgfplotsset{colormap={jet}", text)

    def test_small_log_values_round_trip(self) -> None:
        plot = LinePlot(positions=[[0, 1], [-8, -7]])
        scene = Scene(children=[AxisContainer(children=[plot], y_axis=AxisSpec(scale="log"))])
        lines = export_string(scene).splitlines()
        self.assertIn("  ymin=0.00000001,", lines)
        self.assertIn("  ymax=0.0000001,", lines)
        self.assertIn("  0\t0.00000001\\\\", lines)
        self.assertIn("  1\t0.0000001\\\\", lines)

    def test_canvas_size(self) -> None:
        self.assertIn("  width=120mm,\n  height=80mm,", export_string(_line_scene(), (120, 80)))
        self.assertIn("  width=100mm,\n  height=100mm,", export_string(_line_scene(), CanvasSize(0, 0)))

    def test_config_header_and_compat(self) -> None:
        config = ExportConfig(compat="1.18", header="% generated")
        lines = export_string(_line_scene(), config=config).splitlines()
        self.assertEqual(lines[0], "% generated")
        self.assertIn("\\pgfplotsset{compat=1.18}", lines)

    def test_exports_do_not_share_colors(self) -> None:
        first = export_string(_line_scene())
        second = export_string(_line_scene())
        self.assertEqual(first, second)

    def test_file_matches_string(self) -> None:
        scene = _line_scene()
        with tempfile.TemporaryDirectory() as tmp:
            path = export_file(scene, Path(tmp) / "plot.tex")
            self.assertEqual(path.read_text(encoding="utf-8"), export_string(scene))

    def test_writer_counts_lines(self) -> None:
        buffer = io.StringIO()
        writer = TikzWriter(buffer)
        count = export(_line_scene(), writer)
        self.assertEqual(count, len(buffer.getvalue().splitlines()))
        self.assertEqual(writer.lines_written, count)


if __name__ == "__main__":
    unittest.main()

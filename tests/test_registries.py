from __future__ import annotations

import unittest

from tikz_export import ExportConfig
from tikz_export.registry import ColorRegistry, ExportContext, PgfPlotOptions
from tikz_export.scene import BLACK, WHITE, Color, DEFAULT_COLORMAP


class ColorRegistryTests(unittest.TestCase):
    def test_names_follow_first_seen_order(self) -> None:
        colors = ColorRegistry()
        red, green = Color(255, 0, 0), Color(0, 255, 0)
        self.assertEqual(colors.resolve_name(green), "colorDef00")
        self.assertEqual(colors.resolve_name(red), "colorDef01")
        self.assertEqual(list(colors), [green, red])

    def test_names_are_stable(self) -> None:
        colors = ColorRegistry()
        blue = Color(0, 0, 255)
        first = colors.resolve_name(blue)
        colors.add(Color(1, 2, 3))
        self.assertEqual(colors.resolve_name(blue), first)
        self.assertEqual(len(colors), 2)

    def test_black_and_white_are_builtin(self) -> None:
        colors = ColorRegistry()
        self.assertEqual(colors.resolve_name(BLACK), "black")
        self.assertEqual(colors.resolve_name(WHITE), "white")
        colors.add(BLACK)
        self.assertEqual(len(colors), 0)
        self.assertIn(WHITE, colors)
        self.assertEqual(list(colors.body()), [])

    def test_definitions(self) -> None:
        colors = ColorRegistry()
        colors.add(Color(255, 0, 0))
        self.assertEqual(list(colors.body()), ["\\definecolor{colorDef00}{rgb}{1.000000,0.000000,0.000000}"])

    def test_remove_reindexes(self) -> None:
        colors = ColorRegistry()
        a, b = Color(10, 10, 10), Color(20, 20, 20)
        colors.add(a)
        colors.add(b)
        self.assertTrue(colors.remove(a))
        self.assertFalse(colors.remove(a))
        self.assertEqual(colors.resolve_name(b), "colorDef00")
        colors.clear()
        self.assertEqual(len(colors), 0)


class PgfPlotOptionsTests(unittest.TestCase):
    def test_seeded_defaults(self) -> None:
        options = PgfPlotOptions(ColorRegistry())
        self.assertEqual(
            list(options.body()),
            [
                "\\pgfplotsset{compat=1.13}",
                "\\pgfplotsset{set layers}",
                "\\pgfplotsset{major grid style={solid,very thin,white!80!black}}",
                "\\pgfplotsset{minor grid style={dashed,very thin,white!90!black}}",
            ],
        )

    def test_grid_style_slot_is_overwritten(self) -> None:
        options = PgfPlotOptions(ColorRegistry())
        options.set_major_grid_style(BLACK, "solid", 2.0)
        options.set_major_grid_style(WHITE, "dotted", 1.0)
        lines = [line for line in options.body() if "major grid style" in line]
        self.assertEqual(lines, ["\\pgfplotsset{major grid style={color=white,dotted,line width=0.5pt}}"])
        self.assertEqual(len(options), 4)

    def test_blank_entries_are_skipped(self) -> None:
        options = PgfPlotOptions(ColorRegistry())
        options.append("   ")
        options.append("")
        self.assertEqual(len(options), 6)
        self.assertEqual(len(list(options.body())), 4)

    def test_colormap_appended(self) -> None:
        options = PgfPlotOptions(ColorRegistry())
        options.add_colormap(DEFAULT_COLORMAP)
        self.assertTrue(options[4].startswith("colormap={jet}{rgb255(0cm)=(0,0,128);"))

    def test_grid_color_registered(self) -> None:
        colors = ColorRegistry()
        options = PgfPlotOptions(colors)
        options.set_minor_grid_style(Color(230, 230, 230), "dashed", 1.0)
        self.assertEqual(options[3], "minor grid style={color=colorDef00,dashed,line width=0.5pt}")


class ExportContextTests(unittest.TestCase):
    def test_contexts_do_not_share_state(self) -> None:
        first = ExportContext()
        second = ExportContext()
        first.colors.add(Color(1, 1, 1))
        self.assertEqual(len(second.colors), 0)

    def test_compat_override(self) -> None:
        context = ExportContext(config=ExportConfig(compat="1.18"))
        self.assertEqual(context.options[0], "compat=1.18")

    def test_invalid_config(self) -> None:
        with self.assertRaises(ValueError):
            ExportConfig(precision=30)
        with self.assertRaises(ValueError):
            ExportConfig(header="no comment")


if __name__ == "__main__":
    unittest.main()

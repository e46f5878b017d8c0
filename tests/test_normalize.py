from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from tikz_export import SceneGeometryError
from tikz_export.adapters import as_grid, as_positions, as_vector, coerce_numeric
from tikz_export.scene import AxisContainer, LinePlot

HAS_PANDAS = importlib.util.find_spec("pandas") is not None
HAS_TORCH = importlib.util.find_spec("torch") is not None


class NormalizeTests(unittest.TestCase):
    def test_sequences_become_float64(self) -> None:
        arr = as_positions([[1, 2, 3], [4, 5, 6]], rows=(2, 3), label="xy")
        self.assertEqual(arr.dtype, np.float64)
        self.assertEqual(arr.shape, (2, 3))

    def test_decimal_and_none_entries(self) -> None:
        arr = as_vector([Decimal("1.5"), None, 2], label="v")
        self.assertEqual(arr[0], 1.5)
        self.assertTrue(np.isnan(arr[1]))

    def test_wrong_row_count(self) -> None:
        with self.assertRaises(SceneGeometryError):
            as_positions(np.zeros((4, 2)), rows=(2, 3), label="xy")

    def test_wrong_grid_shape(self) -> None:
        with self.assertRaises(SceneGeometryError):
            as_grid(np.zeros((2, 2)), label="grid")

    def test_non_numeric_entry(self) -> None:
        with self.assertRaises(SceneGeometryError):
            as_vector([1.0, "abc"], label="v")

    def test_unsupported_type(self) -> None:
        with self.assertRaises(SceneGeometryError):
            coerce_numeric("123", label="v")

    def test_bad_geometry_surfaces_at_bind_time(self) -> None:
        container = AxisContainer(children=[LinePlot(positions=np.zeros(5))])
        with self.assertRaises(SceneGeometryError):
            container.data_limits()

    @unittest.skipUnless(HAS_PANDAS, "pandas not installed")
    def test_dataframe_read_column_wise(self) -> None:
        import pandas as pd

        frame = pd.DataFrame({"x": [0.0, 1.0, 2.0], "y": [3.0, 4.0, 5.0]})
        arr = as_positions(frame, rows=(2, 3), label="xy")
        self.assertEqual(arr.shape, (2, 3))
        self.assertEqual(arr[1].tolist(), [3.0, 4.0, 5.0])

    @unittest.skipUnless(HAS_TORCH, "torch not installed")
    def test_tensor_input(self) -> None:
        import torch

        arr = coerce_numeric(torch.tensor([[1.0, 2.0], [3.0, 4.0]], dtype=torch.float32), label="xy")
        self.assertEqual(arr.dtype, np.float64)
        self.assertEqual(arr.tolist(), [[1.0, 2.0], [3.0, 4.0]])


if __name__ == "__main__":
    unittest.main()

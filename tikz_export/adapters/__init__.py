from tikz_export.adapters.normalize import as_grid, as_positions, as_vector, coerce_numeric

__all__ = ["as_grid", "as_positions", "as_vector", "coerce_numeric"]

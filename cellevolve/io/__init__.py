"""Text grid parsing and rendering at the engine boundary."""

from .text_grid import parse_dense, parse_sparse, render_dense, render_sparse

__all__ = ['parse_dense', 'parse_sparse', 'render_dense', 'render_sparse']

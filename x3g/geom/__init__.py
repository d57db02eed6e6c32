"""Geometry helpers.

This package is intentionally small: pure tessellation functions used by
the Geometry2D readers (`x3g.x3d.geometry2d`). Point math goes through
svgelements so the arc sampling matches the rest of the vector tooling.
"""

from __future__ import annotations

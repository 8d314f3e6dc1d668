"""Rendering and README merge helpers."""

from .markers import MarkerManager
from .table import render_catalog, render_table

__all__ = ["MarkerManager", "render_catalog", "render_table"]

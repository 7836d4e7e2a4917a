"""Bundled IGRF coefficient files."""

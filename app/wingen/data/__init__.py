"""Bundled data files (sample catalog, default theme)."""

"""CLI package for equation conversion tools."""

__all__ = ["convert", "roundtrip"]

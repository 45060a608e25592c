"""Test utilities package."""

from tests.utils.cleanup import cleanup_all

__all__ = ["cleanup_all"]

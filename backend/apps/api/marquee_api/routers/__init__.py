"""API routers."""

from . import entries

__all__ = ["entries"]

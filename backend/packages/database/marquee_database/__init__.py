"""
Marquee Database Package.

This package contains SQLAlchemy models, session management
and the entry store adapter for the Marquee catalog.
"""

__version__ = "0.1.0"

from .models import Base

__all__ = ["Base"]

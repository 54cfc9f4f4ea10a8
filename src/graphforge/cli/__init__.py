"""
Graphforge CLI - Command line tools for building schemas from models.
"""

from __future__ import annotations

from .main import main, app

__all__ = ["main", "app"]

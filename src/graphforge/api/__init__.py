"""
API module - FastAPI endpoints.
"""

from __future__ import annotations

from .router import create_schema_router, get_schema, router, set_schema

__all__ = [
    "router",
    "set_schema",
    "get_schema",
    "create_schema_router",
]

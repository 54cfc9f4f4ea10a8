"""
FastAPI router publishing a built schema.

Endpoints:
- GET /__schema              - JSON summary: generated types, root fields, resolver info
- GET /__schema.graphql      - Canonical SDL
- GET /__schema/type/{name}  - One generated type

Usage:
    from fastapi import FastAPI
    from graphforge import build_schema, load_model
    from graphforge.api import create_schema_router

    app = FastAPI()
    app.include_router(create_schema_router(build_schema(load_model("model.graphql"))))
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ..core.assembler import GraphSchema

logger = logging.getLogger(__name__)

router = APIRouter()

_schema: GraphSchema | None = None


def set_schema(schema: GraphSchema):
    """Set the schema served by the router."""
    global _schema
    _schema = schema


def get_schema() -> GraphSchema:
    """Get the served schema."""
    if _schema is None:
        raise RuntimeError("Schema not initialized. Call set_schema() first.")
    return _schema


@router.get("/__schema")
async def get_schema_summary(schema: GraphSchema = Depends(get_schema)) -> dict[str, Any]:
    """
    Return the built schema as JSON.

    Used by tooling that needs the generated type shapes or the
    Parent.field -> resolver info table without parsing SDL.
    """
    return schema.to_dict()


@router.get("/__schema.graphql", response_class=PlainTextResponse)
async def get_schema_sdl(schema: GraphSchema = Depends(get_schema)) -> str:
    """
    Return the schema as SDL.

    Usage:
        curl http://localhost:8000/__schema.graphql > schema.graphql
    """
    return schema.sdl


@router.get("/__schema/type/{name}")
async def get_schema_type(name: str, schema: GraphSchema = Depends(get_schema)) -> dict[str, Any]:
    """Return one generated type by name."""
    generated = schema.get_type(name)
    if generated is None:
        raise HTTPException(status_code=404, detail=f"Unknown type: {name}")
    return generated.to_dict()


def create_schema_router(schema: GraphSchema) -> APIRouter:
    """
    Create a router serving the given schema.

    Args:
        schema: Built schema

    Returns:
        Configured FastAPI router
    """
    set_schema(schema)
    logger.info(f"Serving schema with {len(schema.types)} types")
    return router

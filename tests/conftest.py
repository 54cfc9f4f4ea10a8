"""
Pytest configuration and shared models for graphforge tests.
"""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from graphforge import BuildOptions, GraphSchema, build_schema
from graphforge.core.loader import load_sdl_model


MOVIE_SDL = '''
type Movie @node {
  id: ID! @id
  title: String!
  isbn: String!
  released: Int
  actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN, properties: "ActedIn")
}

type Actor @node {
  name: String!
  movies: [Movie!]! @relationship(type: "ACTED_IN", direction: OUT, properties: "ActedIn")
}

type ActedIn @relationshipProperties {
  screenTime: Int!
}
'''

INTERFACE_SDL = '''
interface Production {
  title: String!
  actors: [Actor!]! @declareRelationship
}

type Movie implements Production @node {
  title: String!
  runtime: Int
  actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN)
}

type Show implements Production @node {
  title: String!
  episodes: Int
  actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN)
}

type Actor @node {
  name: String!
  actedIn: [Production!]! @relationship(type: "ACTED_IN", direction: OUT)
}
'''

UNION_SDL = '''
type Actor @node {
  name: String!
}

type Person @node {
  name: String!
  born: Int
}

union CastMember = Actor | Person

type Movie @node {
  title: String!
  cast: [CastMember!]! @relationship(type: "CAST", direction: IN)
}
'''


BuildFn = Callable[..., GraphSchema]


@pytest.fixture
def build() -> BuildFn:
    """Build a schema from SDL."""
    def _build(sdl: str, options: Optional[BuildOptions] = None) -> GraphSchema:
        return build_schema(load_sdl_model(sdl), options)

    return _build


@pytest.fixture
def movie_sdl() -> str:
    return MOVIE_SDL


@pytest.fixture
def movie_schema(build) -> GraphSchema:
    return build(MOVIE_SDL)


@pytest.fixture
def interface_schema(build) -> GraphSchema:
    return build(INTERFACE_SDL)


@pytest.fixture
def union_schema(build) -> GraphSchema:
    return build(UNION_SDL)

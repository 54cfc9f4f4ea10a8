#!/usr/bin/env python3
"""
Graphforge CLI - Main entry point.

Usage:
    graphforge init                       # Create graphforge.yaml and a starter model
    graphforge validate [model]           # Check a model without building
    graphforge build [model] -o out.graphql
    graphforge build --no-deprecated      # Leave out every deprecated mirror field
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from ..core.compiler import SchemaCompiler
from ..core.errors import GraphConfigError, ModelError
from ..core.loader import load_model
from ..core.options import DeprecatedCategory, describe_extra_filters
from ..core.validator import ModelValidator
from .config import DEFAULT_CONFIG_PATH, DEFAULT_MODEL_PATH, GraphforgeConfig, load_config

logger = logging.getLogger(__name__)

STARTER_MODEL = '''type Movie @node {
  id: ID! @id
  title: String!
  released: Int
  actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN, properties: "ActedIn")
}

type Actor @node {
  name: String!
  movies: [Movie!]! @relationship(type: "ACTED_IN", direction: OUT, properties: "ActedIn")
}

type ActedIn @relationshipProperties {
  roles: [String!]
}
'''


def _print_errors(errors) -> None:
    for error in errors:
        print(f"  {error}")


def _resolve(args: argparse.Namespace) -> GraphforgeConfig:
    """Config file values overridden by command line arguments."""
    config = load_config(args.config) or GraphforgeConfig()
    if getattr(args, "model", None):
        config.model = args.model
    if getattr(args, "output", None):
        config.output = args.output
    if getattr(args, "no_deprecated", False):
        config.build = replace(config.build, exclude_deprecated=frozenset(DeprecatedCategory))
    return config


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize a new graphforge project."""
    config_path = Path(args.config)

    if config_path.exists() and not args.force:
        print(f"Error: {config_path} already exists. Use --force to overwrite.")
        return 1

    config = GraphforgeConfig(model=args.model or DEFAULT_MODEL_PATH, output="schema.graphql")
    config.save(config_path)
    print(f"Created {config_path}")

    model_path = Path(config.model)
    if not model_path.exists():
        model_path.write_text(STARTER_MODEL)
        print(f"Created {model_path}")

    print("\nOptional filter operators (enable under build.filters):")
    for kind, ops in describe_extra_filters().items():
        print(f"  {kind}: {', '.join(ops)}")

    print("\nNext steps:")
    print("  graphforge validate   # Check the model")
    print("  graphforge build      # Write the schema")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a model."""
    try:
        config = _resolve(args)
        graph = load_model(config.model)
    except ModelError as e:
        print("Model is invalid:")
        _print_errors(e.errors)
        return 1
    except GraphConfigError as e:
        print(f"Error: {e}")
        return 1

    errors = ModelValidator(graph).validate()
    if errors:
        print(f"Model {config.model} is invalid:")
        _print_errors(errors)
        return 1

    print(f"Model {config.model} is valid: {len(graph.nodes)} nodes, {len(graph.interfaces)} interfaces, "
          f"{len(graph.unions)} unions")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Build the schema and write SDL."""
    try:
        config = _resolve(args)
        graph = load_model(config.model)
    except ModelError as e:
        print("Model is invalid:")
        _print_errors(e.errors)
        return 1
    except GraphConfigError as e:
        print(f"Error: {e}")
        return 1

    logger.debug(f"Building {config.model} with options {config.build.to_dict()}")
    result = SchemaCompiler(graph, config.build).compile()
    if not result.success:
        print("Build failed:")
        _print_errors(result.errors)
        return 1

    if config.output and config.output != "-":
        Path(config.output).write_text(result.schema.sdl)
        print(f"Wrote {len(result.schema.types)} types to {config.output}")
    else:
        sys.stdout.write(result.schema.sdl)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="graphforge",
        description="Graphforge - GraphQL schema augmentation for graph models"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Project config file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, else WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    init_parser = subparsers.add_parser("init", help="Initialize new project")
    init_parser.add_argument("--model", "-m", help="Model file to create")
    init_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing config")

    # validate
    validate_parser = subparsers.add_parser("validate", help="Validate a model")
    validate_parser.add_argument("model", nargs="?", help="Model file (.graphql or .yaml)")

    # build
    build_parser = subparsers.add_parser("build", help="Build the schema")
    build_parser.add_argument("model", nargs="?", help="Model file (.graphql or .yaml)")
    build_parser.add_argument("--output", "-o", help="Output file, '-' for stdout")
    build_parser.add_argument("--no-deprecated", action="store_true", help="Leave out deprecated fields")

    return parser


def _configure_logging(parsed: argparse.Namespace) -> None:
    level = parsed.log_level
    if level is None:
        try:
            config = load_config(parsed.config)
        except GraphConfigError:
            config = None
        level = config.log_level if config else "WARNING"
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def app(args: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 0

    _configure_logging(parsed)

    commands = {
        "init": cmd_init,
        "validate": cmd_validate,
        "build": cmd_build,
    }

    handler = commands.get(parsed.command)
    if handler:
        return handler(parsed)

    parser.print_help()
    return 1


def main() -> None:
    """Entry point for CLI."""
    sys.exit(app())


if __name__ == "__main__":
    main()

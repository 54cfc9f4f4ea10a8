"""
Configuration loading for graphforge projects (graphforge.yaml).

Example:
    version: 1
    model: model.graphql
    output: schema.graphql
    log_level: INFO
    build:
      exclude_deprecated: [attribute_filters]
      filters:
        String: [matches]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.errors import GraphConfigError
from ..core.options import BuildOptions

DEFAULT_CONFIG_PATH = "graphforge.yaml"
DEFAULT_MODEL_PATH = "model.graphql"


@dataclass
class GraphforgeConfig:
    """Main graphforge configuration."""
    version: int = 1
    model: str = DEFAULT_MODEL_PATH
    output: Optional[str] = None
    log_level: str = "INFO"
    build: BuildOptions = field(default_factory=BuildOptions)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GraphforgeConfig":
        """Create config from dictionary."""
        return cls(
            version=data.get("version", 1),
            model=data.get("model", DEFAULT_MODEL_PATH),
            output=data.get("output"),
            log_level=str(data.get("log_level", "INFO")).upper(),
            build=BuildOptions.from_dict(data.get("build")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        return {
            "version": self.version,
            "model": self.model,
            "output": self.output,
            "log_level": self.log_level,
            "build": self.build.to_dict(),
        }

    def save(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> GraphforgeConfig | None:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        return None

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise GraphConfigError(f"Invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise GraphConfigError(f"Config file {path} must be a mapping")
    return GraphforgeConfig.from_dict(data)

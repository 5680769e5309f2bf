"""Build settings: property lookups, spec path resolution, defaults.

Values are resolved in precedence order:
    build property (-P key=value)  >  specforge.yml  >  module constant
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SPEC_NAME = "default"
SPECS_DIR = "openapi"
SPEC_EXTENSION = ".yaml"

GROUP = "com.gini"
DEFAULT_VERSION = "1.0.0"
REGISTRY_URL = "https://gitlab.com/api/v4/projects/70539492/packages/maven"
HEADER_NAME = "Deploy-Token"
ALLOWED_HEADER_NAMES = ("Private-Token", "Deploy-Token", "Job-Token")
LEGACY_TOKEN_ENV = "CI_JOB_TOKEN"

JAVA_OUTPUT_DIR = "javagenerated"
TYPESCRIPT_OUTPUT_DIR = "typescriptgenerated"
JAR_CLASSIFIER = "javagenerated"
LIBS_DIR = Path("build") / "libs"

GENERATOR_EXECUTABLE = "openapi-generator-cli"

CONFIG_FILE = "specforge.yml"

# Build property names
PROP_SPEC_NAME = "openApiFileName"
PROP_TOKEN = "registryToken"
PROP_VERSION = "version"

# specforge.yml key -> BuildSettings field
_FILE_KEYS: dict[str, str] = {
    "group": "group",
    "registry_url": "registry_url",
    "header_name": "header_name",
    "artifact_id_mode": "artifact_id_mode",
    "token_source": "token_source",
    "generator": "generator",
}


@dataclass(frozen=True)
class BuildSettings:
    """Everything one build invocation resolves up front."""

    root_dir: Path
    spec_name: str
    properties: Mapping[str, str] = field(default_factory=dict)
    group: str = GROUP
    registry_url: str = REGISTRY_URL
    header_name: str = HEADER_NAME
    artifact_id_mode: str = "spec-name"
    token_source: str = "property"
    generator: str = GENERATOR_EXECUTABLE

    @property
    def spec_path(self) -> Path:
        return spec_path(self.root_dir, self.spec_name)

    @property
    def java_sources(self) -> Path:
        return self.root_dir / JAVA_OUTPUT_DIR / "src" / "main" / "java"

    @property
    def libs_dir(self) -> Path:
        return self.root_dir / LIBS_DIR


def parse_properties(pairs: Iterable[str]) -> dict[str, str]:
    """Parse Gradle-style ``key=value`` build properties."""
    properties: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Build property must look like key=value, got {pair!r}")
        properties[key] = value
    return properties


def resolve_spec_name(properties: Mapping[str, str]) -> str:
    """Return the specification name, falling back to ``default``."""
    name = (properties.get(PROP_SPEC_NAME) or "").strip()
    return name or DEFAULT_SPEC_NAME


def spec_path(root: Path | str, name: str) -> Path:
    """Path of the OpenAPI document for ``name`` under ``root``."""
    return Path(root) / SPECS_DIR / f"{name}{SPEC_EXTENSION}"


def _read_config_file(root: Path) -> dict[str, Any]:
    path = root / CONFIG_FILE
    if not path.is_file():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    unknown = sorted(set(data) - set(_FILE_KEYS))
    if unknown:
        raise ValueError(f"{path}: unknown keys {', '.join(unknown)}")
    blank = sorted(k for k, v in data.items() if v is None or str(v).strip() == "")
    if blank:
        raise ValueError(f"{path}: no value for {', '.join(blank)}")
    logger.debug("Loaded overrides from %s: %s", path, sorted(data))
    return {_FILE_KEYS[k]: str(v) for k, v in data.items()}


def load_settings(
    root: Path | str = ".",
    properties: Mapping[str, str] | None = None,
) -> BuildSettings:
    """Resolve the build settings for one invocation."""
    root_dir = Path(root).resolve()
    props = dict(properties or {})
    overrides = _read_config_file(root_dir)

    # Build properties named like settings fields win over the file
    for key in _FILE_KEYS.values():
        prop_key = _to_camel(key)
        if prop_key in props:
            overrides[key] = props[prop_key]

    settings = BuildSettings(
        root_dir=root_dir,
        spec_name=resolve_spec_name(props),
        properties=props,
        **overrides,
    )
    if settings.header_name not in ALLOWED_HEADER_NAMES:
        raise ValueError(
            f"header_name must be one of {', '.join(ALLOWED_HEADER_NAMES)}, "
            f"got {settings.header_name!r}"
        )
    logger.info("Resolved spec %r -> %s", settings.spec_name, settings.spec_path)
    return settings


def _to_camel(snake: str) -> str:
    head, *rest = snake.split("_")
    return head + "".join(part.capitalize() for part in rest)

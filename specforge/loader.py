"""Load the OpenAPI spec named by the build.

Only info.version and the operation tags are read; parsing is left to
the generator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def _section(spec: dict[str, Any], key: str) -> dict[str, Any]:
    """A top-level mapping, or {} when absent, empty or not a mapping."""
    value = spec.get(key)
    return value if isinstance(value, dict) else {}


def load_spec(path: Path) -> dict[str, Any]:
    """Load the OpenAPI spec from disk."""
    text = Path(path).read_text()
    spec = yaml.safe_load(text)
    if not isinstance(spec, dict):
        raise ValueError(f"{path} is not an OpenAPI document")

    # info.version stays verbatim: an unquoted 1.10 would load as the float 1.1
    info = _section(spec, "info")
    if "version" in info:
        raw_info = _section(yaml.load(text, Loader=yaml.BaseLoader), "info")
        info["version"] = raw_info.get("version")
    return spec


def get_version(spec: dict[str, Any]) -> str | None:
    """Extract info.version from the spec."""
    version = _section(spec, "info").get("version")
    if version is None or version == "":
        return None
    return str(version)


def get_tags(spec: dict[str, Any]) -> list[str]:
    """Collect the operation tags the server interfaces are grouped by."""
    tags: set[str] = set()
    for path_item in _section(spec, "paths").values():
        if not isinstance(path_item, dict):
            continue
        for method in _HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                tags.update(operation.get("tags") or [])
    return sorted(tags)

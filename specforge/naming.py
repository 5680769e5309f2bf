"""Package and artifact naming derived from the specification name.

Patterns (name = openApiFileName):
  - Java API package     -> com.gini.{name}.api
  - Java model package   -> com.gini.{name}.model
  - Angular npm package  -> @gini/{name}
  - Maven repository dir -> com/gini/{artifact}/{version}
  - Jar file             -> {artifact}-{version}-{classifier}.jar

Examples:
  car-module-openapi -> com.gini.car-module-openapi.api
  car-module-openapi -> @gini/car-module-openapi
"""

from __future__ import annotations

from .settings import GROUP

NPM_SCOPE = "@gini"


def api_package(name: str, group: str = GROUP) -> str:
    """Package for generated controller interfaces / clients."""
    return f"{group}.{name}.api"


def model_package(name: str, group: str = GROUP) -> str:
    """Package for generated models."""
    return f"{group}.{name}.model"


def client_package_name(name: str) -> str:
    """npm package name of the generated Angular client."""
    return f"{NPM_SCOPE}/{name}"


def repository_path(group: str, artifact: str, version: str) -> str:
    """Relative Maven repository directory for an artifact version."""
    return "/".join([*group.split("."), artifact, version])


def artifact_file_name(
    artifact: str,
    version: str,
    extension: str,
    classifier: str | None = None,
) -> str:
    """Maven file name, e.g. car-module-openapi-1.0.0-javagenerated.jar."""
    base = f"{artifact}-{version}"
    if classifier:
        base += f"-{classifier}"
    return f"{base}.{extension}"

"""Build Jinja2 template context for the jar manifest and the POM."""

from __future__ import annotations

import getpass
import platform
from datetime import datetime
from typing import Any

from . import __version__
from .publish import PublishCoordinate
from .settings import BuildSettings

# Runtime dependencies of the generated Spring interfaces and models.
# (group, artifact, version); None means managed by the Spring Boot BOM.
POM_DEPENDENCIES: list[tuple[str, str, str | None]] = [
    ("org.springframework.boot", "spring-boot-starter-web", None),
    ("org.springframework.boot", "spring-boot-starter-validation", None),
    ("io.swagger.core.v3", "swagger-annotations-jakarta", "2.2.30"),
    ("org.openapitools", "jackson-databind-nullable", "0.2.6"),
]
SPRING_BOOT_VERSION = "3.4.5"


def _user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def build_manifest_context(
    settings: BuildSettings,
    coordinate: PublishCoordinate,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Attributes written to META-INF/MANIFEST.MF."""
    now = now or datetime.now()
    uname = platform.uname()
    return {
        "attributes": {
            "Implementation-Title": coordinate.artifact_id,
            "Implementation-Version": coordinate.version,
            "Spec-Name": settings.spec_name,
            "Build-By": _user_name(),
            "Build-Time": now.isoformat(),
            "Created-By": f"specforge {__version__}",
            "Build-Python": (
                f"{platform.python_version()} ({platform.python_implementation()})"
            ),
            "Build-OS": f"{uname.system} ({uname.machine}) ({uname.release})",
        },
    }


def build_pom_context(coordinate: PublishCoordinate) -> dict[str, Any]:
    """Context for pom.xml / pom.properties."""
    return {
        "group_id": coordinate.group,
        "artifact_id": coordinate.artifact_id,
        "version": coordinate.version,
        "spring_boot_version": SPRING_BOOT_VERSION,
        "dependencies": [
            {"group_id": g, "artifact_id": a, "version": v}
            for g, a, v in POM_DEPENDENCIES
        ],
    }

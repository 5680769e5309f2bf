"""Bundle the generated Java sources into the library jar."""

from __future__ import annotations

import logging
import zipfile
from datetime import datetime
from pathlib import Path

from .context_builder import build_manifest_context, build_pom_context
from .naming import artifact_file_name
from .publish import PublishCoordinate
from .render import render
from .settings import JAR_CLASSIFIER, BuildSettings

logger = logging.getLogger(__name__)


def write_pom(coordinate: PublishCoordinate, dest_dir: Path) -> Path:
    """Write <artifact>-<version>.pom next to the jar."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    pom_path = dest_dir / artifact_file_name(coordinate.artifact_id, coordinate.version, "pom")
    pom_path.write_text(render("pom.xml.j2", build_pom_context(coordinate)))
    return pom_path


def build_jar(
    settings: BuildSettings,
    coordinate: PublishCoordinate,
    dest_dir: Path | None = None,
    now: datetime | None = None,
) -> Path:
    """Zip javagenerated/src/main/java into <artifact>-<version>-javagenerated.jar."""
    sources = settings.java_sources
    if not sources.is_dir():
        raise FileNotFoundError(
            f"No generated Java sources at {sources}; run the javaSpring task first"
        )
    files = sorted(p for p in sources.rglob("*") if p.is_file())
    if not files:
        raise ValueError(f"{sources} contains no files")

    dest_dir = dest_dir or settings.libs_dir
    dest_dir.mkdir(parents=True, exist_ok=True)
    jar_path = dest_dir / artifact_file_name(
        coordinate.artifact_id, coordinate.version, "jar", JAR_CLASSIFIER,
    )

    pom_context = build_pom_context(coordinate)
    maven_dir = f"META-INF/maven/{coordinate.group}/{coordinate.artifact_id}"

    # MANIFEST.MF must be the first entry
    with zipfile.ZipFile(jar_path, "w", compression=zipfile.ZIP_DEFLATED) as jar:
        jar.writestr(
            "META-INF/MANIFEST.MF",
            render("MANIFEST.MF.j2", build_manifest_context(settings, coordinate, now)),
        )
        jar.writestr(f"{maven_dir}/pom.xml", render("pom.xml.j2", pom_context))
        jar.writestr(f"{maven_dir}/pom.properties", render("pom.properties.j2", pom_context))
        for path in files:
            jar.write(path, path.relative_to(sources).as_posix())

    logger.info("Bundled %d source files into %s", len(files), jar_path)
    return jar_path

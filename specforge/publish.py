"""Resolve publish coordinates and upload artifacts to the Maven registry.

The registry speaks plain Maven-over-HTTP: every file (and its checksums)
is PUT to <registry>/<group path>/<artifact>/<version>/<file>, with the
token passed in a single header (Private-Token, Deploy-Token or Job-Token).
"""

from __future__ import annotations

import enum
import hashlib
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

import httpx

from .loader import get_version
from .naming import repository_path
from .settings import (
    DEFAULT_VERSION,
    LEGACY_TOKEN_ENV,
    PROP_TOKEN,
    PROP_VERSION,
    BuildSettings,
)

logger = logging.getLogger(__name__)

LEGACY_ARTIFACT_ID = "openapi-library"
_CHECKSUMS = ("sha1", "md5")
_TIMEOUT = 60.0


class ArtifactIdMode(str, enum.Enum):
    """How the artifact id is derived."""

    SPEC_NAME = "spec-name"  # one artifact per spec
    FIXED = "fixed"          # legacy single library name


class TokenSource(str, enum.Enum):
    """Where the registry token is read from."""

    PROPERTY = "property"        # -P registryToken=...
    ENVIRONMENT = "environment"  # legacy CI_JOB_TOKEN


@dataclass(frozen=True)
class PublishCoordinate:
    """Where and how the jar is published."""

    group: str
    artifact_id: str
    version: str
    registry_url: str
    header_name: str
    token: str | None = field(default=None, repr=False)

    @property
    def base_url(self) -> str:
        path = repository_path(self.group, self.artifact_id, self.version)
        return f"{self.registry_url.rstrip('/')}/{path}"

    def url_for(self, file_name: str) -> str:
        return f"{self.base_url}/{file_name}"


def resolve_version(
    properties: Mapping[str, str],
    spec: dict[str, Any] | None = None,
) -> str:
    """Version property, else the spec's info.version, else 1.0.0."""
    explicit = (properties.get(PROP_VERSION) or "").strip()
    if explicit:
        return explicit
    if spec is not None:
        from_spec = get_version(spec)
        if from_spec:
            return from_spec
    return DEFAULT_VERSION


def resolve_artifact_id(spec_name: str, mode: ArtifactIdMode | str) -> str:
    if ArtifactIdMode(mode) is ArtifactIdMode.FIXED:
        return LEGACY_ARTIFACT_ID
    return spec_name


def resolve_token(
    properties: Mapping[str, str],
    source: TokenSource | str,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Read the registry token; never logged, never persisted."""
    if TokenSource(source) is TokenSource.ENVIRONMENT:
        env = os.environ if environ is None else environ
        token = env.get(LEGACY_TOKEN_ENV)
    else:
        token = properties.get(PROP_TOKEN)
    return token or None


def resolve_coordinate(
    settings: BuildSettings,
    version: str,
    environ: Mapping[str, str] | None = None,
) -> PublishCoordinate:
    """Build the publish coordinate for the current spec."""
    return PublishCoordinate(
        group=settings.group,
        artifact_id=resolve_artifact_id(settings.spec_name, settings.artifact_id_mode),
        version=version,
        registry_url=settings.registry_url,
        header_name=settings.header_name,
        token=resolve_token(settings.properties, settings.token_source, environ),
    )


def require_token(coordinate: PublishCoordinate) -> None:
    """Fail fast when no token was supplied."""
    if not coordinate.token:
        raise ValueError(
            f"No registry token: pass -P {PROP_TOKEN}=... "
            f"(or set {LEGACY_TOKEN_ENV} with token_source=environment)"
        )


def _payloads(files: Sequence[Path]) -> list[tuple[str, bytes]]:
    """Each file followed by its checksum files."""
    payloads: list[tuple[str, bytes]] = []
    for path in files:
        data = path.read_bytes()
        payloads.append((path.name, data))
        for algo in _CHECKSUMS:
            digest = hashlib.new(algo, data).hexdigest()
            payloads.append((f"{path.name}.{algo}", digest.encode("ascii")))
    return payloads


def publish(
    coordinate: PublishCoordinate,
    files: Sequence[Path],
    client: httpx.Client | None = None,
    dry_run: bool = False,
) -> list[str]:
    """Upload ``files`` to the registry and return the uploaded URLs.

    Everything is validated and read before the first request, so a
    missing token or file sends nothing.
    """
    if not dry_run:
        require_token(coordinate)
    missing = [str(p) for p in files if not p.is_file()]
    if missing:
        raise FileNotFoundError(f"Nothing to publish, missing: {', '.join(missing)}")

    payloads = _payloads(files)
    urls = [coordinate.url_for(name) for name, _ in payloads]

    if dry_run:
        for url in urls:
            logger.info("dry-run: would PUT %s", url)
        return urls

    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=_TIMEOUT)
    headers = {coordinate.header_name: coordinate.token}
    try:
        for (name, data), url in zip(payloads, urls):
            logger.info("PUT %s (%d bytes)", url, len(data))
            response = client.put(url, content=data, headers=headers)
            response.raise_for_status()
    finally:
        if own_client:
            client.close()

    logger.info(
        "Published %s:%s:%s", coordinate.group, coordinate.artifact_id, coordinate.version,
    )
    return urls

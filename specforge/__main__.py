"""Entry point: python -m specforge

Usage:
    python -m specforge -P openApiFileName=car-module-openapi show
    python -m specforge -P openApiFileName=car-module-openapi generate
    python -m specforge -P openApiFileName=car-module-openapi generate --task javaSpring
    python -m specforge -P openApiFileName=car-module-openapi jar
    python -m specforge -P openApiFileName=car-module-openapi -P registryToken=... publish
"""

from __future__ import annotations

import json
import logging
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click
import httpx
import yaml

from . import __version__
from .codegen import run_task
from .loader import get_tags, load_spec
from .logging_config import setup_logging
from .packaging import build_jar, write_pom
from .profiles import Backend, register_tasks, resolve_profile
from .publish import (
    PublishCoordinate,
    publish as upload,
    require_token,
    resolve_coordinate,
    resolve_version,
)
from .settings import BuildSettings, load_settings, parse_properties

logger = logging.getLogger(__name__)

# Failures that end the build with exit status 1
_BUILD_ERRORS = (
    OSError,
    ValueError,
    yaml.YAMLError,
    subprocess.CalledProcessError,
    httpx.HTTPError,
)

_TASK_NAMES = [b.task_name for b in Backend]


@contextmanager
def _build_step(name: str) -> Iterator[None]:
    try:
        yield
    except _BUILD_ERRORS as e:
        logger.error("%s failed: %s", name, e)
        logger.debug("Traceback", exc_info=True)
        sys.exit(1)


def _settings(ctx: click.Context) -> BuildSettings:
    return ctx.obj["settings"]


def _coordinate(settings: BuildSettings) -> PublishCoordinate:
    spec = load_spec(settings.spec_path) if settings.spec_path.is_file() else None
    version = resolve_version(settings.properties, spec)
    return resolve_coordinate(settings, version)


def _run_generation(settings: BuildSettings, task_names: list[str]) -> None:
    for name in task_names:
        config = resolve_profile(settings.spec_name, Backend.for_task(name), settings.root_dir)
        run_task(config, settings.generator)
        click.echo(f"Generated {config.output_dir} ({name})")


@click.group()
@click.version_option(version=__version__, prog_name="specforge")
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Project root containing openapi/ (default: current directory).",
)
@click.option(
    "-P", "--property", "properties", multiple=True, metavar="KEY=VALUE",
    help="Build property, e.g. -P openApiFileName=car-module-openapi.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    project_dir: Path,
    properties: tuple[str, ...],
    verbose: bool,
    debug: bool,
) -> None:
    """Generate Spring/Angular stubs from an OpenAPI spec and publish the jar."""
    setup_logging("DEBUG" if debug else "INFO" if verbose else "WARNING")
    ctx.ensure_object(dict)
    with _build_step("configuration"):
        ctx.obj["settings"] = load_settings(project_dir, parse_properties(properties))


@cli.command()
@click.option("--task", "task_names", multiple=True, type=click.Choice(_TASK_NAMES))
@click.pass_context
def show(ctx: click.Context, task_names: tuple[str, ...]) -> None:
    """Print the resolved task and publish configuration as JSON."""
    settings = _settings(ctx)
    with _build_step("show"):
        tasks = register_tasks(settings.spec_name, settings.root_dir)
        coordinate = _coordinate(settings)
        tags = get_tags(load_spec(settings.spec_path)) if settings.spec_path.is_file() else []

    selected = task_names or _TASK_NAMES
    payload = {
        "specName": settings.spec_name,
        "tasks": {name: tasks[name].to_dict() for name in selected},
        "tags": tags,
        "publish": {
            "groupId": coordinate.group,
            "artifactId": coordinate.artifact_id,
            "version": coordinate.version,
            "url": coordinate.base_url,
            "tokenPresent": coordinate.token is not None,
        },
    }
    click.echo(json.dumps(payload, indent=2))


@cli.command()
@click.option("--task", "task_names", multiple=True, type=click.Choice(_TASK_NAMES))
@click.pass_context
def generate(ctx: click.Context, task_names: tuple[str, ...]) -> None:
    """Run the generation tasks (all of them by default)."""
    settings = _settings(ctx)
    with _build_step("generate"):
        _run_generation(settings, list(task_names or _TASK_NAMES))


@cli.command()
@click.pass_context
def jar(ctx: click.Context) -> None:
    """Bundle the generated Java sources into build/libs."""
    settings = _settings(ctx)
    with _build_step("jar"):
        coordinate = _coordinate(settings)
        jar_path = build_jar(settings, coordinate)
        write_pom(coordinate, jar_path.parent)
    click.echo(f"Built {jar_path}")


@cli.command()
@click.option("--skip-generate", is_flag=True, help="Reuse existing javagenerated/ sources.")
@click.option("--dry-run", is_flag=True, help="Resolve and bundle, but upload nothing.")
@click.pass_context
def publish(ctx: click.Context, skip_generate: bool, dry_run: bool) -> None:
    """Generate, bundle and upload the Java library."""
    settings = _settings(ctx)
    with _build_step("publish"):
        coordinate = _coordinate(settings)
        if not dry_run:
            # Fail before generating anything
            require_token(coordinate)
        if not skip_generate:
            _run_generation(settings, [Backend.SERVER.task_name])
        jar_path = build_jar(settings, coordinate)
        pom_path = write_pom(coordinate, jar_path.parent)
        urls = upload(coordinate, [jar_path, pom_path], dry_run=dry_run)

    verb = "Would publish" if dry_run else "Published"
    click.echo(
        f"{verb} {coordinate.group}:{coordinate.artifact_id}:{coordinate.version} "
        f"({len(urls)} files) to {coordinate.base_url}"
    )


if __name__ == "__main__":
    cli()

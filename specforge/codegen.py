"""Run the external OpenAPI Generator for a task configuration.

The generator is a black box: we hand it a TaskConfig as command line
arguments and let it fail loudly.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Callable

from .profiles import TaskConfig
from .settings import GENERATOR_EXECUTABLE

logger = logging.getLogger(__name__)


def _join_properties(values: dict[str, str]) -> str:
    """name=value pairs; empty values render as the bare name."""
    return ",".join(f"{k}={v}" if v else k for k, v in values.items())


def build_command(config: TaskConfig, executable: str = GENERATOR_EXECUTABLE) -> list[str]:
    """Build the generator argv for one task."""
    cmd = [
        *shlex.split(executable),
        "generate",
        "-g", config.generator_name,
        "-i", str(config.input_spec),
        "-o", str(config.output_dir),
        "--api-package", config.api_package,
        "--model-package", config.model_package,
    ]
    if config.global_properties:
        cmd += ["--global-property", _join_properties(config.global_properties)]
    if config.config_options:
        cmd += ["--additional-properties", _join_properties(config.config_options)]
    return cmd


def run_task(
    config: TaskConfig,
    executable: str = GENERATOR_EXECUTABLE,
    runner: Callable[..., subprocess.CompletedProcess] | None = None,
) -> None:
    """Generate sources for ``config``; raises on any generator failure."""
    if not config.input_spec.is_file():
        raise FileNotFoundError(f"OpenAPI spec not found: {config.input_spec}")

    cmd = build_command(config, executable)
    logger.info("[%s] %s", config.task_name, shlex.join(cmd))
    (runner or subprocess.run)(cmd, check=True)
    logger.info("[%s] generated into %s", config.task_name, config.output_dir)

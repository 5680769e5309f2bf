"""Generator profiles and task configuration.

Each backend owns a static option table, an output directory and the
task name it is registered under:

  javaSpring         spring              -> javagenerated/
  typescriptAngular  typescript-angular  -> typescriptgenerated/

Option reference: https://openapi-generator.tech/docs/generators/spring/
and https://openapi-generator.tech/docs/generators/typescript-angular/
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from .naming import api_package, client_package_name, model_package
from .settings import (
    DEFAULT_SPEC_NAME,
    JAVA_OUTPUT_DIR,
    TYPESCRIPT_OUTPUT_DIR,
    spec_path,
)

# Generate only APIs and models (no supporting files)
GLOBAL_PROPERTIES: dict[str, str] = {"apis": "", "models": ""}

SERVER_OPTIONS: dict[str, str] = {
    "interfaceOnly": "true",          # interfaces instead of controller classes
    "useSpringBoot3": "true",         # implies useJakartaEe
    "useJakartaEe": "true",
    "dateLibrary": "java8",
    "useTags": "true",                # one interface per tag
    "skipDefaultInterface": "true",
    "useResponseEntity": "false",
}

ANGULAR_VERSION = "19.0.0"
SERVICE_SUFFIX = "Client"


class Backend(enum.Enum):
    """Code generation backend: (task name, generator name, output dir)."""

    SERVER = ("javaSpring", "spring", JAVA_OUTPUT_DIR)
    CLIENT = ("typescriptAngular", "typescript-angular", TYPESCRIPT_OUTPUT_DIR)

    def __init__(self, task_name: str, generator_name: str, output_dir: str):
        self.task_name = task_name
        self.generator_name = generator_name
        self.output_dir = output_dir

    @classmethod
    def for_task(cls, task_name: str) -> "Backend":
        for backend in cls:
            if backend.task_name == task_name:
                return backend
        known = ", ".join(b.task_name for b in cls)
        raise ValueError(f"Unknown task {task_name!r} (expected one of: {known})")


@dataclass(frozen=True)
class TaskConfig:
    """Input for one run of the external generator."""

    task_name: str
    generator_name: str
    input_spec: Path
    output_dir: Path
    api_package: str
    model_package: str
    global_properties: dict[str, str] = field(default_factory=dict)
    config_options: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "taskName": self.task_name,
            "generatorName": self.generator_name,
            "inputSpec": str(self.input_spec),
            "outputDir": str(self.output_dir),
            "apiPackage": self.api_package,
            "modelPackage": self.model_package,
            "globalProperties": dict(self.global_properties),
            "configOptions": dict(self.config_options),
        }


def _client_options(spec_name: str) -> dict[str, str]:
    return {
        "npmName": client_package_name(spec_name),
        "ngVersion": ANGULAR_VERSION,
        "stringEnums": "true",              # string literals, not numeric enums
        "enumPropertyNaming": "UPPERCASE",
        "serviceSuffix": SERVICE_SUFFIX,
    }


def resolve_profile(
    spec_name: str | None,
    backend: Backend,
    root: Path | str = ".",
) -> TaskConfig:
    """Build the task configuration for ``backend``. No side effects."""
    name = (spec_name or "").strip() or DEFAULT_SPEC_NAME
    root_dir = Path(root)

    if backend is Backend.SERVER:
        options = dict(SERVER_OPTIONS)
    else:
        options = _client_options(name)

    return TaskConfig(
        task_name=backend.task_name,
        generator_name=backend.generator_name,
        input_spec=spec_path(root_dir, name),
        output_dir=root_dir / backend.output_dir,
        api_package=api_package(name),
        model_package=model_package(name),
        global_properties=dict(GLOBAL_PROPERTIES),
        config_options=options,
    )


def register_tasks(spec_name: str | None, root: Path | str = ".") -> dict[str, TaskConfig]:
    """Both generation tasks, keyed by task name, server first."""
    return {
        backend.task_name: resolve_profile(spec_name, backend, root)
        for backend in Backend
    }

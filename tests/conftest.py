"""Shared fixtures: a throwaway project root with the sample specs."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
SAMPLE_SPECS = REPO_ROOT / "openapi"

CAR_SPEC = "car-module-openapi"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with openapi/*.yaml copied in."""
    shutil.copytree(SAMPLE_SPECS, tmp_path / "openapi")
    return tmp_path


@pytest.fixture
def generated_sources(project: Path) -> Path:
    """Fake javaSpring output under javagenerated/src/main/java."""
    pkg = project / "javagenerated" / "src" / "main" / "java" / "com" / "gini" / "cars"
    (pkg / "api").mkdir(parents=True)
    (pkg / "model").mkdir()
    (pkg / "api" / "CarsApi.java").write_text(
        "package com.gini.cars.api;\n\npublic interface CarsApi {}\n"
    )
    (pkg / "model" / "Car.java").write_text(
        "package com.gini.cars.model;\n\npublic class Car {}\n"
    )
    return project

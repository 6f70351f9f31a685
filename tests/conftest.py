"""Pytest configuration for path tracer tests.

Provides seeded randomness for every test and a few shared scene pieces.
"""

import random

import numpy as np
import pytest

from pathtracer.core.vector import Vector3
from pathtracer.materials import DiffuseLight, Lambertian


@pytest.fixture(autouse=True)
def seeded_random():
    """Seed the generators so Monte-Carlo tests are repeatable."""
    random.seed(1234)
    np.random.seed(1234)
    yield


@pytest.fixture
def white():
    return Lambertian(Vector3(1.0, 1.0, 1.0))


@pytest.fixture
def gray():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def light():
    return DiffuseLight(Vector3(4.0, 3.0, 2.0))


@pytest.fixture
def cube_obj(tmp_path):
    """A unit cube OBJ file with quad faces (fan-triangulated on load)."""
    path = tmp_path / "cube.obj"
    path.write_text(
        "# unit cube\n"
        "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\n"
        "v 0 0 1\nv 1 0 1\nv 1 1 1\nv 0 1 1\n"
        "f 1 4 3 2\n"
        "f 5 6 7 8\n"
        "f 1 2 6 5\n"
        "f 4 8 7 3\n"
        "f 1 5 8 4\n"
        "f 2 3 7 6\n"
    )
    return str(path)

"""
Pytest configuration for hostfx tests.

Provides an in-memory host and the paths of the bundled example programs.
"""

from pathlib import Path

import pytest

from hostfx import InMemoryHost

PROJECT_ROOT = Path(__file__).resolve().parents[1]
EXAMPLES_DIR = PROJECT_ROOT / "examples"


@pytest.fixture
def memory_host() -> InMemoryHost:
    """Empty in-memory host: no stdin, no environment, no responder."""
    return InMemoryHost()


@pytest.fixture
def hello_world_path() -> Path:
    return EXAMPLES_DIR / "hello_world.py"


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR

"""Shared test fixtures for gl-group-ops tests."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gl_group_ops.client import GitLabClient
from gl_group_ops.logging_utils import LOGGER_NAME
from gl_group_ops.models import ProjectRecord

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_API_URL = "https://gitlab.example.com/api/v4"


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by setup_logging() so they don't outlive captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server, allowed to write."""
    return GitLabClient(MOCK_API_URL, "test-token", dry_run=False)


@pytest.fixture
def dry_run_client():
    """GitLabClient in dry-run mode."""
    return GitLabClient(MOCK_API_URL, "test-token", dry_run=True)


@pytest.fixture
def sample_group() -> dict[str, Any]:
    """Sample group API response."""
    return {"id": 7, "name": "g", "path": "g", "full_path": "g", "web_url": "https://gitlab.com/g"}


@pytest.fixture
def sample_projects() -> list[dict[str, Any]]:
    """Projects of group 'g', as returned by the API."""
    return [
        {"id": 1, "name": "jenkins-tools", "path_with_namespace": "g/jenkins-tools",
         "web_url": "https://gitlab.com/g/jenkins-tools"},
        {"id": 2, "name": "pupmod-simp-foo", "path_with_namespace": "g/pupmod-simp-foo",
         "web_url": "https://gitlab.com/g/pupmod-simp-foo"},
        {"id": 3, "name": "simp-artwork", "path_with_namespace": "g/simp-artwork",
         "web_url": "https://gitlab.com/g/simp-artwork"},
    ]


@pytest.fixture
def sample_project() -> ProjectRecord:
    """Project 'p' (id 5) hosted on gitlab.com."""
    return make_project(5, "p")


def make_project(project_id: int, name: str, namespace: str = "simp") -> ProjectRecord:
    """Helper to build a ProjectRecord on gitlab.com."""
    return ProjectRecord(
        id=project_id,
        name=name,
        web_url=f"https://gitlab.com/{namespace}/{name}",
        path_with_namespace=f"{namespace}/{name}",
    )


def make_args(**kwargs) -> argparse.Namespace:
    """Helper to create argparse.Namespace with default values."""
    defaults = {
        "group": None,
        "endpoint": None,
        "token": None,
        "verbose": False,
        "dry_run": None,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)

"""Base class and registry for operations."""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from gl_group_ops.logging_utils import LOGGER_NAME
from gl_group_ops.models import ActionResult, ProjectRecord

if TYPE_CHECKING:
    from gl_group_ops.client import GitLabClient
    from gl_group_ops.config import Settings

# ---------------------------------------------------------------------------
# Operation Registry
# ---------------------------------------------------------------------------

_operation_registry: dict[str, type[Operation]] = {}


def register_operation(name: str):
    """Decorator to register an operation class under its command name."""

    def decorator(cls):
        _operation_registry[name] = cls
        cls.operation_name = name
        return cls

    return decorator


def get_operation_registry() -> dict[str, type[Operation]]:
    """Get the operation registry."""
    return _operation_registry


# ---------------------------------------------------------------------------
# Operation Base Class
# ---------------------------------------------------------------------------


class Operation(ABC):
    """Base class for all operations."""

    operation_name: str = ""
    # Whether positional PROJECT arguments may narrow the run
    accepts_project_names: bool = False
    # Whether the GitHub credential is needed when the run may write
    requires_github_token: bool = False

    def __init__(self, client: GitLabClient):
        self.client = client
        self.logger = logging.getLogger(LOGGER_NAME)
        self.results: list[ActionResult] = []
        self.name_width = 0

    @staticmethod
    @abstractmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add operation-specific CLI arguments."""
        ...

    @classmethod
    @abstractmethod
    def from_args(cls, client: GitLabClient, args: argparse.Namespace, settings: Settings) -> Operation:
        """Build the operation from parsed CLI args and resolved settings."""
        ...

    @abstractmethod
    def apply_to_project(self, project: ProjectRecord) -> ActionResult:
        """Apply this operation to a single project."""
        ...

    def prepare(self, projects: Sequence[ProjectRecord]) -> None:
        """Align status lines on the longest project name of the run."""
        self.name_width = max((len(p.name) for p in projects), default=0) + 2

    def _record(self, result: ActionResult) -> ActionResult:
        self.results.append(result)
        icon = {
            "applied": "✓",
            "already_set": "·",
            "would_apply": "○",
        }.get(result.action, "?")

        prefix = "[DRY-RUN] " if result.dry_run else ""
        self.logger.info(
            f"{prefix}{icon} {result.project.name.ljust(self.name_width)} "
            f"{result.operation} → {result.action}"
            f"{' (' + result.detail + ')' if result.detail else ''}",
            extra={"action_result": result},
        )
        return result

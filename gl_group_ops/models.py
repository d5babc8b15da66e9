"""Data models and constants for gl-group-ops."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GITLAB_API_URL = "https://gitlab.com/api/v4"
DEFAULT_GROUP = "simp"
DEFAULT_REF = "master"
PER_PAGE = 100

# Pipeline scopes that can still be cancelled
CANCELLABLE_STATUSES = ("pending", "running")
TERMINAL_PIPELINE_STATUSES = {"success", "failed", "canceled", "skipped", "manual"}

GITHUB_INTEGRATION = "github"

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class IntegrationState(Enum):
    ABSENT = "absent"
    PRESENT = "present"


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProjectRecord:
    """Snapshot of a GitLab project taken when the group was listed."""

    id: int
    name: str
    web_url: str
    path_with_namespace: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ProjectRecord:
        return cls(
            id=data["id"],
            name=data["name"],
            web_url=data.get("web_url", ""),
            path_with_namespace=data.get("path_with_namespace", ""),
            raw=dict(data),
        )


@dataclass(frozen=True)
class PipelineRecord:
    id: int
    web_url: str
    status: str
    ref: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PipelineRecord:
        return cls(
            id=data["id"],
            web_url=data.get("web_url", ""),
            status=data.get("status", ""),
            ref=data.get("ref", ""),
        )


@dataclass(frozen=True)
class IntegrationRecord:
    """GitHub integration state of one project at a point in time."""

    present: bool
    repository_url: str | None = None

    @property
    def state(self) -> IntegrationState:
        return IntegrationState.PRESENT if self.present else IntegrationState.ABSENT

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> IntegrationRecord:
        # GitLab answers with an object whose id is null when nothing is configured
        if not data or data.get("id") is None:
            return cls(present=False)
        properties = data.get("properties") or {}
        return cls(present=True, repository_url=properties.get("repository_url"))


@dataclass
class ActionResult:
    """Result of a single operation application."""

    project: ProjectRecord
    operation: str
    action: str  # "applied", "would_apply", "already_set"
    detail: str = ""
    dry_run: bool = False

"""Static project exclusion list and the filter that applies it."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from gl_group_ops.logging_utils import LOGGER_NAME
from gl_group_ops.models import ProjectRecord

# Projects the group tooling never touches, matched against the project name
SKIPPED_PROJECTS: tuple[re.Pattern, ...] = tuple(
    re.compile(p)
    for p in (
        r"activemq",
        r"augeasproviders",
        r"binford2k-node_encrypt",
        r"jenkins",
        r"puppetlabs-",
        r"puppet-",
        r"mcollective",
        r"remote-gitlab-ci",
        r"\Areleng-misc\Z",
        r"\Asimp-integration-test\Z",
        r"\Asimp-(artwork|metadata)\Z",
    )
)


def matching_pattern(name: str, exclusion_patterns: Iterable[re.Pattern]) -> re.Pattern | None:
    """Return the first pattern found in ``name``, or None."""
    for pattern in exclusion_patterns:
        if pattern.search(name):
            return pattern
    return None


def select_projects(
    projects: Sequence[ProjectRecord],
    exclusion_patterns: Sequence[re.Pattern] = SKIPPED_PROJECTS,
) -> list[ProjectRecord]:
    """Drop every project whose name matches an exclusion pattern, keeping order."""
    logger = logging.getLogger(LOGGER_NAME)
    selected = []
    for project in projects:
        pattern = matching_pattern(project.name, exclusion_patterns)
        if pattern is not None:
            logger.info(f"!! SKIPPING {project.name} (matches /{pattern.pattern}/)")
            continue
        logger.info(f"keeping {project.name}")
        selected.append(project)
    return selected

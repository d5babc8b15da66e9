"""CLI entry points for gl-group-ops."""

from __future__ import annotations

import argparse
import logging
import re
from collections.abc import Sequence

# Ensure all operations are registered by importing the operations package
import gl_group_ops.operations  # noqa: F401
from gl_group_ops.client import GitLabClient
from gl_group_ops.config import load_settings
from gl_group_ops.errors import GitLabOpsError
from gl_group_ops.filtering import SKIPPED_PROJECTS, select_projects
from gl_group_ops.logging_utils import LOGGER_NAME, setup_logging
from gl_group_ops.models import DEFAULT_GITLAB_API_URL, DEFAULT_GROUP, ActionResult, ProjectRecord
from gl_group_ops.operations import Operation, get_operation_registry


def collect_projects(client: GitLabClient, group: str, project_names: Sequence[str] = ()) -> list[ProjectRecord]:
    """The whole group, or only the named projects of it."""
    if not project_names:
        return client.list_group_projects(group)
    grp = client.find_group(group)
    return [client.find_project_in_group(grp["id"], name) for name in project_names]


def run(
    client: GitLabClient,
    operation: Operation,
    group: str,
    project_names: Sequence[str] = (),
    exclusion_patterns: Sequence[re.Pattern] = SKIPPED_PROJECTS,
) -> list[ActionResult]:
    """List the group's projects, drop the excluded ones and apply the operation to the rest."""
    logger = logging.getLogger(LOGGER_NAME)

    logger.info(f"acquiring projects of group '{group}'")
    projects = collect_projects(client, group, project_names)

    logger.info("skipping excluded projects")
    projects = select_projects(projects, exclusion_patterns)

    operation.prepare(projects)
    for project in projects:
        operation.apply_to_project(project)
    return operation.results


def build_parser(operation_name: str) -> argparse.ArgumentParser:
    op_cls = get_operation_registry()[operation_name]
    parser = argparse.ArgumentParser(
        prog=f"gl-{operation_name}",
        description=op_cls.__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment:
    GITLAB_TOKEN / GITLAB_API_PRIVATE_TOKEN - GitLab API token (required)
    GITLAB_URL / GITLAB_API_ENDPOINT        - GitLab API endpoint (default: {DEFAULT_GITLAB_API_URL})
    GITHUB_GITLAB_EXTERNAL_CICD_TOKEN       - GitHub token for the integration (github-integration only)
    DRY_RUN                                 - dry-run unless set to something other than 'yes'
""",
    )
    parser.add_argument(
        "-o", "--group", default=DEFAULT_GROUP, help=f"GitLab group to query against (default: {DEFAULT_GROUP})"
    )
    parser.add_argument(
        "-e",
        "--endpoint",
        default=None,
        help=f"GitLab API endpoint (default: from GITLAB_URL env or {DEFAULT_GITLAB_API_URL})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    dry_run = parser.add_mutually_exclusive_group()
    dry_run.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_const",
        const=True,
        default=None,
        help="Show what would be done without making changes (overrides DRY_RUN)",
    )
    dry_run.add_argument(
        "--no-dry-run", dest="dry_run", action="store_const", const=False, help="Make changes (overrides DRY_RUN)"
    )
    op_cls.add_arguments(parser)
    return parser


def main(operation_name: str, argv: Sequence[str] | None = None) -> int:
    parser = build_parser(operation_name)
    args = parser.parse_args(argv)

    logger = setup_logging(verbose=args.verbose)

    op_cls = get_operation_registry()[operation_name]
    try:
        settings = load_settings(args, require_github_token=op_cls.requires_github_token)
    except GitLabOpsError as e:
        logger.error(str(e))
        return 1

    client = GitLabClient(settings.endpoint, settings.token, dry_run=settings.dry_run)
    operation = op_cls.from_args(client, args, settings)

    if settings.dry_run:
        logger.info("DRY-RUN MODE - no changes will be made")

    project_names = args.projects if op_cls.accepts_project_names else ()
    try:
        run(client, operation, settings.group, project_names=project_names)
    except GitLabOpsError as e:
        logger.error(f"Fatal error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    # Summary
    total = len(operation.results)
    applied = sum(1 for r in operation.results if r.action in ("applied", "would_apply"))
    already = sum(1 for r in operation.results if r.action == "already_set")

    logger.info(
        f"Done: {total} projects, {applied} {'would change' if settings.dry_run else 'changed'}, "
        f"{already} already set"
    )
    return 0


def cancel_pipelines_main() -> int:
    return main("cancel-pipelines")


def github_integration_main() -> int:
    return main("github-integration")

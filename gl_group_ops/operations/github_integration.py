"""GitLab CI/CD <-> GitHub integration operation."""

from __future__ import annotations

import argparse

from gl_group_ops.errors import Forbidden, IntegrationWriteError
from gl_group_ops.models import ActionResult, IntegrationState, ProjectRecord
from gl_group_ops.operations.base import Operation, register_operation


def github_repository_url(web_url: str) -> str:
    """The GitHub mirror URL of a gitlab.com project."""
    return web_url.replace("gitlab.com", "github.com")


def integration_hints(project: ProjectRecord, message: str) -> list[str]:
    indented = "\n".join(" " * 9 + line for line in message.splitlines())
    return [
        "",
        "ERROR: Failed to set up missing Gitlab CI/CD <-> GitHub Integration!",
        "",
        "   HINTS:",
        "       * Make sure you are using a **GitLab** API token with read-write scope",
        "       * To set up the GitHub integration for this repo using the web UI, "
        f"go to {project.web_url}/-/services/github/edit",
        "",
        indented,
        "",
    ]


@register_operation("github-integration")
class GithubIntegrationOperation(Operation):
    """Ensure each project has its GitHub CI/CD integration configured."""

    accepts_project_names = True
    requires_github_token = True

    def __init__(self, client, credential: str | None = None, force: bool = False):
        super().__init__(client)
        self.credential = credential
        self.force = force

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-t", "--token", default=None, help="GitLab API token (default: from GITLAB_TOKEN env)")
        parser.add_argument(
            "--force", action="store_true", help="Rewrite the integration even when one is already configured"
        )
        parser.add_argument(
            "projects", nargs="*", metavar="PROJECT", help="Only handle these projects of the group"
        )

    @classmethod
    def from_args(cls, client, args, settings) -> GithubIntegrationOperation:
        return cls(client, credential=settings.github_token, force=args.force)

    def apply_to_project(self, project: ProjectRecord) -> ActionResult:
        integration = self.client.get_integration(project.id)
        status = integration.repository_url or "**NO GITHUB INTEGRATION**"
        self.logger.debug(f"{project.path_with_namespace or project.name}: {status}")

        if integration.state == IntegrationState.PRESENT and not self.force:
            return self._record(
                ActionResult(
                    project=project,
                    operation=self.operation_name,
                    action="already_set",
                    detail=status,
                )
            )

        github_url = github_repository_url(project.web_url)
        if self.client.dry_run:
            return self._record(
                ActionResult(
                    project=project,
                    operation=self.operation_name,
                    action="would_apply",
                    detail=f"{status} → {github_url}",
                    dry_run=True,
                )
            )

        try:
            self.client.set_integration(
                project.id,
                {"token": self.credential, "repository_url": github_url, "static_context": True},
            )
        except Forbidden as e:
            hints = integration_hints(project, str(e))
            for line in hints:
                self.logger.error(line)
            raise IntegrationWriteError(
                f"Not allowed to configure the GitHub integration of {project.name}",
                hints=hints,
                status_code=e.status_code,
            ) from e

        confirmed = self.client.get_integration(project.id)
        return self._record(
            ActionResult(
                project=project,
                operation=self.operation_name,
                action="applied",
                detail=f"Updated: {confirmed.repository_url or '**NO GITHUB INTEGRATION**'}",
            )
        )

"""Exception hierarchy for gl-group-ops.

Every error below is fatal to a run: nothing is retried, and the CLI turns any
``GitLabOpsError`` into a non-zero exit status.
"""

from __future__ import annotations


class GitLabOpsError(Exception):
    """Base class for all gl-group-ops errors."""


class ConfigError(GitLabOpsError):
    """A required credential or setting is missing."""


class NotFoundError(GitLabOpsError, LookupError):
    """A group or project name resolved to zero or several records."""


class RemoteAPIError(GitLabOpsError):
    """The GitLab API answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class Forbidden(RemoteAPIError):
    """The credential is not allowed to perform the request (401/403)."""


class IntegrationWriteError(Forbidden):
    """Writing the GitHub integration was refused; carries remediation hints."""

    def __init__(self, message: str, hints: list[str], status_code: int | None = None):
        super().__init__(message, status_code=status_code)
        self.hints = hints

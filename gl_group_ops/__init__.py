"""
gl-group-ops: operational tools for the projects of a GitLab group.

    gl-cancel-pipelines   - cancel pending/running pipelines for a ref in every project
    gl-github-integration - ensure every project has its GitHub CI/CD integration

Both tools list the group's projects, drop the ones matching a static exclusion
list and act on the rest, one project at a time. They run in dry-run mode unless
DRY_RUN is set to something other than 'yes' (or --no-dry-run is given).

Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (required)
    GITLAB_URL   - GitLab API endpoint (default: https://gitlab.com/api/v4)
"""

from gl_group_ops.cli import cancel_pipelines_main, github_integration_main, main, run
from gl_group_ops.client import GitLabClient

__version__ = "0.1.0"
__all__ = ["main", "run", "cancel_pipelines_main", "github_integration_main", "GitLabClient", "__version__"]

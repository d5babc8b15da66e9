"""Runtime settings resolved from CLI options and environment variables."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass

from gl_group_ops.errors import ConfigError
from gl_group_ops.models import DEFAULT_GITLAB_API_URL, DEFAULT_GROUP

TOKEN_ENV_VARS = ("GITLAB_TOKEN", "GITLAB_API_PRIVATE_TOKEN")
ENDPOINT_ENV_VARS = ("GITLAB_URL", "GITLAB_API_ENDPOINT")
GITHUB_TOKEN_ENV_VAR = "GITHUB_GITLAB_EXTERNAL_CICD_TOKEN"
DRY_RUN_ENV_VAR = "DRY_RUN"


@dataclass
class Settings:
    endpoint: str
    token: str
    group: str = DEFAULT_GROUP
    dry_run: bool = True
    verbose: bool = False
    github_token: str | None = None


def _first_env(environ: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def dry_run_from_env(environ: Mapping[str, str]) -> bool:
    """Dry-run stays on unless DRY_RUN is set to something other than 'yes'."""
    value = environ.get(DRY_RUN_ENV_VAR)
    return value is None or value == "yes"


def load_settings(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
    require_github_token: bool = False,
) -> Settings:
    """
    Build Settings from parsed CLI args, falling back to the environment.

    CLI options win over environment variables, which win over defaults.
    The GitHub token is only demanded when ``require_github_token`` is set
    and the run is allowed to write.
    """
    if environ is None:
        environ = os.environ

    token = getattr(args, "token", None) or _first_env(environ, TOKEN_ENV_VARS)
    if not token:
        raise ConfigError(f"No GitLab API token found (set {' or '.join(TOKEN_ENV_VARS)})")

    endpoint = getattr(args, "endpoint", None) or _first_env(environ, ENDPOINT_ENV_VARS) or DEFAULT_GITLAB_API_URL

    dry_run = getattr(args, "dry_run", None)
    if dry_run is None:
        dry_run = dry_run_from_env(environ)

    github_token = environ.get(GITHUB_TOKEN_ENV_VAR) or None
    if require_github_token and not dry_run and not github_token:
        raise ConfigError(f"No token found in {GITHUB_TOKEN_ENV_VAR}")

    return Settings(
        endpoint=endpoint,
        token=token,
        group=getattr(args, "group", None) or DEFAULT_GROUP,
        dry_run=dry_run,
        verbose=bool(getattr(args, "verbose", False)),
        github_token=github_token,
    )

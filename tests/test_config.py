"""Unit tests for settings resolution."""

import pytest

from conftest import make_args

from gl_group_ops.config import dry_run_from_env, load_settings
from gl_group_ops.errors import ConfigError
from gl_group_ops.models import DEFAULT_GITLAB_API_URL, DEFAULT_GROUP


class TestDryRunFromEnv:
    def test_unset_is_dry_run(self):
        assert dry_run_from_env({}) is True

    def test_yes_is_dry_run(self):
        assert dry_run_from_env({"DRY_RUN": "yes"}) is True

    @pytest.mark.parametrize("value", ["no", "false", "", "YES"])
    def test_anything_else_disables(self, value):
        assert dry_run_from_env({"DRY_RUN": value}) is False


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(make_args(), environ={"GITLAB_TOKEN": "abc"})

        assert settings.token == "abc"
        assert settings.endpoint == DEFAULT_GITLAB_API_URL
        assert settings.group == DEFAULT_GROUP
        assert settings.dry_run is True
        assert settings.github_token is None

    def test_missing_token(self):
        with pytest.raises(ConfigError, match="GITLAB_TOKEN"):
            load_settings(make_args(), environ={})

    def test_private_token_fallback(self):
        settings = load_settings(make_args(), environ={"GITLAB_API_PRIVATE_TOKEN": "xyz"})
        assert settings.token == "xyz"

    def test_cli_token_wins(self):
        settings = load_settings(make_args(token="cli"), environ={"GITLAB_TOKEN": "env"})
        assert settings.token == "cli"

    def test_endpoint_fallbacks(self):
        env = {"GITLAB_TOKEN": "abc", "GITLAB_API_ENDPOINT": "https://git.example.org/api/v4"}
        assert load_settings(make_args(), environ=env).endpoint == "https://git.example.org/api/v4"

        env["GITLAB_URL"] = "https://other.example.org/api/v4"
        assert load_settings(make_args(), environ=env).endpoint == "https://other.example.org/api/v4"

        assert load_settings(make_args(endpoint="https://cli/api/v4"), environ=env).endpoint == "https://cli/api/v4"

    def test_cli_dry_run_overrides_env(self):
        env = {"GITLAB_TOKEN": "abc", "DRY_RUN": "no"}
        assert load_settings(make_args(), environ=env).dry_run is False
        assert load_settings(make_args(dry_run=True), environ=env).dry_run is True

    def test_github_token_required_when_writing(self):
        env = {"GITLAB_TOKEN": "abc", "DRY_RUN": "no"}
        with pytest.raises(ConfigError, match="GITHUB_GITLAB_EXTERNAL_CICD_TOKEN"):
            load_settings(make_args(), environ=env, require_github_token=True)

    def test_github_token_optional_in_dry_run(self):
        settings = load_settings(make_args(), environ={"GITLAB_TOKEN": "abc"}, require_github_token=True)
        assert settings.github_token is None

    def test_github_token_read(self):
        env = {"GITLAB_TOKEN": "abc", "DRY_RUN": "no", "GITHUB_GITLAB_EXTERNAL_CICD_TOKEN": "gh"}
        settings = load_settings(make_args(), environ=env, require_github_token=True)
        assert settings.github_token == "gh"

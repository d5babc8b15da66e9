"""GitLab API client with pagination support."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import requests

from gl_group_ops.errors import Forbidden, NotFoundError, RemoteAPIError
from gl_group_ops.logging_utils import LOGGER_NAME
from gl_group_ops.models import (
    GITHUB_INTEGRATION,
    PER_PAGE,
    IntegrationRecord,
    PipelineRecord,
    ProjectRecord,
)

FORBIDDEN_STATUS_CODES = {401, 403}


class GitLabClient:
    """Thin wrapper around GitLab REST API v4 with pagination support.

    The underlying ``requests.Session`` is built on first use and shared by
    every call of the run. Requests are never retried.
    """

    def __init__(self, api_url: str, token: str, dry_run: bool = True):
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.dry_run = dry_run
        self.logger = logging.getLogger(LOGGER_NAME)
        self._session: requests.Session | None = None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(
                {
                    "PRIVATE-TOKEN": self.token,
                    "Content-Type": "application/json",
                }
            )
        return self._session

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Make an HTTP request, mapping failures onto RemoteAPIError."""
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params') or ''}")
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise RemoteAPIError(f"{method.upper()} {url} failed: {e}") from e

        if resp.status_code >= 400:
            message = f"{method.upper()} {url} returned {resp.status_code}: {resp.text[:500]}"
            error_cls = Forbidden if resp.status_code in FORBIDDEN_STATUS_CODES else RemoteAPIError
            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise error_cls(message, status_code=resp.status_code) from e
        return resp

    def get(self, endpoint: str, params: dict | None = None) -> Any:
        return self._request("GET", endpoint, params=params).json()

    def post(self, endpoint: str, data: dict | None = None) -> Any:
        return self._request("POST", endpoint, json=data).json()

    def put(self, endpoint: str, data: dict | None = None) -> Any:
        return self._request("PUT", endpoint, json=data).json()

    def paginate(self, endpoint: str, params: dict | None = None) -> list[dict]:
        """Fetch all pages of a paginated endpoint, following X-Next-Page."""
        params = dict(params or {})
        params.setdefault("per_page", PER_PAGE)
        page = 1
        results = []
        while True:
            params["page"] = page
            resp = self._request("GET", endpoint, params=params)
            results.extend(resp.json())
            next_page = resp.headers.get("x-next-page", "").strip()
            if not next_page:
                break
            page = int(next_page)
        return results

    # -- Groups and projects --

    def find_group(self, group: str) -> dict:
        """
        Resolve a group name or path to exactly one group.

        Search results are narrowed to exact path matches when there are any;
        zero or several remaining candidates is an error.
        """
        candidates = self.paginate("/groups", params={"search": group})
        exact = [g for g in candidates if group in (g.get("full_path"), g.get("path"))]
        matches = exact or candidates
        if len(matches) != 1:
            raise NotFoundError(f"Expected 1 group to match '{group}', found {len(matches)}")
        return matches[0]

    def list_group_projects(self, group: str) -> list[ProjectRecord]:
        """All projects directly under the group, ordered by name."""
        grp = self.find_group(group)
        projects = self.paginate(
            f"/groups/{grp['id']}/projects",
            params={"order_by": "name", "sort": "asc", "include_subgroups": False},
        )
        return [ProjectRecord.from_api(p) for p in projects]

    def find_project_in_group(self, group_id: int, name: str) -> ProjectRecord:
        results = self.paginate(f"/groups/{group_id}/search", params={"scope": "projects", "search": name})
        matches = [p for p in results if p.get("name") == name]
        if len(matches) != 1:
            raise NotFoundError(f"Expected 1 project to match '{name}', found {len(matches)}")
        return ProjectRecord.from_api(matches[0])

    # -- Pipelines --

    def list_pipelines(self, project_id: int, scope: str, ref: str) -> list[PipelineRecord]:
        pipelines = self.paginate(f"/projects/{project_id}/pipelines", params={"scope": scope, "ref": ref})
        return [PipelineRecord.from_api(p) for p in pipelines]

    def get_pipeline(self, project_id: int, pipeline_id: int) -> PipelineRecord:
        return PipelineRecord.from_api(self.get(f"/projects/{project_id}/pipelines/{pipeline_id}"))

    def cancel_pipeline(self, project_id: int, pipeline_id: int) -> PipelineRecord:
        return PipelineRecord.from_api(self.post(f"/projects/{project_id}/pipelines/{pipeline_id}/cancel"))

    # -- Integrations --

    def get_integration(self, project_id: int, name: str = GITHUB_INTEGRATION) -> IntegrationRecord:
        encoded = urllib.parse.quote(name, safe="")
        try:
            data = self.get(f"/projects/{project_id}/integrations/{encoded}")
        except RemoteAPIError as e:
            if e.status_code == 404:
                return IntegrationRecord(present=False)
            raise
        return IntegrationRecord.from_api(data)

    def set_integration(self, project_id: int, settings: dict, name: str = GITHUB_INTEGRATION) -> Any:
        encoded = urllib.parse.quote(name, safe="")
        return self.put(f"/projects/{project_id}/integrations/{encoded}", data=settings)

"""Issue tracker clients resolving an issue id to its title."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from twgit.core.errors import ConnectorError

__all__ = [
    "GitHubConnector",
    "GitLabConnector",
    "HttpIssueConnector",
    "JiraConnector",
    "RedmineConnector",
]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpIssueConnector:
    """Base class for trackers exposing issues over a JSON HTTP API.

    Subclasses build the issue URL and pick the title out of the payload.
    An unknown issue yields an empty title; any other failure raises
    ``ConnectorError``.
    """

    provider = "http"

    def __init__(
        self,
        base_url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = {"Accept": "application/json", **(headers or {})}
        self.auth = auth
        self.timeout = timeout
        self._client = client

    def issue_url(self, issue_id: str) -> str:
        raise NotImplementedError

    def extract_title(self, payload: Any) -> str:
        raise NotImplementedError

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url, headers=self.headers, auth=self.auth)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(url, headers=self.headers, auth=self.auth)

    def get_issue_title(self, issue_id: str) -> str:
        url = self.issue_url(issue_id)
        logger.debug("GET %s", url)
        try:
            response = self._get(url)
        except httpx.RequestError as exc:
            raise ConnectorError(f"Cannot reach {self.provider} tracker: {exc}") from exc

        if response.status_code == 404:
            logger.debug("Issue %s not found on %s", issue_id, self.provider)
            return ""
        if response.status_code != 200:
            raise ConnectorError(
                f"{self.provider} tracker answered HTTP {response.status_code} for issue {issue_id}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ConnectorError(f"Invalid {self.provider} tracker response for issue {issue_id}.") from exc

        title = self.extract_title(payload)
        return title.strip() if isinstance(title, str) else ""


class GitHubConnector(HttpIssueConnector):
    provider = "github"

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        *,
        base_url: str = "https://api.github.com",
        **kwargs: Any,
    ) -> None:
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        super().__init__(base_url, headers=headers, **kwargs)
        self.owner = owner
        self.repo = repo

    def issue_url(self, issue_id: str) -> str:
        return f"{self.base_url}/repos/{self.owner}/{self.repo}/issues/{quote(issue_id)}"

    def extract_title(self, payload: Any) -> str:
        return payload.get("title", "") if isinstance(payload, dict) else ""


class GitLabConnector(HttpIssueConnector):
    provider = "gitlab"

    def __init__(
        self,
        project_id: str,
        token: str,
        *,
        base_url: str = "https://gitlab.com/api/v4",
        **kwargs: Any,
    ) -> None:
        super().__init__(base_url, headers={"PRIVATE-TOKEN": token}, **kwargs)
        self.project_id = project_id

    def issue_url(self, issue_id: str) -> str:
        return f"{self.base_url}/projects/{quote(self.project_id, safe='')}/issues/{quote(issue_id)}"

    def extract_title(self, payload: Any) -> str:
        return payload.get("title", "") if isinstance(payload, dict) else ""


class RedmineConnector(HttpIssueConnector):
    provider = "redmine"

    def __init__(self, base_url: str, api_key: str | None = None, **kwargs: Any) -> None:
        headers = {"X-Redmine-API-Key": api_key} if api_key else {}
        super().__init__(base_url, headers=headers, **kwargs)

    def issue_url(self, issue_id: str) -> str:
        return f"{self.base_url}/issues/{quote(issue_id)}.json"

    def extract_title(self, payload: Any) -> str:
        issue = payload.get("issue") if isinstance(payload, dict) else None
        return issue.get("subject", "") if isinstance(issue, dict) else ""


class JiraConnector(HttpIssueConnector):
    provider = "jira"

    def __init__(self, base_url: str, email: str, api_token: str, **kwargs: Any) -> None:
        super().__init__(base_url, auth=(email, api_token), **kwargs)

    def issue_url(self, issue_id: str) -> str:
        return f"{self.base_url}/rest/api/2/issue/{quote(issue_id)}?fields=summary"

    def extract_title(self, payload: Any) -> str:
        fields = payload.get("fields") if isinstance(payload, dict) else None
        return fields.get("summary", "") if isinstance(fields, dict) else ""

"""Connector factory for issue tracker integrations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from twgit.core.errors import ConfigurationError

from .providers import GitHubConnector, GitLabConnector, HttpIssueConnector, JiraConnector, RedmineConnector

SUPPORTED_PROVIDERS: tuple[str, ...] = (
    "github",
    "gitlab",
    "redmine",
    "jira",
)

_PROVIDER_ALIASES = {
    "gh": "github",
    "gl": "gitlab",
}


def normalize_provider(provider: str) -> str:
    key = provider.strip().lower()
    return _PROVIDER_ALIASES.get(key, key)


def _require(values: Mapping[str, Any], key: str, provider: str) -> str:
    value = values.get(key)
    if value is None or not str(value).strip():
        raise ConfigurationError(
            f"Missing required setting '{key}' for connector '{provider}'",
            command=f"edit .twgit/config.yaml (twgit.connector.{key})",
        )
    return str(value).strip()


def _optional(values: Mapping[str, Any], key: str) -> str | None:
    value = values.get(key)
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


def build_connector(settings: Mapping[str, Any], **client_options: Any) -> HttpIssueConnector | None:
    """Build the connector described by the ``connector`` config section.

    Returns ``None`` when no provider is configured.
    """
    provider = _optional(settings, "provider")
    if provider is None:
        return None

    provider_name = normalize_provider(provider)
    if provider_name not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unsupported connector '{provider}'. Supported: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    if provider_name == "github":
        return GitHubConnector(
            owner=_require(settings, "owner", provider_name),
            repo=_require(settings, "repo", provider_name),
            token=_optional(settings, "token"),
            base_url=_optional(settings, "base_url") or "https://api.github.com",
            **client_options,
        )

    if provider_name == "gitlab":
        return GitLabConnector(
            project_id=_require(settings, "project_id", provider_name),
            token=_require(settings, "token", provider_name),
            base_url=_optional(settings, "base_url") or "https://gitlab.com/api/v4",
            **client_options,
        )

    if provider_name == "redmine":
        return RedmineConnector(
            base_url=_require(settings, "base_url", provider_name),
            api_key=_optional(settings, "api_key"),
            **client_options,
        )

    if provider_name == "jira":
        return JiraConnector(
            base_url=_require(settings, "base_url", provider_name),
            email=_require(settings, "email", provider_name),
            api_token=_require(settings, "api_token", provider_name),
            **client_options,
        )

    raise ConfigurationError(f"Unhandled connector: {provider_name}")

"""Issue tracker connectors used to name feature branches."""

from .factory import SUPPORTED_PROVIDERS, build_connector, normalize_provider
from .providers import GitHubConnector, GitLabConnector, HttpIssueConnector, JiraConnector, RedmineConnector

__all__ = [
    "SUPPORTED_PROVIDERS",
    "GitHubConnector",
    "GitLabConnector",
    "HttpIssueConnector",
    "JiraConnector",
    "RedmineConnector",
    "build_connector",
    "normalize_provider",
]

"""Feature subject lookup backed by an append-only local file.

Each line of the cache file is ``<issue id>;<subject>``.  Lookups return the
first matching line.  New entries are appended and existing lines are never
rewritten, so a stale subject persists until the file is edited by hand.
"""

from __future__ import annotations

import logging
from pathlib import Path

from twgit.core.constants import TWGIT_DIRNAME

from .prefixes import BranchType, PrefixRegistry
from .protocols import IssueConnector

__all__ = ["FeatureSubjectCache", "subject_cache_path"]

logger = logging.getLogger(__name__)


def subject_cache_path(repo_root: Path, filename: str) -> Path:
    return repo_root / TWGIT_DIRNAME / filename


class FeatureSubjectCache:
    def __init__(
        self,
        path: Path,
        registry: PrefixRegistry,
        origin: str,
        connector: IssueConnector | None = None,
    ) -> None:
        self.path = path
        self.registry = registry
        self.origin = origin
        self.connector = connector

    def issue_id(self, branch_or_issue: str) -> str:
        name = branch_or_issue
        remote_prefix = f"{self.origin}/"
        if name.startswith(remote_prefix):
            name = name[len(remote_prefix):]
        return self.registry.strip_prefix(name, BranchType.FEATURE)

    def lookup(self, issue_id: str) -> str | None:
        """Return the cached subject for ``issue_id``, or ``None`` when not cached.

        An entry recorded with an empty subject is a hit and yields ``""``.
        """
        if not self.path.exists():
            return None
        marker = f"{issue_id};"
        with self.path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if line.startswith(marker):
                    return line[len(marker):].rstrip("\r\n")
        return None

    def append(self, issue_id: str, subject: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{issue_id};{subject}\n")

    def get_subject(self, branch_or_issue: str) -> str:
        issue_id = self.issue_id(branch_or_issue)
        subject = self.lookup(issue_id)
        if subject is not None:
            return subject
        if self.connector is None:
            return ""

        logger.debug("Subject of %s not cached, asking the issue tracker", issue_id)
        subject = self.connector.get_issue_title(issue_id)
        self.append(issue_id, subject)
        return subject

"""Tag lookup and semantic version arithmetic."""

from __future__ import annotations

import re
from enum import Enum

from twgit.core.errors import WorkflowError
from twgit.core.git import Git

from .prefixes import BranchType, PrefixRegistry

__all__ = ["BumpType", "TagResolver", "bump_version", "validate_tag_name"]

VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class BumpType(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    REVISION = "revision"


def bump_version(version: str | None, bump: BumpType | str) -> str:
    """Increment one component of ``major.minor.revision``.

    Lower components are reset to zero; ``None`` counts as ``0.0.0``.
    """
    bump = BumpType(bump)
    parts = [0, 0, 0]
    if version:
        match = re.match(r"^(\d+)\.(\d+)\.(\d+)", version)
        if match is None:
            raise WorkflowError(f'Cannot parse version "{version}". Expected <major.minor.revision>.')
        parts = [int(value) for value in match.groups()]

    major, minor, revision = parts
    if bump is BumpType.MAJOR:
        return f"{major + 1}.0.0"
    if bump is BumpType.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{revision + 1}"


def validate_tag_name(version: str) -> None:
    if version == "0.0.0" or not VERSION_PATTERN.match(version):
        raise WorkflowError(
            f'Unauthorized tag name: {version}. Must use <major.minor.revision> format, e.g. "1.2.3".'
        )


class TagResolver:
    def __init__(self, git: Git, registry: PrefixRegistry) -> None:
        self.git = git
        self.registry = registry

    @property
    def tag_prefix(self) -> str:
        return self.registry.resolve_prefix(BranchType.TAG)

    def last_tag(self) -> str | None:
        """Most recent prefixed version tag in git's version order, if any.

        Tags sharing the prefix without a ``major.minor.revision`` remainder
        are ignored.
        """
        tags = [
            tag
            for tag in self.git.sorted_tags(f"{self.tag_prefix}*")
            if VERSION_PATTERN.match(self.registry.strip_prefix(tag, BranchType.TAG))
        ]
        return tags[-1] if tags else None

    def last_version(self) -> str | None:
        tag = self.last_tag()
        if tag is None:
            return None
        return self.registry.strip_prefix(tag, BranchType.TAG)

    def next_version(self, bump: BumpType | str) -> str:
        return bump_version(self.last_version(), bump)

    def tag_exists(self, tag: str) -> bool:
        return tag in self.git.tags()

    def validate_tag_name(self, version: str) -> None:
        check = self.git.run(["check-ref-format", "--branch", version], fatal=False)
        if not check.ok:
            raise WorkflowError(
                f"{version} is not a valid reference name! See git check-ref-format for more details."
            )
        validate_tag_name(version)

    def validate_new_tag_name(self, version: str) -> str:
        """Validate ``version`` and return the prefixed tag it would create."""
        self.validate_tag_name(version)
        tag = self.registry.build_ref_name(version, BranchType.TAG)
        if self.tag_exists(tag):
            raise WorkflowError(f"Tag {tag} already exists.", command="git tag --list")
        return tag

"""Read-only analyses of branches, tags and contributors."""

from __future__ import annotations

from collections import Counter

from twgit.core.errors import WorkflowError
from twgit.core.git import Git

from .context import WorkflowContext
from .prefixes import BranchType

__all__ = ["BranchAuditor"]


def _parse_branch_listing(lines: list[str]) -> list[str]:
    names = []
    for line in lines:
        name = line.lstrip("* ").strip()
        if name and " -> " not in name:
            names.append(name)
    return names


def _matches_convention(branch: str, check: str, *, segment: bool) -> bool:
    if segment:
        return branch == check or branch.startswith(f"{check}/")
    return branch.startswith(check)


class BranchAuditor:
    def __init__(self, git: Git, context: WorkflowContext) -> None:
        self.git = git
        self.context = context
        self.registry = context.registry

    def contributors(self, branch: str) -> dict[str, int]:
        """Commit count per author over ``<origin>/<stable>..<branch>``."""
        result = self.git.run(
            ["shortlog", "-nse", f"{self.context.remote_stable}..{branch}"],
            failure_message=f'Could not list contributors of "{branch}".',
        )
        tally: list[tuple[str, int]] = []
        for line in result.stdout_lines:
            count, _, author = line.strip().partition("\t")
            if not author:
                continue
            tally.append((author.strip(), int(count)))
        tally.sort(key=lambda item: item[1], reverse=True)
        return dict(tally)

    def tags_not_merged_into(self, branch: str) -> list[str]:
        """Tags whose commit is not an ancestor of ``branch``."""
        branch_rev = self.git.rev_parse(branch)
        not_merged = []
        for tag in self.git.tags():
            tag_rev = self.git.rev_parse(f"tags/{tag}")
            if self.git.merge_base(branch_rev, tag_rev) != tag_rev:
                not_merged.append(tag)
        return not_merged

    def dissident_branches(self) -> list[str]:
        """Remote branches outside the naming convention.

        The stable branch matches as a whole path segment; configured prefixes
        match literally since they carry their own separator.
        """
        checks = [(self.context.remote_stable, True)]
        checks.extend((self.context.remote_ref(prefix), False) for prefix in self.registry.prefixes())

        dissidents = []
        for branch in self.git.remote_branches():
            if not any(_matches_convention(branch, check, segment=segment) for check, segment in checks):
                dissidents.append(branch)
        return dissidents

    def ambiguous_names(self) -> dict[str, int]:
        """Names shared by local branches and tags, with their occurrences."""
        counts = Counter(self.git.local_branches() + self.git.tags())
        return {name: occurrences for name, occurrences in sorted(counts.items()) if occurrences > 1}

    def _remote_listing(self, *args: str) -> list[str]:
        result = self.git.run(["branch", "--no-color", "-r", *args], fatal=False)
        return _parse_branch_listing(result.stdout_lines)

    def _in_progress(self, branch_type: BranchType) -> list[str]:
        prefix = self.context.remote_ref(self.registry.resolve_prefix(branch_type))
        return [
            branch
            for branch in self._remote_listing("--no-merged", self.context.remote_stable)
            if branch.startswith(prefix)
        ]

    def releases_in_progress(self) -> list[str]:
        return self._in_progress(BranchType.RELEASE)

    def hotfixes_in_progress(self) -> list[str]:
        return self._in_progress(BranchType.HOTFIX)

    def current_release_in_progress(self) -> str | None:
        """Local name of the release in progress, if any."""
        remote_prefix = f"{self.context.origin}/"
        releases = [branch[len(remote_prefix):] for branch in self.releases_in_progress()]
        if len(releases) > 1:
            raise WorkflowError(f"More than one release in progress detected: {', '.join(releases)}.")
        return releases[0] if releases else None

    def _features_only(self, branches: list[str]) -> list[str]:
        prefix = self.context.remote_ref(self.registry.resolve_prefix(BranchType.FEATURE))
        return [branch for branch in branches if branch.startswith(prefix)]

    def features(self) -> list[str]:
        return self._features_only(self._remote_listing())

    def features_not_merged(self) -> list[str]:
        return self._features_only(self._remote_listing("--no-merged", self.context.remote_stable))

    def features_merged_into(self, ref: str) -> list[str]:
        return self._features_only(self._remote_listing("--merged", ref))

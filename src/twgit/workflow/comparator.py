"""Merge-base comparison of two refs."""

from __future__ import annotations

from enum import Enum

from twgit.core.git import Git

__all__ = ["ComparisonResult", "BranchComparator"]


class ComparisonResult(str, Enum):
    EQUAL = "equal"
    AHEAD_OF_REMOTE = "ahead"
    BEHIND_REMOTE = "behind"
    DIVERGED = "diverged"
    MERGE_BASE_UNAVAILABLE = "error"


class BranchComparator:
    """Classify how ``ref1`` relates to ``ref2``.

    The result depends only on the reachable history of both refs:

    * identical tips: ``EQUAL``
    * ``ref1`` is an ancestor of ``ref2``: ``BEHIND_REMOTE`` (fast-forwardable)
    * ``ref2`` is an ancestor of ``ref1``: ``AHEAD_OF_REMOTE``
    * otherwise ``DIVERGED``, or ``MERGE_BASE_UNAVAILABLE`` when git cannot
      compute a merge-base (unrelated histories).
    """

    def __init__(self, git: Git) -> None:
        self.git = git

    def compare(self, ref1: str, ref2: str) -> ComparisonResult:
        tip1 = self.git.rev_parse(ref1)
        tip2 = self.git.rev_parse(ref2)

        if tip1 == tip2:
            return ComparisonResult.EQUAL

        base = self.git.merge_base(tip1, tip2)
        if base is None:
            return ComparisonResult.MERGE_BASE_UNAVAILABLE
        if base == tip1:
            return ComparisonResult.BEHIND_REMOTE
        if base == tip2:
            return ComparisonResult.AHEAD_OF_REMOTE
        return ComparisonResult.DIVERGED

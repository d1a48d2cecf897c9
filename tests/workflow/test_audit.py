from __future__ import annotations

from pathlib import Path

import pytest

from tests.utils import commit, git
from twgit.core.errors import WorkflowError
from twgit.core.git import Git, GitRunner
from twgit.workflow import BranchAuditor, WorkflowContext


@pytest.fixture()
def auditor(work_repo: Path) -> BranchAuditor:
    return BranchAuditor(Git(GitRunner(work_repo)), WorkflowContext())


def _push_branch(repo: Path, branch: str, *messages: str, base: str = "stable") -> None:
    git(repo, "checkout", "-q", "-b", branch, base)
    for message in messages:
        commit(repo, message)
    git(repo, "push", "-q", "origin", branch)
    git(repo, "checkout", "-q", "stable")


def test_contributors_ranked_by_commit_count(work_repo: Path, auditor: BranchAuditor) -> None:
    git(work_repo, "checkout", "-q", "-b", "feature-1")
    commit(work_repo, "one")
    git(work_repo, "config", "user.name", "Alice")
    git(work_repo, "config", "user.email", "alice@example.com")
    commit(work_repo, "two")
    commit(work_repo, "three")
    git(work_repo, "push", "-q", "origin", "feature-1")

    ranking = auditor.contributors("origin/feature-1")

    assert list(ranking.items()) == [
        ("Alice <alice@example.com>", 2),
        ("Twgit Tester <tester@example.com>", 1),
    ]


def test_contributors_empty_when_branch_has_no_own_commits(auditor: BranchAuditor) -> None:
    assert auditor.contributors("origin/stable") == {}


def test_tags_not_merged_into_branch(work_repo: Path, auditor: BranchAuditor) -> None:
    git(work_repo, "branch", "feature-old")
    commit(work_repo, "next release")
    git(work_repo, "tag", "-a", "v1.1.0", "-m", "tag")

    assert auditor.tags_not_merged_into("feature-old") == ["v1.1.0"]
    assert auditor.tags_not_merged_into("stable") == []


def test_dissident_branches(work_repo: Path, auditor: BranchAuditor) -> None:
    for branch in ("feature-1", "wip", "stable-old", "release-1.1.0"):
        _push_branch(work_repo, branch)
    git(work_repo, "fetch", "-q", "origin")

    assert sorted(auditor.dissident_branches()) == ["origin/stable-old", "origin/wip"]


def test_ambiguous_names(work_repo: Path, auditor: BranchAuditor) -> None:
    git(work_repo, "branch", "v1.0.0")
    assert auditor.ambiguous_names() == {"v1.0.0": 2}


def test_releases_and_hotfixes_in_progress(work_repo: Path, auditor: BranchAuditor) -> None:
    _push_branch(work_repo, "release-1.1.0", "release work")
    _push_branch(work_repo, "hotfix-1.0.1", "hotfix work")
    _push_branch(work_repo, "feature-3", "feature work")

    assert auditor.releases_in_progress() == ["origin/release-1.1.0"]
    assert auditor.hotfixes_in_progress() == ["origin/hotfix-1.0.1"]
    assert auditor.current_release_in_progress() == "release-1.1.0"


def test_merged_release_is_not_in_progress(work_repo: Path, auditor: BranchAuditor) -> None:
    _push_branch(work_repo, "release-1.1.0")
    assert auditor.releases_in_progress() == []
    assert auditor.current_release_in_progress() is None


def test_more_than_one_release_in_progress(work_repo: Path, auditor: BranchAuditor) -> None:
    _push_branch(work_repo, "release-1.1.0", "a")
    _push_branch(work_repo, "release-1.2.0", "b")

    with pytest.raises(WorkflowError, match="More than one release in progress"):
        auditor.current_release_in_progress()


def test_feature_listings(work_repo: Path, auditor: BranchAuditor) -> None:
    _push_branch(work_repo, "feature-1", "f1")
    _push_branch(work_repo, "feature-2")
    _push_branch(work_repo, "release-1.1.0", "r")
    git(work_repo, "checkout", "-q", "release-1.1.0")
    git(work_repo, "merge", "-q", "--no-ff", "-m", "merge", "origin/feature-1")
    git(work_repo, "push", "-q", "origin", "release-1.1.0")
    git(work_repo, "checkout", "-q", "stable")

    assert auditor.features() == ["origin/feature-1", "origin/feature-2"]
    assert auditor.features_not_merged() == ["origin/feature-1"]
    assert "origin/feature-1" in auditor.features_merged_into("origin/release-1.1.0")

from __future__ import annotations

from pathlib import Path

import pytest

from tests.utils import commit, git
from twgit.core.errors import ShellError, WorkflowError
from twgit.core.git import CommandResult, Git, GitRunner


def test_command_result_lines() -> None:
    result = CommandResult(exit_code=0, stdout="a\n\n  b  \n")
    assert result.ok
    assert result.stdout_lines == ["a", "  b  "]
    assert result.last_line == "b"
    assert CommandResult(exit_code=1, stdout="").last_line == ""


def test_fatal_failure_raises_shell_error(temp_repo: Path) -> None:
    runner = GitRunner(temp_repo)

    with pytest.raises(ShellError) as excinfo:
        runner.run(["checkout", "does-not-exist"], failure_message="Could not checkout.")

    error = excinfo.value
    assert error.message == "Could not checkout."
    assert error.argv == ("git", "checkout", "does-not-exist")
    assert error.exit_code != 0
    assert "does-not-exist" in str(error)


def test_non_fatal_failure_returns_result(temp_repo: Path) -> None:
    result = GitRunner(temp_repo).run(["rev-parse", "--verify", "-q", "nope"], fatal=False)
    assert not result.ok


def test_missing_git_executable(temp_repo: Path, monkeypatch) -> None:
    monkeypatch.setenv("PATH", "")
    result = GitRunner(temp_repo).run(["status"], fatal=False)
    assert result.exit_code == 127


def test_branch_and_tag_listings(temp_repo: Path) -> None:
    commit(temp_repo, "initial")
    git(temp_repo, "branch", "feature-1")
    git(temp_repo, "tag", "v1.0.0")
    repo = Git(GitRunner(temp_repo))

    assert repo.local_branches() == ["feature-1", "stable"]
    assert repo.tags() == ["v1.0.0"]
    assert repo.current_branch() == "stable"
    assert repo.get_config("user.name") == "Twgit Tester"
    assert repo.remote_url("origin") is None
    assert repo.is_inside_work_tree()
    assert repo.repository_root().resolve() == temp_repo.resolve()


def test_remote_branches_skip_symbolic_head(tmp_path: Path, work_repo: Path) -> None:
    git(work_repo, "remote", "set-head", "origin", "stable")
    repo = Git(GitRunner(work_repo))

    assert repo.remote_branches() == ["origin/stable"]


def test_sorted_tags_use_version_order(temp_repo: Path) -> None:
    commit(temp_repo, "initial")
    for tag in ("v1.10.0", "v1.2.0", "v1.9.0"):
        git(temp_repo, "tag", tag)

    assert Git(GitRunner(temp_repo)).sorted_tags("v*") == ["v1.2.0", "v1.9.0", "v1.10.0"]


def test_detached_head_has_no_current_branch(temp_repo: Path) -> None:
    commit(temp_repo, "initial")
    git(temp_repo, "checkout", "-q", "--detach")

    with pytest.raises(WorkflowError, match="Failed to get current branch."):
        Git(GitRunner(temp_repo)).current_branch()


def test_working_tree_changes_list_untracked_files(temp_repo: Path) -> None:
    commit(temp_repo, "initial")
    (temp_repo / "dir").mkdir()
    (temp_repo / "dir" / "new.txt").write_text("x", encoding="utf-8")

    assert Git(GitRunner(temp_repo)).working_tree_changes() == ["?? dir/new.txt"]

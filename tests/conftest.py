from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from tests.fakes import RecordingReporter
from tests.utils import commit, configure_identity, git, run
from twgit.core.git import Git, GitRunner
from twgit.workflow import FeatureSubjectCache, WorkflowContext, WorkflowOrchestrator, subject_cache_path


@pytest.fixture()
def temp_repo(tmp_path: Path) -> Iterator[Path]:
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    run(["git", "init", "-q"], cwd=repo_dir)
    configure_identity(repo_dir)
    git(repo_dir, "checkout", "-q", "-b", "stable")
    yield repo_dir


@pytest.fixture()
def origin_repo(tmp_path: Path) -> Path:
    origin = tmp_path / "origin.git"
    run(["git", "init", "-q", "--bare", str(origin)], cwd=tmp_path)
    return origin


@pytest.fixture()
def work_repo(tmp_path: Path, origin_repo: Path) -> Path:
    """Clone with a pushed ``stable`` branch tagged ``v1.0.0``."""
    work = tmp_path / "work"
    work.mkdir()
    run(["git", "init", "-q"], cwd=work)
    configure_identity(work)
    git(work, "checkout", "-q", "-b", "stable")
    commit(work, "Initial commit", "README.md", "hello\n")
    git(work, "remote", "add", "origin", str(origin_repo))
    git(work, "push", "-q", "-u", "origin", "stable")
    git(work, "tag", "-a", "v1.0.0", "-m", "[twgit] First tag.")
    git(work, "push", "-q", "--tags", "origin", "stable")
    return work


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def context() -> WorkflowContext:
    return WorkflowContext()


@pytest.fixture()
def make_orchestrator(context: WorkflowContext, reporter: RecordingReporter):
    def _make(repo: Path, connector=None) -> WorkflowOrchestrator:
        subjects = FeatureSubjectCache(
            subject_cache_path(repo, context.subject_filename),
            context.registry,
            context.origin,
            connector,
        )
        return WorkflowOrchestrator(context, Git(GitRunner(repo)), reporter, subjects)

    return _make


@pytest.fixture()
def orchestrator(work_repo: Path, make_orchestrator) -> WorkflowOrchestrator:
    return make_orchestrator(work_repo)

from __future__ import annotations

import subprocess
from pathlib import Path


def run(cmd: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True)


def git(cwd: Path, *args: str) -> str:
    return run(["git", *args], cwd=cwd).stdout.strip()


def configure_identity(repo: Path, name: str = "Twgit Tester", email: str = "tester@example.com") -> None:
    git(repo, "config", "user.name", name)
    git(repo, "config", "user.email", email)
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")


def commit(repo: Path, message: str, filename: str | None = None, content: str | None = None) -> str:
    """Commit ``filename`` (or an empty commit) and return the new commit id."""
    if filename is None:
        git(repo, "commit", "--allow-empty", "-m", message)
    else:
        path = repo / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if content is not None else message, encoding="utf-8")
        git(repo, "add", filename)
        git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD")


def clone(origin: Path, target: Path, name: str = "Twgit Tester", email: str = "tester@example.com") -> Path:
    run(["git", "clone", "-q", "-b", "stable", str(origin), str(target)], cwd=origin.parent)
    configure_identity(target, name, email)
    return target

from __future__ import annotations

from pathlib import Path

import pytest

from twgit.config import TwgitConfig, config_path, load_config
from twgit.core.errors import ConfigurationError
from twgit.workflow import BranchType, WorkflowContext


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch) -> None:
    monkeypatch.delenv("TWGIT_ORIGIN", raising=False)
    monkeypatch.delenv("TWGIT_STABLE", raising=False)


def _write(tmp_path: Path, text: str) -> None:
    path = config_path(tmp_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == TwgitConfig()
    assert config.prefixes["tag"] == "v"
    assert config.subject_filename == ".twgit_features_subject"


def test_load_overrides(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "twgit:\n"
        "  git:\n"
        "    origin: upstream\n"
        "    stable: master\n"
        "  workflow:\n"
        "    prefixes:\n"
        "      feature: f/\n"
        "      demo: ''\n"
        "  commit:\n"
        "    first_commit_message: 'Init %s %s %s'\n"
        "  connector:\n"
        "    provider: github\n"
        "    owner: acme\n",
    )

    config = load_config(tmp_path)

    assert config.origin == "upstream"
    assert config.stable == "master"
    assert config.prefixes["feature"] == "f/"
    assert config.prefixes["release"] == "release-"
    assert config.first_commit_message == "Init %s %s %s"
    assert config.connector == {"provider": "github", "owner": "acme"}

    registry = WorkflowContext.from_config(config).registry
    assert registry.classify("demo-1") is BranchType.TAG


def test_environment_overrides(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "twgit:\n  git:\n    origin: upstream\n")
    monkeypatch.setenv("TWGIT_ORIGIN", "mirror")
    monkeypatch.setenv("TWGIT_STABLE", "prod")

    config = load_config(tmp_path)

    assert config.origin == "mirror"
    assert config.stable == "prod"


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    _write(tmp_path, "twgit: [unclosed\n")
    with pytest.raises(ConfigurationError, match="Failed to parse"):
        load_config(tmp_path)


def test_other_sections_are_ignored(tmp_path: Path) -> None:
    _write(tmp_path, "other:\n  keep: true\ntwgit:\n  git:\n    stable: master\n")

    config = load_config(tmp_path)

    assert config.stable == "master"
    assert config.origin == "origin"


def test_context_is_read_only() -> None:
    context = WorkflowContext.from_config(TwgitConfig())
    with pytest.raises(TypeError):
        context.prefixes["feature"] = "x"  # type: ignore[index]
    assert context.remote_stable == "origin/stable"

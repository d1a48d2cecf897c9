"""Project configuration stored in .twgit/config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from twgit.core.constants import (
    CONFIG_FILENAME,
    DEFAULT_COMMAND,
    DEFAULT_FIRST_COMMIT_MESSAGE,
    DEFAULT_ORIGIN,
    DEFAULT_PREFIX_COMMIT_MESSAGE,
    DEFAULT_PREFIXES,
    DEFAULT_STABLE,
    DEFAULT_SUBJECT_FILENAME,
    ORIGIN_ENV_VAR,
    STABLE_ENV_VAR,
    TWGIT_DIRNAME,
)
from twgit.core.errors import ConfigurationError

__all__ = ["TwgitConfig", "config_path", "load_config"]


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _section(data: Any, key: str) -> dict[str, Any]:
    if isinstance(data, dict):
        value = data.get(key)
        if isinstance(value, dict):
            return value
    return {}


@dataclass(slots=True)
class TwgitConfig:
    """Workflow settings; every value has a documented default."""

    origin: str = DEFAULT_ORIGIN
    stable: str = DEFAULT_STABLE
    prefixes: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PREFIXES))
    first_commit_message: str = DEFAULT_FIRST_COMMIT_MESSAGE
    prefix_commit_message: str = DEFAULT_PREFIX_COMMIT_MESSAGE
    subject_filename: str = DEFAULT_SUBJECT_FILENAME
    command: str = DEFAULT_COMMAND
    connector: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "TwgitConfig":
        if not isinstance(data, dict):
            return cls()

        git = _section(data, "git")
        commit = _section(data, "commit")
        features = _section(data, "features")
        raw_prefixes = _section(_section(data, "workflow"), "prefixes")

        prefixes = dict(DEFAULT_PREFIXES)
        for key, value in raw_prefixes.items():
            # An explicitly empty prefix disables that branch type.
            prefixes[str(key)] = "" if value is None else str(value).strip()

        connector = {
            str(key): str(value).strip()
            for key, value in _section(data, "connector").items()
            if value is not None and str(value).strip()
        }

        return cls(
            origin=_text(git.get("origin"), DEFAULT_ORIGIN),
            stable=_text(git.get("stable"), DEFAULT_STABLE),
            prefixes=prefixes,
            first_commit_message=_text(commit.get("first_commit_message"), DEFAULT_FIRST_COMMIT_MESSAGE),
            prefix_commit_message=_text(commit.get("prefix_commit_message"), DEFAULT_PREFIX_COMMIT_MESSAGE),
            subject_filename=_text(features.get("subject_filename"), DEFAULT_SUBJECT_FILENAME),
            command=_text(data.get("command"), DEFAULT_COMMAND),
            connector=connector,
        )

    def with_environment(self) -> "TwgitConfig":
        """Apply TWGIT_ORIGIN / TWGIT_STABLE overrides."""
        origin = os.getenv(ORIGIN_ENV_VAR, "").strip()
        stable = os.getenv(STABLE_ENV_VAR, "").strip()
        if origin:
            self.origin = origin
        if stable:
            self.stable = stable
        return self


def config_path(repo_root: Path) -> Path:
    return repo_root / TWGIT_DIRNAME / CONFIG_FILENAME


def load_config(repo_root: Path) -> TwgitConfig:
    """Load the ``twgit`` section of .twgit/config.yaml, or the defaults."""
    path = config_path(repo_root)
    if not path.exists():
        return TwgitConfig().with_environment()

    yaml = YAML()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc

    section = payload.get("twgit") if isinstance(payload, dict) else None
    return TwgitConfig.from_dict(section if isinstance(section, dict) else None).with_environment()


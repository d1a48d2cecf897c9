"""Immutable per-invocation workflow settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from twgit.config import TwgitConfig
from twgit.core.constants import (
    DEFAULT_COMMAND,
    DEFAULT_FIRST_COMMIT_MESSAGE,
    DEFAULT_ORIGIN,
    DEFAULT_PREFIX_COMMIT_MESSAGE,
    DEFAULT_PREFIXES,
    DEFAULT_STABLE,
    DEFAULT_SUBJECT_FILENAME,
)

from .prefixes import PrefixRegistry

__all__ = ["WorkflowContext"]


@dataclass(frozen=True)
class WorkflowContext:
    origin: str = DEFAULT_ORIGIN
    stable: str = DEFAULT_STABLE
    prefixes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_PREFIXES)))
    first_commit_message: str = DEFAULT_FIRST_COMMIT_MESSAGE
    subject_filename: str = DEFAULT_SUBJECT_FILENAME
    prefix_commit_message: str = DEFAULT_PREFIX_COMMIT_MESSAGE
    command: str = DEFAULT_COMMAND

    def __post_init__(self) -> None:
        if not isinstance(self.prefixes, MappingProxyType):
            object.__setattr__(self, "prefixes", MappingProxyType(dict(self.prefixes)))

    @classmethod
    def from_config(cls, config: TwgitConfig) -> "WorkflowContext":
        return cls(
            origin=config.origin,
            stable=config.stable,
            prefixes=dict(config.prefixes),
            first_commit_message=config.first_commit_message,
            subject_filename=config.subject_filename,
            prefix_commit_message=config.prefix_commit_message,
            command=config.command,
        )

    @property
    def registry(self) -> PrefixRegistry:
        return PrefixRegistry(self.prefixes)

    @property
    def remote_stable(self) -> str:
        return self.remote_ref(self.stable)

    def remote_ref(self, branch: str) -> str:
        return f"{self.origin}/{branch}"

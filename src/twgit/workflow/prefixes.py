"""Branch types and the prefix registry that names them."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum

from twgit.core.errors import ConfigurationError

__all__ = ["BranchType", "PrefixRegistry"]


class BranchType(str, Enum):
    """Semantic role of a ref, derived from its naming prefix."""

    FEATURE = "feature"
    RELEASE = "release"
    HOTFIX = "hotfix"
    DEMO = "demo"
    TAG = "tag"

    def __str__(self) -> str:
        return self.value


# Classification order.  TAG is last: it is also the fallback.
CLASSIFICATION_ORDER: tuple[BranchType, ...] = (
    BranchType.FEATURE,
    BranchType.RELEASE,
    BranchType.HOTFIX,
    BranchType.DEMO,
    BranchType.TAG,
)


class PrefixRegistry:
    """Immutable mapping of branch types to naming prefixes.

    Classification walks ``CLASSIFICATION_ORDER`` and returns the first type
    whose prefix starts the name.  A name matching nothing is reported as a
    ``TAG``, so an unprefixed branch cannot be told apart from a malformed tag
    name.  That ambiguity is part of the naming convention.
    """

    def __init__(self, prefixes: Mapping[str, str]) -> None:
        table: list[tuple[BranchType, str]] = []
        for branch_type in CLASSIFICATION_ORDER:
            prefix = prefixes.get(branch_type.value)
            if prefix:
                table.append((branch_type, prefix))
        self._table = tuple(table)

    @property
    def entries(self) -> tuple[tuple[BranchType, str], ...]:
        return self._table

    def prefixes(self) -> list[str]:
        return [prefix for _, prefix in self._table]

    def resolve_prefix(self, branch_type: BranchType | str) -> str:
        branch_type = BranchType(branch_type)
        for candidate, prefix in self._table:
            if candidate is branch_type:
                return prefix
        raise ConfigurationError(f'No prefix defined for "{branch_type}" branch.')

    def classify(self, branch_name: str) -> BranchType:
        for branch_type, prefix in self._table:
            if branch_name.startswith(prefix):
                return branch_type
        return BranchType.TAG

    def is_type(self, branch_name: str, branch_type: BranchType | str) -> bool:
        return branch_name.startswith(self.resolve_prefix(branch_type))

    def strip_prefix(self, name: str, branch_type: BranchType | str) -> str:
        prefix = self.resolve_prefix(branch_type)
        return re.sub(f"^{re.escape(prefix)}", "", name, count=1)

    def build_ref_name(self, name: str, branch_type: BranchType | str) -> str:
        return f"{self.resolve_prefix(branch_type)}{name}"

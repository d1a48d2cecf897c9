"""Branching workflow engine: naming, comparison, tags, subjects and guards."""

from .audit import BranchAuditor
from .comparator import BranchComparator, ComparisonResult
from .context import WorkflowContext
from .orchestrator import BranchSummary, StartOutcome, StartResult, WorkflowOrchestrator
from .prefixes import BranchType, PrefixRegistry
from .protocols import CommandRunner, IssueConnector, Reporter
from .subjects import FeatureSubjectCache, subject_cache_path
from .versions import BumpType, TagResolver, bump_version, validate_tag_name

__all__ = [
    "BranchAuditor",
    "BranchComparator",
    "BranchSummary",
    "BranchType",
    "BumpType",
    "CommandRunner",
    "ComparisonResult",
    "FeatureSubjectCache",
    "IssueConnector",
    "PrefixRegistry",
    "Reporter",
    "StartOutcome",
    "StartResult",
    "TagResolver",
    "WorkflowContext",
    "WorkflowOrchestrator",
    "bump_version",
    "subject_cache_path",
    "validate_tag_name",
]

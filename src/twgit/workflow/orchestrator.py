"""Guarded lifecycle actions for feature, release, hotfix and demo branches.

Every public action runs its guards in a fixed order and stops at the first
failing one.  Mutating git commands only run once all guards have passed, so
a failure leaves the repository as it was; nothing is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from twgit.core.constants import TWGIT_DIRNAME
from twgit.core.errors import WorkflowError
from twgit.core.git import Git

from .audit import BranchAuditor
from .comparator import BranchComparator, ComparisonResult
from .context import WorkflowContext
from .prefixes import BranchType
from .protocols import Reporter
from .subjects import FeatureSubjectCache
from .versions import BumpType, TagResolver

__all__ = ["BranchSummary", "StartOutcome", "StartResult", "WorkflowOrchestrator"]

logger = logging.getLogger(__name__)


class StartOutcome(str, Enum):
    RESUMED = "resumed"
    TRACKED = "tracked"
    CREATED = "created"
    LOCAL_ONLY = "local_only"


@dataclass
class StartResult:
    branch: str
    outcome: StartOutcome
    status: ComparisonResult | None = None
    tags_not_merged: list[str] = field(default_factory=list)


@dataclass
class BranchSummary:
    name: str
    branch_type: BranchType
    origin_tag: str | None
    subject: str
    excerpt: list[str]
    tags_not_merged: list[str]


class WorkflowOrchestrator:
    """Compose guards and git actions into the workflow's lifecycle steps."""

    def __init__(
        self,
        context: WorkflowContext,
        git: Git,
        reporter: Reporter,
        subjects: FeatureSubjectCache | None = None,
    ) -> None:
        self.context = context
        self.git = git
        self.reporter = reporter
        self.subjects = subjects
        self.registry = context.registry
        self.comparator = BranchComparator(git)
        self.tags = TagResolver(git, self.registry)
        self.auditor = BranchAuditor(git, context)

    # ------------------------------------------------------------------
    # Queries

    def branch_exists(self, branch: str, remote: bool = False) -> bool:
        if remote:
            return branch in self.git.remote_branches()
        return branch in self.git.local_branches()

    def branch_name(self, name: str, branch_type: BranchType) -> str:
        """Canonical branch name, whether or not ``name`` already has its prefix."""
        return self.registry.build_ref_name(self.registry.strip_prefix(name, branch_type), branch_type)

    def feature_subject(self, branch: str) -> str:
        if self.subjects is None:
            return ""
        return self.subjects.get_subject(branch)

    # ------------------------------------------------------------------
    # Guards

    def assert_valid_ref_name(self, branch: str) -> None:
        self.reporter.processing("Check valid ref name...")
        result = self.git.run(["check-ref-format", "--branch", branch], fatal=False)
        if not result.ok:
            raise WorkflowError(
                f"{branch} is not a valid reference name! See git check-ref-format for more details."
            )

    def assert_clean_working_tree(self) -> None:
        self.reporter.processing("Check clean working tree...")
        # The subject cache is local state, not a change.
        cache_entry = f"?? {TWGIT_DIRNAME}/{self.context.subject_filename}"
        if [line for line in self.git.working_tree_changes() if line != cache_entry]:
            raise WorkflowError(
                "Untracked files or changes to be committed in your working tree.",
                command="git status",
            )

    def assert_working_tree_is_not_on_delete_branch(self, branch: str) -> None:
        self.reporter.processing("Check current branch...")
        if self.git.current_branch() == branch:
            self.reporter.processing(f'Cannot delete the branch "{branch}" which you are currently on. So:')
            self.checkout_stable()

    def assert_tag_exists(self) -> str:
        self.reporter.processing("Get last tag...")
        last_tag = self.tags.last_tag()
        if not last_tag:
            raise WorkflowError("No tag exists.", command=f"{self.context.command} init <tagname>")
        self.reporter.help(f"Last tag: {last_tag}")
        return last_tag

    def assert_valid_tag_name(self, version: str) -> None:
        self.reporter.processing("Check valid tag name...")
        self.tags.validate_tag_name(version)

    def assert_new_and_valid_tag_name(self, version: str) -> str:
        self.reporter.processing("Check valid tag name...")
        tag = self.registry.build_ref_name(version, BranchType.TAG)
        self.reporter.processing(f'Check whether tag "{tag}" already exists...')
        return self.tags.validate_new_tag_name(version)

    def assert_new_local_branch(self, branch: str, branch_type: BranchType) -> StartResult | None:
        """Resume an already started branch instead of creating it.

        Returns ``None`` when the local branch does not exist yet.  A local
        branch without a remote counterpart is left untouched and reported
        as ``LOCAL_ONLY``.
        """
        self.reporter.processing("Check local branches...")
        if not self.branch_exists(branch):
            return None

        self.reporter.processing(f'Local branch "{branch}" already exists.')
        remote_branch = self.context.remote_ref(branch)
        if not self.branch_exists(remote_branch, remote=True):
            name = self.registry.strip_prefix(branch, branch_type)
            self.reporter.error(f'Remote {branch_type} "{remote_branch}" not found while local one exists.')
            self.reporter.help("Perhaps:")
            self.reporter.help("  - check the name of your branch")
            self.reporter.help(f"  - delete this out of process local branch: git branch -D {branch}")
            self.reporter.help(f"  - or force renewal: {self.context.command} {branch_type} start -d {name}")
            return StartResult(branch=branch, outcome=StartOutcome.LOCAL_ONLY)

        self.git.run(["checkout", branch], failure_message=f'Could not checkout "{branch}".')
        status = self.inform_about_branch_status(branch)
        stale = self.alert_old_branch(branch)
        return StartResult(branch=branch, outcome=StartOutcome.RESUMED, status=status, tags_not_merged=stale)

    def assert_branches_equal(self, branch: str, remote_branch: str) -> ComparisonResult:
        """Reconcile ``branch`` with ``remote_branch`` before stable operations.

        A local branch behind its remote is fast-forwarded; one ahead only
        triggers a warning; diverged histories must be merged by hand.
        """
        self.reporter.processing(f'Compare branches "{branch}" with "{remote_branch}"...')

        if not self.branch_exists(branch):
            raise WorkflowError(f"Local branch {branch} does not exist and is required.")
        if not self.branch_exists(remote_branch, remote=True):
            raise WorkflowError(f"Remote branch {remote_branch} does not exist and is required.")

        result = self.comparator.compare(branch, remote_branch)
        if result is ComparisonResult.EQUAL:
            return result

        self.reporter.warning(f"Branches {branch} and {remote_branch} have diverged.")
        if result is ComparisonResult.BEHIND_REMOTE:
            self.reporter.warning(f"And local branch {branch} may be fast-forwarded")
            self.git.run(["checkout", branch], failure_message=f'Checkout "{branch}" failed.')
            self.git.run(["merge", remote_branch], failure_message=f'Update "{branch}" failed.')
        elif result is ComparisonResult.AHEAD_OF_REMOTE:
            self.reporter.warning(f"And local branch {branch} is ahead of {remote_branch}.")
        else:
            raise WorkflowError("Branches need merging first.", command=f"git merge {remote_branch}")
        return result

    def assert_clean_stable_branch_and_checkout(self) -> None:
        stable = self.context.stable
        remote_stable = self.context.remote_stable
        self.git.run(["checkout", stable], failure_message=f'Could not check out "{stable}".')

        self.reporter.processing(f'Check health of "{stable}" branch.')
        extra = self.git.run(["log", f"{remote_stable}..{stable}", "--oneline"]).stdout_lines
        if extra:
            raise WorkflowError(
                f"Local {stable} branch is ahead of {remote_stable}. "
                f"Commits on {stable} are out of process.",
                command=f"git checkout {stable} && git reset {remote_stable}",
            )

        self.git.run(
            ["merge", remote_stable],
            failure_message=f'Could not merge "{remote_stable}" into "{stable}".',
        )

    def is_initial_author(self, branch: str, branch_type: BranchType, interactive: bool = True) -> bool:
        """Check whether the current user started the remote ``branch``."""
        self.reporter.processing("Check initial author...")
        branch_author = self.git.run(
            [
                "log",
                f"{self.context.remote_stable}..{self.context.remote_ref(branch)}",
                "--format=%an <%ae>",
                "--first-parent",
                "--no-merges",
            ],
            fatal=False,
        ).last_line
        current_author = f"{self.git.get_config('user.name')} <{self.git.get_config('user.email')}>"

        if not branch_author or branch_author == current_author:
            return True

        self.reporter.processing(
            f'Remote {branch_type} "{self.context.remote_ref(branch)}" was started by "{branch_author}".'
        )
        if interactive:
            if not self.reporter.confirm("Do you want to continue?"):
                raise WorkflowError(f"Warning, {branch_type} retrieving aborted.")
            self.reporter.help("Next time, use --silent (-s) option to disable the interactive mode!")
        return False

    # ------------------------------------------------------------------
    # Reports

    def inform_about_branch_status(self, branch: str) -> ComparisonResult:
        origin_branch = self.context.remote_ref(branch)
        result = self.comparator.compare(branch, origin_branch)

        if result is ComparisonResult.EQUAL:
            self.reporter.help(f"Local branch {branch} up-to-date with remote {origin_branch}.")
        elif result is ComparisonResult.BEHIND_REMOTE:
            self.reporter.help(f"If need be: git merge {origin_branch}")
        elif result is ComparisonResult.AHEAD_OF_REMOTE:
            self.reporter.help(f"If need be: git push {self.context.origin} {branch}")
        else:
            self.reporter.warning(f"Branches {branch} and {origin_branch} have diverged.")
            self.reporter.help(f"If need be: git merge {origin_branch}")
            self.reporter.help(f"If need be: git push {self.context.origin} {branch}")
        return result

    def alert_old_branch(self, branch: str) -> list[str]:
        not_merged = self.auditor.tags_not_merged_into(branch)
        if not_merged:
            self.reporter.warning(
                f"{len(not_merged)} tags not merged into this branch: {', '.join(not_merged)}"
            )
            last_tag = self.tags.last_tag()
            if last_tag:
                self.reporter.help(
                    f"If need be: git merge --no-ff {last_tag}, then: git push {self.context.origin} {branch}"
                )
        return not_merged

    def describe_branch(self, branch: str) -> BranchSummary:
        local_name = branch
        remote_prefix = f"{self.context.origin}/"
        if local_name.startswith(remote_prefix):
            local_name = local_name[len(remote_prefix):]
        branch_type = self.registry.classify(local_name)

        origin_tag = self.git.run(["describe", "--abbrev=0", branch], fatal=False).last_line or None
        subject = self.feature_subject(branch) if branch_type is BranchType.FEATURE else ""
        show = self.git.run(["show", branch, "--pretty=medium", "--no-patch"], fatal=False)
        excerpt = [line for line in show.stdout_lines if not line.startswith("Merge: ")][:3]

        return BranchSummary(
            name=branch,
            branch_type=branch_type,
            origin_tag=origin_tag,
            subject=subject,
            excerpt=excerpt,
            tags_not_merged=self.auditor.tags_not_merged_into(branch),
        )

    # ------------------------------------------------------------------
    # Mutating steps

    def fetch(self) -> None:
        self.reporter.processing(f"git fetch {self.context.origin} --prune")
        self.git.run(
            ["fetch", self.context.origin, "--prune"],
            failure_message=f'Could not fetch "{self.context.origin}".',
        )

    def checkout_stable(self) -> None:
        stable = self.context.stable
        if not self.branch_exists(stable):
            raise WorkflowError(f'The branch "{stable}" does not exist.')
        self.git.run(["checkout", stable], failure_message=f'Could not check out "{stable}".')

    def push_branch(self, branch: str) -> None:
        self.git.run(
            ["push", "--set-upstream", self.context.origin, branch],
            failure_message=f'Could not push {branch} local branch on "{self.context.origin}".',
        )

    def process_first_commit(self, branch: str, branch_type: BranchType, subject: str) -> None:
        message = (self.context.first_commit_message % (branch_type.value, branch, subject)).strip()
        self.git.run(
            ["commit", "--allow-empty", "-m", message],
            failure_message="Could not make initial commit.",
        )

    def create_and_push_tag(self, tag: str, comment: str) -> None:
        message = f"{self.context.prefix_commit_message} {comment}".strip()
        self.git.run(["tag", "-a", tag, "-m", message], failure_message=f"Could not create tag {tag}.")
        self.git.run(
            ["push", "--tags", self.context.origin, self.context.stable],
            failure_message=f'Could not push "{self.context.stable}" on "{self.context.origin}".',
        )

    def remove_local_branch(self, branch: str) -> bool:
        if not self.branch_exists(branch):
            self.reporter.processing(f'Local branch "{branch}" not found.')
            return False
        result = self.git.run(
            ["branch", "-D", branch],
            failure_message=f'Remove local branch "{branch}" failed.',
            fatal=False,
        )
        if not result.ok:
            self.reporter.warning(f'Remove local branch "{branch}" failed.')
        return result.ok

    def remove_remote_branch(self, branch: str) -> bool:
        remote_branch = self.context.remote_ref(branch)
        if not self.branch_exists(remote_branch, remote=True):
            self.reporter.warning(f'Remote branch "{remote_branch}" not found.')
            return False
        result = self.git.run(
            ["push", self.context.origin, f":{branch}"],
            failure_message=f'Delete remote branch "{remote_branch}" failed.',
            fatal=False,
        )
        if not result.ok:
            self.reporter.warning(f'Delete remote branch "{remote_branch}" failed.')
        return result.ok

    # ------------------------------------------------------------------
    # Lifecycle actions

    def start_simple_branch(
        self,
        branch_type: BranchType | str,
        name: str,
        delete_local: bool = False,
        interactive: bool = False,
    ) -> StartResult:
        branch_type = BranchType(branch_type)
        branch = self.branch_name(name, branch_type)
        remote_branch = self.context.remote_ref(branch)

        self.assert_valid_ref_name(branch)
        self.assert_clean_working_tree()
        self.fetch()

        if delete_local:
            if self.branch_exists(branch):
                self.assert_working_tree_is_not_on_delete_branch(branch)
                self.remove_local_branch(branch)
        else:
            resumed = self.assert_new_local_branch(branch, branch_type)
            if resumed is not None:
                return resumed

        self.reporter.processing(f"Check remote {branch_type}s...")
        status = None
        if self.branch_exists(remote_branch, remote=True):
            self.reporter.processing(f'Remote {branch_type} "{remote_branch}" detected.')
            self.is_initial_author(branch, branch_type, interactive=interactive)
            self.git.run(
                ["checkout", "--track", "-b", branch, remote_branch],
                failure_message=f'Could not check out {branch_type} "{remote_branch}".',
            )
            outcome = StartOutcome.TRACKED
        else:
            last_tag = self.assert_tag_exists()
            self.git.run(
                ["checkout", "-b", branch, f"tags/{last_tag}"],
                failure_message=f'Could not check out tag "{last_tag}".',
            )
            subject = self.feature_subject(branch) if branch_type is BranchType.FEATURE else ""
            self.process_first_commit(branch, branch_type, subject)
            self.push_branch(branch)
            status = self.inform_about_branch_status(branch)
            outcome = StartOutcome.CREATED

        logger.debug("%s %s started: %s", branch_type, branch, outcome.value)
        stale = self.alert_old_branch(branch)
        return StartResult(branch=branch, outcome=outcome, status=status, tags_not_merged=stale)

    def start_release(
        self,
        name: str | None = None,
        bump: BumpType | str = BumpType.MINOR,
        delete_local: bool = False,
        interactive: bool = False,
    ) -> StartResult:
        version = name or self.tags.next_version(bump)
        version = self.registry.strip_prefix(version, BranchType.RELEASE)
        self.assert_valid_tag_name(version)

        current = self.auditor.current_release_in_progress()
        branch = self.registry.build_ref_name(version, BranchType.RELEASE)
        if current and current != branch:
            current_version = self.registry.strip_prefix(current, BranchType.RELEASE)
            raise WorkflowError(
                "No more than one release is authorized at the same time!",
                command=f"{self.context.command} release start {current_version}",
            )
        return self.start_simple_branch(BranchType.RELEASE, version, delete_local, interactive)

    def start_hotfix(self, delete_local: bool = False, interactive: bool = False) -> StartResult:
        hotfixes = self.auditor.hotfixes_in_progress()
        if hotfixes:
            remote_prefix = f"{self.context.origin}/"
            version = self.registry.strip_prefix(hotfixes[0][len(remote_prefix):], BranchType.HOTFIX)
        else:
            version = self.tags.next_version(BumpType.REVISION)
        return self.start_simple_branch(BranchType.HOTFIX, version, delete_local, interactive)

    def push_feature(self) -> str:
        branch = self.git.current_branch()
        if not self.registry.is_type(branch, BranchType.FEATURE):
            raise WorkflowError("You must be in a feature to launch this command.")
        self.push_branch(branch)
        return branch

    def remove_branch(self, branch: str) -> None:
        self.assert_valid_ref_name(branch)
        self.assert_clean_working_tree()
        self.assert_working_tree_is_not_on_delete_branch(branch)

        self.fetch()
        self.remove_local_branch(branch)
        self.remove_remote_branch(branch)

    def remove_simple_branch(self, branch_type: BranchType | str, name: str) -> str:
        branch = self.branch_name(name, BranchType(branch_type))
        self.remove_branch(branch)
        return branch

    def finish_branch(self, branch_type: BranchType | str, name: str) -> str:
        """Merge a release or hotfix into stable, tag it and remove it.

        Returns the created tag.
        """
        branch_type = BranchType(branch_type)
        if branch_type not in (BranchType.RELEASE, BranchType.HOTFIX):
            raise WorkflowError(f"A {branch_type} cannot be finished.")

        version = self.registry.strip_prefix(name, branch_type)
        branch = self.registry.build_ref_name(version, branch_type)

        self.assert_clean_working_tree()
        self.fetch()
        tag = self.assert_new_and_valid_tag_name(version)
        self.assert_branches_equal(branch, self.context.remote_ref(branch))
        self.assert_clean_stable_branch_and_checkout()

        self.git.run(
            ["merge", "--no-ff", branch],
            failure_message=f'Could not merge "{branch}" into "{self.context.stable}".',
        )
        self.create_and_push_tag(tag, f"{branch_type.value.capitalize()} finish: {branch}")
        logger.debug("Merged %s into %s as %s", branch, self.context.stable, tag)
        self.remove_branch(branch)
        return tag

    def create_tag(self, version: str, comment: str | None = None) -> str:
        version = self.registry.strip_prefix(version, BranchType.TAG)
        self.assert_clean_working_tree()
        self.fetch()
        tag = self.assert_new_and_valid_tag_name(version)
        self.assert_clean_stable_branch_and_checkout()
        self.create_and_push_tag(tag, comment or f"Tag {tag}")
        return tag

    def initialize(self, tag_name: str, remote_url: str | None = None) -> str:
        """Prepare a repository for the workflow and create its first tag."""
        origin = self.context.origin
        stable = self.context.stable
        remote_stable = self.context.remote_stable

        if not self.git.is_inside_work_tree():
            self.reporter.processing("Initialize git repository...")
            self.git.run(["init"], failure_message="Could not initialize git repository.")

        if self.git.remote_url(origin) is None:
            if not remote_url:
                raise WorkflowError(
                    f'Remote "{origin}" is not configured.',
                    command=f"{self.context.command} init {tag_name} <url>",
                )
            self.reporter.processing(f'Add remote "{origin}" with URL {remote_url}...')
            self.git.run(["remote", "add", origin, remote_url], failure_message=f'Could not add remote "{origin}".')

        self.fetch()
        version = self.registry.strip_prefix(tag_name, BranchType.TAG)
        tag = self.assert_new_and_valid_tag_name(version)

        if self.branch_exists(remote_stable, remote=True):
            if self.branch_exists(stable):
                self.assert_clean_stable_branch_and_checkout()
            else:
                self.reporter.processing(f'Remote "{remote_stable}" detected.')
                self.git.run(
                    ["checkout", "--track", "-b", stable, remote_stable],
                    failure_message=f'Could not check out "{remote_stable}".',
                )
        else:
            if self.branch_exists(stable):
                self.git.run(["checkout", stable], failure_message=f'Could not check out "{stable}".')
            else:
                self.reporter.processing(f'Create branch "{stable}"...')
                self.git.run(["checkout", "-b", stable], failure_message=f'Could not create "{stable}".')
            if not self.git.has_commits():
                self.git.run(
                    ["commit", "--allow-empty", "-m", f"{self.context.prefix_commit_message} Init {stable}"],
                    failure_message="Could not make initial commit.",
                )
            self.push_branch(stable)

        self.create_and_push_tag(tag, "First tag.")
        return tag

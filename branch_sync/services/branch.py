"""Service: create one branch per repository and collect outcomes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

import structlog

from ..core.constants import DEFAULT_JOBS
from ..core.errors import BranchCreationFailed, GhApiError, GitHubError, RefAlreadyExists
from ..core.github_client import GitHubClient
from ..core.types import BranchCreationRequest, BranchOutcome, OutcomeStatus, Repository, RunSummary

log = structlog.get_logger(__name__)

Report = Callable[[BranchOutcome], None]


def is_ref_conflict(err: GhApiError) -> bool:
    """True when a create-ref failure means the ref is already there."""
    return err.status == 422 and "already exists" in err.message.lower()


def create_branch(client: GitHubClient, request: BranchCreationRequest) -> None:
    """Point refs/heads/<branch> at the head of the repo's current default branch.

    The default branch is looked up again here rather than taken from the
    listing, so a default branch renamed since then is followed.
    """
    owner, repo = request.owner, request.repository_name
    try:
        default_branch = client.get_default_branch(owner, repo)
        if not default_branch:
            raise GitHubError(f"{owner}/{repo} reports no default branch")
        sha = client.get_ref_sha(owner, repo, default_branch)
        if not sha:
            raise GitHubError(f"could not resolve head of {default_branch}")
    except GitHubError as e:
        raise BranchCreationFailed(repo, e) from e

    try:
        client.create_ref(owner, repo, request.ref, sha)
    except GhApiError as e:
        if is_ref_conflict(e):
            raise RefAlreadyExists(repo, request.ref) from e
        raise BranchCreationFailed(repo, e) from e
    except GitHubError as e:
        raise BranchCreationFailed(repo, e) from e


def create_branch_outcome(client: GitHubClient, request: BranchCreationRequest) -> BranchOutcome:
    repo = request.repository_name
    try:
        create_branch(client, request)
    except RefAlreadyExists:
        return BranchOutcome(repo, OutcomeStatus.already_exists, "branch already exists")
    except BranchCreationFailed as e:
        log.debug("branch_create_failed", repo=repo, error=str(e.cause))
        return BranchOutcome(repo, OutcomeStatus.failed, str(e.cause))
    except Exception as e:
        log.warning("branch_create_crashed", repo=repo, exc_info=True)
        return BranchOutcome(repo, OutcomeStatus.failed, f"{e!r}")
    return BranchOutcome(repo, OutcomeStatus.created)


def run_branch_creation(
    client: GitHubClient,
    *,
    owner: str,
    repos: Sequence[Repository],
    branch: str,
    jobs: int = DEFAULT_JOBS,
    report: Report | None = None,
) -> RunSummary:
    """Create `branch` in every repo; one repo's failure never stops the others."""
    summary = RunSummary(branch=branch)
    requests = [BranchCreationRequest(owner, r.name, branch) for r in repos]

    def _record(outcome: BranchOutcome) -> None:
        summary.outcomes.append(outcome)
        if report is not None:
            report(outcome)

    if jobs <= 1:
        for req in requests:
            _record(create_branch_outcome(client, req))
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            futures = [pool.submit(create_branch_outcome, client, req) for req in requests]
            for fut in as_completed(futures):
                _record(fut.result())
    return summary

"""Service: the whole branch-sync run, preflight to summary."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from ..config.settings import Settings
from ..core.constants import DEFAULT_JOBS, GH_BIN, GH_INSTALL_URL
from ..core.errors import PrerequisiteMissing
from ..core.github_client import GitHubClient
from ..core.types import RunSummary
from .branch import Report, run_branch_creation
from .owner import resolve_owner
from .repos import list_repositories
from .select import Prompt, Warn, prompt_checkbox, select_repositories

log = structlog.get_logger(__name__)

INSTALL_GUIDANCE = (
    f"GitHub CLI '{GH_BIN}' not found or not working. "
    f"Install it from {GH_INSTALL_URL} and run 'gh auth login'."
)


def check_prerequisite(client: GitHubClient) -> None:
    if not client.is_available():
        raise PrerequisiteMissing(INSTALL_GUIDANCE)


def sync_branch(
    settings: Settings,
    client: GitHubClient,
    *,
    branch: str,
    names: Sequence[str] | None = None,
    prompt: Prompt = prompt_checkbox,
    jobs: int = DEFAULT_JOBS,
    report: Report | None = None,
    warn: Warn | None = None,
    info: Callable[[str], None] | None = None,
) -> RunSummary | None:
    """Run the pipeline. Returns None when no repository was selected."""
    say = info or (lambda _msg: None)

    check_prerequisite(client)
    owner = resolve_owner(settings, client)

    say(f"Fetching repositories for {owner}...")
    repos = list_repositories(client, owner)
    chosen = select_repositories(repos, names, prompt=prompt, warn=warn)
    if not chosen:
        log.debug("nothing_selected", owner=owner)
        return None

    say(f"Creating branch '{branch}' in {len(chosen)} repositories...")
    return run_branch_creation(client, owner=owner, repos=chosen, branch=branch, jobs=jobs, report=report)

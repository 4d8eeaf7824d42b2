"""Service: list and normalize the repositories of an owner."""

from __future__ import annotations

from typing import Any

import structlog

from ..core.constants import DEFAULT_BRANCH, REPO_LIST_LIMIT
from ..core.errors import GitHubError, RepositoryListError
from ..core.github_client import GitHubClient
from ..core.types import Repository

log = structlog.get_logger(__name__)


def normalize_repository(raw: dict[str, Any], owner: str) -> Repository:
    """Map one `gh repo list --json` entry onto Repository.

    This is the only place that knows gh's field names.
    """
    name = raw["name"]
    branch_ref = raw.get("defaultBranchRef") or {}
    return Repository(
        name=name,
        default_branch=branch_ref.get("name") or DEFAULT_BRANCH,
        full_name=raw.get("nameWithOwner") or f"{owner}/{name}",
    )


def list_repositories(client: GitHubClient, owner: str, limit: int = REPO_LIST_LIMIT) -> list[Repository]:
    try:
        raw_repos = client.list_repositories(owner, limit=limit)
        repos = [normalize_repository(r, owner) for r in raw_repos]
    except GitHubError as e:
        raise RepositoryListError(f"Failed to fetch repositories for {owner}: {e}") from e
    except (KeyError, TypeError, AttributeError) as e:
        raise RepositoryListError(f"Unexpected repository data for {owner}: {e!r}") from e

    log.debug("repositories_listed", owner=owner, count=len(repos))
    return sorted(repos, key=lambda r: r.full_name)

"""Service: decide which account or organization to operate on."""

from __future__ import annotations

import structlog

from ..config.settings import Settings
from ..core.errors import AuthResolutionError, GitHubError
from ..core.github_client import GitHubClient

log = structlog.get_logger(__name__)


def resolve_owner(settings: Settings, client: GitHubClient) -> str:
    """Return the configured org/owner, or the login behind the gh credential."""
    if settings.explicit_owner:
        return settings.explicit_owner

    try:
        login = client.get_authenticated_login()
    except GitHubError as e:
        raise AuthResolutionError(
            f"Could not determine the authenticated GitHub user: {e}. "
            "Run 'gh auth login' or set BRANCH_SYNC_GITHUB_ORG."
        ) from e
    if not login:
        raise AuthResolutionError("gh returned no login for the authenticated user.")
    log.debug("owner_resolved", owner=login, source="gh api user")
    return login

"""Test configuration and fixtures."""

from __future__ import annotations

import threading
from typing import Any

import pytest
import structlog

from branch_sync.config.settings import Settings
from branch_sync.core.errors import GhApiError


def raw_repo(name: str, branch: str | None = "main", owner: str = "acme") -> dict[str, Any]:
    """A `gh repo list --json` entry."""
    return {
        "name": name,
        "nameWithOwner": f"{owner}/{name}",
        "defaultBranchRef": {"name": branch} if branch is not None else None,
    }


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient.

    `failures` maps a method name to an exception, or to a dict of
    repo name -> exception for per-repository methods.
    """

    def __init__(self, login: str = "octocat", repos: list[dict[str, Any]] | None = None) -> None:
        self.login = login
        self.repos = repos or []
        self.available = True
        self.default_branches: dict[str, str] = {}
        self.existing_refs: set[tuple[str, str]] = set()
        self.failures: dict[str, Any] = {}
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    def _call(self, method: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((method, *args))
        failure = self.failures.get(method)
        if isinstance(failure, dict):
            failure = failure.get(args[1]) if len(args) > 1 else None
        if failure is not None:
            raise failure

    def calls_to(self, method: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method]

    def is_available(self) -> bool:
        self.calls.append(("is_available",))
        return self.available

    def get_authenticated_login(self) -> str:
        self._call("get_authenticated_login")
        return self.login

    def list_repositories(self, owner: str, limit: int = 1000) -> list[dict[str, Any]]:
        self._call("list_repositories", owner, limit)
        return list(self.repos)

    def get_default_branch(self, owner: str, repo: str) -> str:
        self._call("get_default_branch", owner, repo)
        return self.default_branches.get(repo, "main")

    def get_ref_sha(self, owner: str, repo: str, branch: str) -> str:
        self._call("get_ref_sha", owner, repo, branch)
        return f"sha-{repo}-{branch}"

    def create_ref(self, owner: str, repo: str, ref: str, sha: str) -> dict[str, Any]:
        self._call("create_ref", owner, repo, ref, sha)
        if (repo, ref) in self.existing_refs:
            raise GhApiError(["gh", "api"], "Reference already exists", status=422)
        with self._lock:
            self.existing_refs.add((repo, ref))
        return {"ref": ref, "object": {"sha": sha}}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("BRANCH_SYNC_GITHUB_ORG", "BRANCH_SYNC_GITHUB_OWNER", "BRANCH_SYNC_GITHUB_TOKEN", "GH_TOKEN", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    return FakeGitHubClient(
        login="acme",
        repos=[raw_repo("foo"), raw_repo("bar", "develop")],
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(github_org=None, github_owner=None, github_token=None)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()

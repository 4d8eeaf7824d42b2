"""Tests for owner resolution."""

import pytest

from branch_sync.config.settings import Settings
from branch_sync.core.errors import AuthResolutionError, GhApiError
from branch_sync.services.owner import resolve_owner


def test_configured_org_skips_identity_lookup(fake_client):
    owner = resolve_owner(Settings(github_org="acme"), fake_client)
    assert owner == "acme"
    assert fake_client.calls == []


def test_org_wins_over_owner(fake_client):
    owner = resolve_owner(Settings(github_org="acme", github_owner="someone"), fake_client)
    assert owner == "acme"


def test_configured_owner_is_used_without_org(fake_client):
    assert resolve_owner(Settings(github_owner="someone"), fake_client) == "someone"
    assert fake_client.calls == []


def test_falls_back_to_authenticated_login(settings, fake_client):
    fake_client.login = "octocat"
    assert resolve_owner(settings, fake_client) == "octocat"
    assert fake_client.calls_to("get_authenticated_login")


def test_identity_failure_is_fatal(settings, fake_client):
    fake_client.failures["get_authenticated_login"] = GhApiError(["gh", "api", "user"], "Bad credentials (HTTP 401)", 401)
    with pytest.raises(AuthResolutionError, match="Bad credentials"):
        resolve_owner(settings, fake_client)


def test_empty_login_is_fatal(settings, fake_client):
    fake_client.login = ""
    with pytest.raises(AuthResolutionError):
        resolve_owner(settings, fake_client)

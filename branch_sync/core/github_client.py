"""GitHub operations backed by the gh CLI."""

from __future__ import annotations

import json
import os
import re
import shutil
import subprocess
import time
from typing import Any
from urllib.parse import quote

import structlog

from .constants import GH_BIN, GH_READ_RETRIES, GH_RETRY_DELAY_SEC, GH_TIMEOUT_SEC, REPO_LIST_LIMIT
from .errors import GhApiError

log = structlog.get_logger(__name__)

_HTTP_STATUS_RE = re.compile(r"\(HTTP (\d{3})\)")


def parse_gh_error(command: list[str], stderr: str) -> GhApiError:
    """Turn gh's stderr into a GhApiError.

    gh reports API failures as e.g. ``gh: Reference already exists (HTTP 422)``.
    """
    text = stderr.strip()
    m = _HTTP_STATUS_RE.search(text)
    status = int(m.group(1)) if m else None
    lines = [ln for ln in text.splitlines() if ln.strip()]
    message = lines[0] if lines else f"{GH_BIN} exited with an error"
    if message.startswith("gh: "):
        message = message[4:]
    return GhApiError(command, message, status=status)


class GitHubClient:
    def __init__(self, token: str | None = None) -> None:
        self.token = token

    # ---------- process helpers ----------
    def _env(self) -> dict[str, str]:
        env = os.environ.copy()
        if self.token and "GH_TOKEN" not in env and "GITHUB_TOKEN" not in env:
            env["GH_TOKEN"] = self.token
        return env

    def _run_once(self, cmd: list[str]) -> str:
        log.debug("gh_call", cmd=" ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=self._env(),
                timeout=GH_TIMEOUT_SEC,
            )
        except subprocess.TimeoutExpired as e:
            raise GhApiError(cmd, f"{GH_BIN} timed out after {GH_TIMEOUT_SEC}s", timed_out=True) from e
        except FileNotFoundError as e:
            raise GhApiError(cmd, f"{GH_BIN} not found on PATH") from e
        if proc.returncode != 0:
            raise parse_gh_error(cmd, proc.stderr)
        return proc.stdout

    def _run(self, args: list[str], *, retry: bool = False) -> Any:
        """Run gh with args and return its decoded JSON output.

        Read-only calls pass retry=True and are retried on transient errors.
        """
        cmd = [GH_BIN, *args]
        attempts = 1 + (GH_READ_RETRIES if retry else 0)
        for attempt in range(1, attempts + 1):
            try:
                out = self._run_once(cmd)
                break
            except GhApiError as e:
                if attempt == attempts or not e.transient:
                    raise
                log.debug("gh_retry", cmd=" ".join(cmd), attempt=attempt, error=e.message)
                time.sleep(GH_RETRY_DELAY_SEC * attempt)
        if not out.strip():
            return None
        try:
            return json.loads(out)
        except json.JSONDecodeError as e:
            raise GhApiError(cmd, f"unexpected output from {GH_BIN}: {out[:200]!r}") from e

    # ---------- preflight ----------
    def is_available(self) -> bool:
        if not shutil.which(GH_BIN):
            return False
        try:
            proc = subprocess.run([GH_BIN, "--version"], capture_output=True, text=True, timeout=GH_TIMEOUT_SEC)
        except (OSError, subprocess.TimeoutExpired):
            return False
        return proc.returncode == 0

    # ---------- public API ----------
    def get_authenticated_login(self) -> str:
        data = self._run(["api", "user"], retry=True)
        return (data or {}).get("login") or ""

    def list_repositories(self, owner: str, limit: int = REPO_LIST_LIMIT) -> list[dict[str, Any]]:
        data = self._run(
            [
                "repo",
                "list",
                owner,
                "--limit",
                str(limit),
                "--json",
                "name,nameWithOwner,defaultBranchRef",
            ],
            retry=True,
        )
        if not isinstance(data, list):
            raise GhApiError(["repo", "list", owner], "expected a JSON list of repositories")
        return data

    def get_default_branch(self, owner: str, repo: str) -> str:
        data = self._run(["api", f"repos/{owner}/{repo}"], retry=True)
        return (data or {}).get("default_branch") or ""

    def get_ref_sha(self, owner: str, repo: str, branch: str) -> str:
        data = self._run(["api", f"repos/{owner}/{repo}/git/ref/heads/{quote(branch, safe='/')}"], retry=True)
        return ((data or {}).get("object") or {}).get("sha") or ""

    def create_ref(self, owner: str, repo: str, ref: str, sha: str) -> dict[str, Any]:
        # writes are not retried
        return self._run(
            [
                "api",
                "--method",
                "POST",
                f"repos/{owner}/{repo}/git/refs",
                "-f",
                f"ref={ref}",
                "-f",
                f"sha={sha}",
            ]
        ) or {}

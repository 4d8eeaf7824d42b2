"""CLI entrypoint: create a branch across an owner's GitHub repositories."""

from __future__ import annotations

from typing import List

import structlog
import typer

from ..config.settings import get_settings
from ..core.constants import DEFAULT_JOBS
from ..core.errors import AuthResolutionError, PrerequisiteMissing, RepositoryListError, SelectionCancelled
from ..core.github_client import GitHubClient
from ..core.logging_config import configure_logging
from ..core.types import BranchOutcome, OutcomeStatus, RunSummary
from ..services.select import prompt_checkbox
from ..services.sync import sync_branch

log = structlog.get_logger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Create a branch across multiple GitHub repositories.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _report(outcome: BranchOutcome) -> None:
    if outcome.status is OutcomeStatus.created:
        typer.secho(f"[created] {outcome.repository}", fg=typer.colors.GREEN)
    elif outcome.status is OutcomeStatus.already_exists:
        typer.secho(f"[exists] {outcome.repository}: branch already exists", fg=typer.colors.YELLOW)
    else:
        typer.secho(f"[fail] {outcome.repository}: {outcome.reason}", err=True, fg=typer.colors.RED)


def _warn(message: str) -> None:
    typer.secho(f"Warning: {message}", err=True, fg=typer.colors.YELLOW)


def _summary_line(summary: RunSummary) -> str:
    return (
        f"Done. created={summary.count(OutcomeStatus.created)}, "
        f"exists={summary.count(OutcomeStatus.already_exists)}, "
        f"failed={summary.count(OutcomeStatus.failed)}."
    )


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def create(
    branch: str = typer.Argument(..., help="Name of the branch to create"),
    repositories: List[str] = typer.Argument(
        None, help="Repository names (omit to choose interactively)", show_default=False
    ),
    org: str | None = typer.Option(
        None, "--org", help="Owner or organization (default: BRANCH_SYNC_GITHUB_ORG, else the gh login)"
    ),
    jobs: int = typer.Option(DEFAULT_JOBS, "--jobs", "-j", min=1, help="Parallel branch creations"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """
    Create BRANCH from each repository's default branch head.
    Examples:
      branch-sync feature/login                 # pick repositories interactively
      branch-sync release/1.2 api web worker    # target repositories by name
      BRANCH_SYNC_GITHUB_ORG=acme branch-sync hotfix/cve api
    """
    configure_logging(verbose)
    s = get_settings(github_org=org) if org else get_settings()
    client = GitHubClient(token=s.github_token)

    try:
        summary = sync_branch(
            s,
            client,
            branch=branch,
            names=repositories or None,
            prompt=prompt_checkbox,
            jobs=jobs,
            report=_report,
            warn=_warn,
            info=typer.echo,
        )
    except SelectionCancelled:
        typer.secho("Operation cancelled", fg=typer.colors.YELLOW)
        raise typer.Exit(code=0) from None
    except (PrerequisiteMissing, AuthResolutionError, RepositoryListError) as e:
        typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    except Exception as e:
        log.debug("unexpected_error", branch=branch, exc_info=True)
        typer.secho(f"Error: {e!r}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from e

    if summary is None:
        typer.secho("No repositories selected", fg=typer.colors.YELLOW)
        return
    # per-repository failures are reported above and do not change the exit code
    typer.secho(_summary_line(summary), fg=typer.colors.GREEN if summary.ok else typer.colors.YELLOW)


def main() -> None:
    app()

"""Service: choose which repositories to act on."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

import structlog
import typer

from ..core.errors import SelectionCancelled
from ..core.types import Repository

log = structlog.get_logger(__name__)

Choice = tuple[str, Repository]
Prompt = Callable[[list[Choice]], list[Repository]]
Warn = Callable[[str], None]


def match_repositories(repos: Sequence[Repository], names: Sequence[str]) -> tuple[list[Repository], list[str]]:
    """Return (repos named in names, names that matched nothing).

    Matching is exact and case-sensitive. Chosen repos keep the order of
    `repos`; missing names keep the order given, without repeats.
    """
    wanted = set(names)
    chosen = [r for r in repos if r.name in wanted]
    known = {r.name for r in repos}
    missing = [n for n in dict.fromkeys(names) if n not in known]
    return chosen, missing


def build_choices(repos: Sequence[Repository]) -> list[Choice]:
    return [(r.label, r) for r in repos]


def parse_selection(answer: str, count: int) -> list[int]:
    """Parse '1,3-5' / 'all' / '' into sorted zero-based indexes."""
    answer = answer.strip().lower()
    if not answer:
        return []
    if answer in {"all", "*"}:
        return list(range(count))

    picked: set[int] = set()
    for token in re.split(r"[,\s]+", answer):
        if not token:
            continue
        m = re.fullmatch(r"(\d+)(?:-(\d+))?", token)
        if not m:
            raise ValueError(f"not a number or range: {token!r}")
        start = int(m.group(1))
        end = int(m.group(2) or start)
        if start > end:
            start, end = end, start
        if start < 1 or end > count:
            raise ValueError(f"{token} is out of range 1-{count}")
        picked.update(range(start - 1, end))
    return sorted(picked)


def prompt_checkbox(choices: list[Choice], message: str = "Select repositories") -> list[Repository]:
    """Numbered multi-select on the terminal. Ctrl-C raises SelectionCancelled."""
    if not choices:
        return []
    for i, (label, _) in enumerate(choices, start=1):
        typer.echo(f"  {i:>3}) {label}")

    while True:
        try:
            answer = typer.prompt(
                f"{message} (e.g. 1,3-5 or 'all'; blank for none)",
                default="",
                show_default=False,
            )
        except typer.Abort as e:
            raise SelectionCancelled("Selection cancelled") from e
        try:
            indexes = parse_selection(answer, len(choices))
        except ValueError as e:
            typer.secho(f"Invalid selection: {e}", err=True, fg=typer.colors.RED)
            continue
        return [choices[i][1] for i in indexes]


def select_repositories(
    repos: Sequence[Repository],
    names: Sequence[str] | None,
    prompt: Prompt = prompt_checkbox,
    warn: Warn | None = None,
) -> list[Repository]:
    if names:
        chosen, missing = match_repositories(repos, names)
        if missing:
            if warn is not None:
                warn(f"Repositories not found: {', '.join(missing)}")
            else:
                log.warning("repositories_not_found", names=missing)
        return chosen
    return list(prompt(build_choices(repos)))

"""Small types and Enums used by branch-sync."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Repository:
    """A repository as seen by the lister, already normalized."""

    name: str
    default_branch: str
    full_name: str

    @property
    def label(self) -> str:
        return f"{self.full_name} ({self.default_branch})"


@dataclass(frozen=True)
class BranchCreationRequest:
    owner: str
    repository_name: str
    branch_name: str

    @property
    def ref(self) -> str:
        return f"refs/heads/{self.branch_name}"


class OutcomeStatus(str, Enum):
    """Per-repository result of a branch creation attempt."""

    created = "created"
    already_exists = "already_exists"
    failed = "failed"


@dataclass(frozen=True)
class BranchOutcome:
    repository: str
    status: OutcomeStatus
    reason: str | None = None


@dataclass
class RunSummary:
    branch: str
    outcomes: list[BranchOutcome] = field(default_factory=list)

    def count(self, status: OutcomeStatus) -> int:
        return Counter(o.status for o in self.outcomes)[status]

    @property
    def ok(self) -> bool:
        return self.count(OutcomeStatus.failed) == 0

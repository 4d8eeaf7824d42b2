"""Exception hierarchy for branch-sync.

    BranchSyncError
    ├── PrerequisiteMissing      fatal, before any work
    ├── AuthResolutionError      fatal, owner cannot be determined
    ├── RepositoryListError      fatal, nothing to select from
    ├── SelectionCancelled       graceful stop (exit 0)
    ├── RefAlreadyExists         per repository, benign
    ├── BranchCreationFailed     per repository, reported
    └── GitHubError
        └── GhApiError           a `gh` invocation failed
"""

from __future__ import annotations


class BranchSyncError(Exception):
    pass


class PrerequisiteMissing(BranchSyncError):
    pass


class AuthResolutionError(BranchSyncError):
    pass


class RepositoryListError(BranchSyncError):
    pass


class SelectionCancelled(BranchSyncError):
    pass


class RefAlreadyExists(BranchSyncError):
    def __init__(self, repository: str, ref: str) -> None:
        self.repository = repository
        self.ref = ref
        super().__init__(f"{ref} already exists in {repository}")


class BranchCreationFailed(BranchSyncError):
    def __init__(self, repository: str, cause: BaseException) -> None:
        self.repository = repository
        self.cause = cause
        super().__init__(f"{repository}: {cause}")


class GitHubError(BranchSyncError, RuntimeError):
    pass


class GhApiError(GitHubError):
    """A `gh` call that exited non-zero or timed out.

    `status` is the HTTP status reported by gh, or None when the call never
    got one (timeout, auth problem, network error).
    """

    def __init__(
        self,
        command: list[str],
        message: str,
        status: int | None = None,
        timed_out: bool = False,
    ) -> None:
        self.command = command
        self.message = message
        self.status = status
        self.timed_out = timed_out
        super().__init__(message)

    @property
    def transient(self) -> bool:
        if self.timed_out:
            return True
        return self.status is not None and (self.status == 429 or self.status >= 500)

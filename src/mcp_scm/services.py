"""Capability interfaces implemented by every provider driver.

Each operation addresses a repository as ``"namespace/name"`` and returns
``(result, Response)``; mutations without a result body return the
``Response`` alone. A driver whose provider has no equivalent operation raises
:class:`~mcp_scm.exceptions.NotSupportedError` from that method, so callers
probe capabilities by catching that error rather than by inspecting the
driver type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .exceptions import NotSupportedError
from .models.common import Label, ListOptions, Perm, Response, User
from .models.issues import (
    Comment,
    CommentInput,
    Issue,
    IssueEvent,
    IssueInput,
    IssueListOptions,
)
from .models.repositories import (
    CombinedStatus,
    Hook,
    HookInput,
    Repository,
    Status,
    StatusInput,
)


class Service(ABC):
    """Common base for driver services."""

    driver: str = ""

    def not_supported(self, operation: str) -> NotSupportedError:
        return NotSupportedError(f"{type(self).__name__}.{operation}", self.driver)


class RepositoryService(Service):
    """Repositories, collaborators, webhooks and commit statuses."""

    @abstractmethod
    async def find(self, repo: str) -> tuple[Repository, Response]:
        """Return the repository by name."""

    @abstractmethod
    async def find_hook(self, repo: str, hook_id: str) -> tuple[Hook, Response]:
        """Return a repository webhook."""

    @abstractmethod
    async def find_perms(self, repo: str) -> tuple[Perm, Response | None]:
        """Return the current user's permissions on the repository."""

    @abstractmethod
    async def find_user_permission(self, repo: str, user: str) -> tuple[str, Response]:
        """Return the provider's permission level name for *user*."""

    @abstractmethod
    async def is_collaborator(self, repo: str, user: str) -> tuple[bool, Response]:
        """Return whether *user* has access to the repository."""

    @abstractmethod
    async def list_collaborators(self, repo: str) -> tuple[list[User], Response]:
        """Return the users with access to the repository."""

    @abstractmethod
    async def list(self, opts: ListOptions) -> tuple[list[Repository], Response]:
        """Return the repositories visible to the current user."""

    @abstractmethod
    async def list_hooks(self, repo: str, opts: ListOptions) -> tuple[list[Hook], Response]:
        """Return the repository webhooks."""

    @abstractmethod
    async def list_status(
        self, repo: str, ref: str, opts: ListOptions
    ) -> tuple[list[Status], Response]:
        """Return the commit statuses of *ref*."""

    @abstractmethod
    async def list_labels(self, repo: str, opts: ListOptions) -> tuple[list[Label], Response]:
        """Return the labels defined on the repository."""

    @abstractmethod
    async def find_combined_status(self, repo: str, ref: str) -> tuple[CombinedStatus, Response]:
        """Return the rolled-up status of *ref*."""

    @abstractmethod
    async def create_hook(self, repo: str, hook: HookInput) -> tuple[Hook, Response]:
        """Register a repository webhook."""

    @abstractmethod
    async def create_status(
        self, repo: str, ref: str, status: StatusInput
    ) -> tuple[Status, Response]:
        """Attach a commit status to *ref*."""

    @abstractmethod
    async def delete_hook(self, repo: str, hook_id: str) -> Response:
        """Delete a repository webhook."""


class IssueService(Service):
    """Issues, issue comments, labels and assignees."""

    @abstractmethod
    async def find(self, repo: str, number: int) -> tuple[Issue, Response]:
        """Return the issue by number."""

    @abstractmethod
    async def find_comment(
        self, repo: str, number: int, comment_id: int
    ) -> tuple[Comment, Response]:
        """Return an issue comment."""

    @abstractmethod
    async def list(self, repo: str, opts: IssueListOptions) -> tuple[list[Issue], Response]:
        """Return the repository issues."""

    @abstractmethod
    async def list_comments(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[Comment], Response]:
        """Return the comments of an issue."""

    @abstractmethod
    async def list_labels(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[Label], Response]:
        """Return the labels on an issue."""

    @abstractmethod
    async def list_events(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[IssueEvent], Response]:
        """Return the event timeline of an issue."""

    @abstractmethod
    async def create(self, repo: str, issue: IssueInput) -> tuple[Issue, Response]:
        """Create an issue."""

    @abstractmethod
    async def create_comment(
        self, repo: str, number: int, comment: CommentInput
    ) -> tuple[Comment, Response]:
        """Create an issue comment."""

    @abstractmethod
    async def delete_comment(self, repo: str, number: int, comment_id: int) -> Response:
        """Delete an issue comment."""

    @abstractmethod
    async def close(self, repo: str, number: int) -> Response:
        """Close an issue."""

    @abstractmethod
    async def lock(self, repo: str, number: int) -> Response:
        """Lock an issue discussion."""

    @abstractmethod
    async def unlock(self, repo: str, number: int) -> Response:
        """Unlock an issue discussion."""

    @abstractmethod
    async def add_label(self, repo: str, number: int, label: str) -> Response:
        """Add a label to an issue."""

    @abstractmethod
    async def delete_label(self, repo: str, number: int, label: str) -> Response:
        """Remove a label from an issue."""

    @abstractmethod
    async def assign_issue(self, repo: str, number: int, logins: list[str]) -> Response:
        """Assign users to an issue."""

    @abstractmethod
    async def unassign_issue(self, repo: str, number: int, logins: list[str]) -> Response:
        """Remove users from an issue's assignees."""

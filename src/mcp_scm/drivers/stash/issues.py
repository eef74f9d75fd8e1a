"""Stash issue service.

Bitbucket Server has no issue tracker; only commenting is wired up.
"""

from __future__ import annotations

from ...models.common import Label, ListOptions, Response, split_repo
from ...models.issues import (
    Comment,
    CommentInput,
    Issue,
    IssueEvent,
    IssueInput,
    IssueListOptions,
)
from ...services import IssueService
from ...transport import Transport
from .._helpers import decode_body
from . import convert
from . import models as wire


class StashIssueService(IssueService):
    driver = "stash"

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def find(self, repo: str, number: int) -> tuple[Issue, Response]:
        raise self.not_supported("find")

    async def find_comment(
        self, repo: str, number: int, comment_id: int
    ) -> tuple[Comment, Response]:
        raise self.not_supported("find_comment")

    async def list(self, repo: str, opts: IssueListOptions) -> tuple[list[Issue], Response]:
        raise self.not_supported("list")

    async def list_comments(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[Comment], Response]:
        raise self.not_supported("list_comments")

    async def list_labels(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[Label], Response]:
        raise self.not_supported("list_labels")

    async def list_events(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[IssueEvent], Response]:
        raise self.not_supported("list_events")

    async def create(self, repo: str, issue: IssueInput) -> tuple[Issue, Response]:
        raise self.not_supported("create")

    async def create_comment(
        self, repo: str, number: int, comment: CommentInput
    ) -> tuple[Comment, Response]:
        namespace, name = split_repo(repo)
        body = wire.CommentInput(text=comment.body).to_dict()
        data, res = await self._transport.do(
            "POST",
            f"rest/api/1.0/projects/{namespace}/repos/{name}/issues/{number}/comments",
            json_data=body,
        )
        return convert.convert_comment(decode_body(wire.Comment, data, res)), res

    async def delete_comment(self, repo: str, number: int, comment_id: int) -> Response:
        raise self.not_supported("delete_comment")

    async def close(self, repo: str, number: int) -> Response:
        raise self.not_supported("close")

    async def lock(self, repo: str, number: int) -> Response:
        raise self.not_supported("lock")

    async def unlock(self, repo: str, number: int) -> Response:
        raise self.not_supported("unlock")

    async def add_label(self, repo: str, number: int, label: str) -> Response:
        raise self.not_supported("add_label")

    async def delete_label(self, repo: str, number: int, label: str) -> Response:
        raise self.not_supported("delete_label")

    async def assign_issue(self, repo: str, number: int, logins: list[str]) -> Response:
        raise self.not_supported("assign_issue")

    async def unassign_issue(self, repo: str, number: int, logins: list[str]) -> Response:
        raise self.not_supported("unassign_issue")

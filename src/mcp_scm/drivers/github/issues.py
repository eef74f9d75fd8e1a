"""GitHub issue service."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ...models.common import Label, ListOptions, Response
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
from .._helpers import decode_body, decode_list
from . import convert
from . import models as wire
from .repos import encode_list_options


def encode_issue_list_options(opts: IssueListOptions) -> dict[str, Any]:
    params = encode_list_options(ListOptions(page=opts.page, size=opts.size))
    if opts.open and opts.closed:
        params["state"] = "all"
    elif opts.closed:
        params["state"] = "closed"
    elif opts.open:
        params["state"] = "open"
    return params


class GitHubIssueService(IssueService):
    driver = "github"

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def find(self, repo: str, number: int) -> tuple[Issue, Response]:
        data, res = await self._transport.do("GET", f"repos/{repo}/issues/{number}")
        return convert.convert_issue(decode_body(wire.Issue, data, res)), res

    async def find_comment(
        self, repo: str, number: int, comment_id: int
    ) -> tuple[Comment, Response]:
        # Comment ids are repository-wide on GitHub; the issue number is not part of the path.
        data, res = await self._transport.do("GET", f"repos/{repo}/issues/comments/{comment_id}")
        return convert.convert_comment(decode_body(wire.IssueComment, data, res)), res

    async def list(self, repo: str, opts: IssueListOptions) -> tuple[list[Issue], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/issues", params=encode_issue_list_options(opts)
        )
        return convert.convert_issue_list(decode_list(wire.Issue, data)), res

    async def list_comments(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[Comment], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/issues/{number}/comments", params=encode_list_options(opts)
        )
        return convert.convert_comment_list(decode_list(wire.IssueComment, data)), res

    async def list_labels(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[Label], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/issues/{number}/labels", params=encode_list_options(opts)
        )
        return convert.convert_labels(decode_list(wire.Label, data)), res

    async def list_events(
        self, repo: str, number: int, opts: ListOptions
    ) -> tuple[list[IssueEvent], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/issues/{number}/events", params=encode_list_options(opts)
        )
        return [convert.convert_issue_event(e) for e in decode_list(wire.IssueEvent, data)], res

    async def create(self, repo: str, issue: IssueInput) -> tuple[Issue, Response]:
        body = {"title": issue.title, "body": issue.body}
        data, res = await self._transport.do("POST", f"repos/{repo}/issues", json_data=body)
        return convert.convert_issue(decode_body(wire.Issue, data, res)), res

    async def create_comment(
        self, repo: str, number: int, comment: CommentInput
    ) -> tuple[Comment, Response]:
        data, res = await self._transport.do(
            "POST", f"repos/{repo}/issues/{number}/comments", json_data={"body": comment.body}
        )
        return convert.convert_comment(decode_body(wire.IssueComment, data, res)), res

    async def delete_comment(self, repo: str, number: int, comment_id: int) -> Response:
        _, res = await self._transport.do("DELETE", f"repos/{repo}/issues/comments/{comment_id}")
        return res

    async def close(self, repo: str, number: int) -> Response:
        _, res = await self._transport.do(
            "PATCH", f"repos/{repo}/issues/{number}", json_data={"state": "closed"}
        )
        return res

    async def lock(self, repo: str, number: int) -> Response:
        _, res = await self._transport.do("PUT", f"repos/{repo}/issues/{number}/lock")
        return res

    async def unlock(self, repo: str, number: int) -> Response:
        _, res = await self._transport.do("DELETE", f"repos/{repo}/issues/{number}/lock")
        return res

    async def add_label(self, repo: str, number: int, label: str) -> Response:
        _, res = await self._transport.do(
            "POST", f"repos/{repo}/issues/{number}/labels", json_data=[label]
        )
        return res

    async def delete_label(self, repo: str, number: int, label: str) -> Response:
        _, res = await self._transport.do(
            "DELETE", f"repos/{repo}/issues/{number}/labels/{quote(label, safe='')}"
        )
        return res

    async def assign_issue(self, repo: str, number: int, logins: list[str]) -> Response:
        _, res = await self._transport.do(
            "POST", f"repos/{repo}/issues/{number}/assignees", json_data={"assignees": logins}
        )
        return res

    async def unassign_issue(self, repo: str, number: int, logins: list[str]) -> Response:
        _, res = await self._transport.do(
            "DELETE", f"repos/{repo}/issues/{number}/assignees", json_data={"assignees": logins}
        )
        return res

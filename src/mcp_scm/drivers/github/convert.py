"""Conversions between GitHub wire models and shared entities."""

from __future__ import annotations

from ...models.common import Label, Perm, User
from ...models.issues import Comment, Issue, IssueEvent
from ...models.repositories import (
    CombinedStatus,
    Hook,
    HookEvents,
    HookInput,
    Repository,
    State,
    Status,
    StatusInput,
)
from .._helpers import merge_events
from . import models as wire

_STATE_FROM_GITHUB = {
    "error": State.ERROR,
    "failure": State.FAILURE,
    "pending": State.PENDING,
    "success": State.SUCCESS,
}

# GitHub has no "running"; it collapses onto "pending".
_STATE_TO_GITHUB = {
    State.PENDING: "pending",
    State.RUNNING: "pending",
    State.SUCCESS: "success",
    State.FAILURE: "failure",
}


def convert_repository(src: wire.Repository) -> Repository:
    return Repository(
        id=str(src.id),
        namespace=src.owner.login,
        name=src.name,
        full_name=src.full_name,
        private=src.private,
        link=src.html_url,
        clone=src.clone_url,
        clone_ssh=src.ssh_url,
        branch=src.default_branch,
        perm=Perm(
            pull=src.permissions.pull,
            push=src.permissions.push,
            admin=src.permissions.admin,
        ),
        created=src.created_at,
        updated=src.updated_at,
    )


def convert_repository_list(src: list[wire.Repository]) -> list[Repository]:
    return [convert_repository(r) for r in src]


def convert_hook(src: wire.Hook) -> Hook:
    return Hook(
        id=str(src.id) if src.id is not None else "",
        name=src.name,
        active=src.active,
        target=src.config.url,
        events=list(src.events),
    )


def convert_hook_list(src: list[wire.Hook]) -> list[Hook]:
    return [convert_hook(h) for h in src]


def convert_hook_events(src: HookEvents) -> list[str]:
    events = []
    if src.push:
        events.append("push")
    if src.pull_request:
        events.append("pull_request")
    if src.pull_request_comment:
        events.append("pull_request_review_comment")
    if src.issue:
        events.append("issues")
    if src.issue_comment or src.pull_request_comment:
        events.append("issue_comment")
    if src.branch or src.tag:
        events.append("create")
        events.append("delete")
    return events


def convert_hook_input(src: HookInput) -> wire.Hook:
    return wire.Hook(
        name="web",
        active=True,
        events=merge_events(src.native_events, convert_hook_events(src.events)),
        config=wire.HookConfig(url=src.target, secret=src.secret, content_type="json"),
    )


def convert_state(src: str) -> State:
    return _STATE_FROM_GITHUB.get(src, State.UNKNOWN)


def convert_from_state(src: State) -> str:
    return _STATE_TO_GITHUB.get(src, "error")


def convert_status(src: wire.Status) -> Status:
    return Status(
        state=convert_state(src.state),
        label=src.context,
        desc=src.description or "",
        target=src.target_url or "",
    )


def convert_status_list(src: list[wire.Status]) -> list[Status]:
    return [convert_status(s) for s in src]


def convert_status_input(src: StatusInput) -> wire.Status:
    return wire.Status(
        state=convert_from_state(src.state),
        context=src.label,
        description=src.desc,
        target_url=src.target,
    )


def convert_combined_status(src: wire.CombinedStatus) -> CombinedStatus:
    return CombinedStatus(
        sha=src.sha,
        state=convert_state(src.state),
        statuses=convert_status_list(src.statuses),
    )


def convert_user(src: wire.User) -> User:
    return User(
        login=src.login,
        name=src.name or "",
        email=src.email or "",
        avatar=src.avatar_url,
        link=src.html_url,
    )


def convert_users(src: list[wire.User]) -> list[User]:
    return [convert_user(u) for u in src]


def convert_label(src: wire.Label) -> Label:
    return Label(
        name=src.name,
        description=src.description or "",
        color=src.color,
        url=src.url,
    )


def convert_labels(src: list[wire.Label]) -> list[Label]:
    return [convert_label(label) for label in src]


def convert_issue(src: wire.Issue) -> Issue:
    return Issue(
        number=src.number,
        title=src.title,
        body=src.body or "",
        link=src.html_url,
        state=src.state,
        labels=[label.name for label in src.labels],
        closed=src.state == "closed",
        locked=src.locked,
        author=convert_user(src.user),
        assignees=convert_users(src.assignees),
        pull_request=src.pull_request is not None,
        created=src.created_at,
        updated=src.updated_at,
    )


def convert_issue_list(src: list[wire.Issue]) -> list[Issue]:
    return [convert_issue(i) for i in src]


def convert_comment(src: wire.IssueComment) -> Comment:
    return Comment(
        id=src.id,
        body=src.body,
        author=convert_user(src.user),
        link=src.html_url,
        created=src.created_at,
        updated=src.updated_at,
    )


def convert_comment_list(src: list[wire.IssueComment]) -> list[Comment]:
    return [convert_comment(c) for c in src]


def convert_issue_event(src: wire.IssueEvent) -> IssueEvent:
    return IssueEvent(
        event=src.event,
        actor=convert_user(src.actor) if src.actor else User(),
        label=convert_label(src.label) if src.label else None,
        created=src.created_at,
    )

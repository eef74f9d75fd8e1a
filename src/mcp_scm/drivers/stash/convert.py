"""Conversions between Stash wire models and shared entities."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from urllib.parse import urlsplit, urlunsplit

from ...models.common import User, join_repo
from ...models.issues import Comment
from ...models.repositories import Hook, HookEvents, HookInput, Repository, State, StatusInput
from .._helpers import merge_events
from . import models as wire

# Stash repositories carry no default branch.
DEFAULT_BRANCH = "master"

_STATE_FROM_STASH = {
    "FAILED": State.FAILURE,
    "INPROGRESS": State.PENDING,
    "SUCCESSFUL": State.SUCCESS,
}

# Stash knows three build states; everything that is neither in progress nor
# successful is reported as failed.
_STATE_TO_STASH = {
    State.PENDING: "INPROGRESS",
    State.RUNNING: "INPROGRESS",
    State.SUCCESS: "SUCCESSFUL",
}


def extract_link(links: list[wire.Link], name: str) -> str:
    for link in links:
        if link.name == name:
            return link.href
    return ""


def extract_self_link(links: list[wire.Link]) -> str:
    return links[0].href if links else ""


def anonymize_link(link: str) -> str:
    """Strip user credentials from a clone URL."""
    parts = urlsplit(link)
    if not parts.netloc or "@" not in parts.netloc:
        return link
    return urlunsplit(parts._replace(netloc=parts.netloc.rpartition("@")[2]))


def convert_timestamp(millis: int) -> datetime | None:
    if not millis:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def convert_repository(src: wire.Repository) -> Repository:
    return Repository(
        id=str(src.id),
        namespace=src.project.key,
        name=src.slug,
        full_name=join_repo(src.project.key, src.slug),
        private=not src.public,
        link=extract_self_link(src.links.self_),
        clone=anonymize_link(extract_link(src.links.clone, "http")),
        clone_ssh=extract_link(src.links.clone, "ssh"),
        branch=DEFAULT_BRANCH,
    )


def convert_repository_list(src: wire.Repositories) -> list[Repository]:
    return [convert_repository(r) for r in src.values]


def convert_hook(src: wire.Hook) -> Hook:
    return Hook(
        id=str(src.id),
        name=src.name,
        active=src.active,
        target=src.url,
        events=list(src.events),
    )


def convert_hook_list(src: wire.Hooks) -> list[Hook]:
    return [convert_hook(h) for h in src.values]


def convert_hook_events(src: HookEvents) -> list[str]:
    events = []
    if src.push or src.branch or src.tag:
        events.append("repo:refs_changed")
    if src.pull_request:
        events.extend(["pr:declined", "pr:modified", "pr:deleted", "pr:opened", "pr:merged"])
    if src.pull_request_comment:
        events.extend(["pr:comment:added", "pr:comment:deleted", "pr:comment:edited"])
    return events


def convert_hook_input(src: HookInput) -> wire.HookInput:
    return wire.HookInput(
        name=src.name,
        url=src.target,
        active=True,
        events=merge_events(src.native_events, convert_hook_events(src.events)),
        configuration=wire.HookConfig(secret=src.secret),
    )


def convert_state(src: str) -> State:
    return _STATE_FROM_STASH.get(src, State.UNKNOWN)


def convert_from_state(src: State) -> str:
    return _STATE_TO_STASH.get(src, "FAILED")


def convert_status_input(src: StatusInput) -> wire.Status:
    return wire.Status(
        state=convert_from_state(src.state),
        key=src.label,
        name=src.label,
        url=src.target,
        description=src.desc,
    )


def avatar_link(email: str) -> str:
    if not email:
        return ""
    digest = hashlib.md5(email.strip().lower().encode()).hexdigest()  # noqa: S324
    return f"https://www.gravatar.com/avatar/{digest}.jpg"


def convert_user(src: wire.User) -> User:
    return User(
        login=src.slug,
        name=src.display_name,
        email=src.email_address,
        avatar=avatar_link(src.email_address),
    )


def convert_participants(src: wire.Participants) -> list[User]:
    return [convert_user(p.user) for p in src.values]


def convert_comment(src: wire.Comment) -> Comment:
    return Comment(
        id=src.id,
        body=src.text,
        author=convert_user(src.author),
        created=convert_timestamp(src.created_date),
        updated=convert_timestamp(src.updated_date),
    )

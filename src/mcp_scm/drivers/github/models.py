"""GitHub REST API v3 wire models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ...models.base import ScmModel


class Owner(ScmModel):
    id: int = 0
    login: str = ""
    avatar_url: str = ""


class Permissions(ScmModel):
    admin: bool = False
    push: bool = False
    pull: bool = False


class Repository(ScmModel):
    id: int
    owner: Owner = Owner()
    name: str = ""
    full_name: str = ""
    private: bool = False
    fork: bool = False
    html_url: str = ""
    ssh_url: str = ""
    clone_url: str = ""
    default_branch: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    permissions: Permissions = Permissions()


class HookConfig(ScmModel):
    url: str = ""
    secret: str | None = None
    content_type: str = ""


class Hook(ScmModel):
    id: int | None = None
    name: str = ""
    events: list[str] = []
    active: bool = False
    config: HookConfig = HookConfig()


class Status(ScmModel):
    created_at: datetime | None = None
    updated_at: datetime | None = None
    state: str = ""
    target_url: str | None = None
    description: str | None = None
    context: str = ""


class CombinedStatus(ScmModel):
    sha: str = ""
    statuses: list[Status] = []
    state: str = ""


class User(ScmModel):
    id: int = 0
    login: str = ""
    name: str | None = None
    email: str | None = None
    avatar_url: str = ""
    html_url: str = ""


class Label(ScmModel):
    id: int = 0
    url: str = ""
    name: str = ""
    description: str | None = None
    color: str = ""


class Issue(ScmModel):
    id: int = 0
    number: int
    state: str = ""
    title: str = ""
    body: str | None = None
    html_url: str = ""
    user: User = User()
    assignees: list[User] = []
    labels: list[Label] = []
    locked: bool = False
    pull_request: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class IssueComment(ScmModel):
    id: int
    body: str = ""
    user: User = User()
    html_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class IssueEvent(ScmModel):
    event: str = ""
    actor: User | None = None
    label: Label | None = None
    created_at: datetime | None = None


class CollaboratorPermission(ScmModel):
    permission: str = ""

"""Issue and comment models."""

from __future__ import annotations

from datetime import datetime

from .base import ScmModel
from .common import Label, User


class Issue(ScmModel):
    number: int
    title: str = ""
    body: str = ""
    link: str = ""
    state: str = ""
    labels: list[str] = []
    closed: bool = False
    locked: bool = False
    author: User = User()
    assignees: list[User] = []
    pull_request: bool = False
    created: datetime | None = None
    updated: datetime | None = None


class IssueInput(ScmModel):
    title: str = ""
    body: str = ""


class IssueListOptions(ScmModel):
    page: int = 1
    size: int = 0
    open: bool = False
    closed: bool = False


class Comment(ScmModel):
    id: int
    body: str = ""
    author: User = User()
    link: str = ""
    created: datetime | None = None
    updated: datetime | None = None


class CommentInput(ScmModel):
    body: str = ""


class IssueEvent(ScmModel):
    """An entry of an issue's event timeline."""

    event: str = ""
    actor: User = User()
    label: Label | None = None
    created: datetime | None = None

"""Repository, webhook and commit status models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from .base import ScmModel
from .common import Perm


class Repository(ScmModel):
    id: str = ""
    namespace: str = ""
    name: str = ""
    full_name: str = ""
    private: bool = False
    link: str = ""
    clone: str = ""
    clone_ssh: str = ""
    branch: str = ""
    perm: Perm | None = None
    created: datetime | None = None
    updated: datetime | None = None


class Hook(ScmModel):
    id: str = ""
    name: str = ""
    active: bool = False
    target: str = ""
    events: list[str] = []


class HookEvents(ScmModel):
    """Provider-independent webhook event selection."""

    push: bool = False
    pull_request: bool = False
    pull_request_comment: bool = False
    issue: bool = False
    issue_comment: bool = False
    branch: bool = False
    tag: bool = False


class HookInput(ScmModel):
    name: str = ""
    target: str = ""
    secret: str = ""
    events: HookEvents = HookEvents()
    native_events: list[str] = []


class State(str, Enum):
    UNKNOWN = "unknown"
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


class Status(ScmModel):
    state: State = State.UNKNOWN
    label: str = ""
    desc: str = ""
    target: str = ""


class StatusInput(ScmModel):
    state: State = State.UNKNOWN
    label: str = ""
    desc: str = ""
    target: str = ""


class CombinedStatus(ScmModel):
    sha: str = ""
    state: State = State.UNKNOWN
    statuses: list[Status] = []

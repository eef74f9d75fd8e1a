"""Bitbucket Server (Stash) REST API 1.0 wire models."""

from __future__ import annotations

from pydantic import Field

from ...models.base import ScmModel


class Link(ScmModel):
    href: str = ""
    name: str = ""


class ProjectLinks(ScmModel):
    self_: list[Link] = Field(default=[], alias="self")


class Project(ScmModel):
    key: str = ""
    id: int = 0
    name: str = ""
    public: bool = False
    type: str = ""
    links: ProjectLinks = ProjectLinks()


class RepositoryLinks(ScmModel):
    clone: list[Link] = []
    self_: list[Link] = Field(default=[], alias="self")


class Repository(ScmModel):
    slug: str = ""
    id: int = 0
    name: str = ""
    scm_id: str = Field(default="", alias="scmId")
    state: str = ""
    status_message: str = Field(default="", alias="statusMessage")
    forkable: bool = False
    project: Project = Project()
    public: bool = False
    links: RepositoryLinks = RepositoryLinks()


class Pagination(ScmModel):
    """Paging block of every Stash list response."""

    start: int = 0
    size: int = 0
    limit: int = 0
    is_last_page: bool = Field(default=False, alias="isLastPage")
    next_page_start: int | None = Field(default=None, alias="nextPageStart")


class Repositories(Pagination):
    values: list[Repository] = []


class HookConfig(ScmModel):
    secret: str = ""


class Hook(ScmModel):
    id: int = 0
    name: str = ""
    created_date: int = Field(default=0, alias="createdDate")
    updated_date: int = Field(default=0, alias="updatedDate")
    events: list[str] = []
    url: str = ""
    active: bool = False
    configuration: HookConfig = HookConfig()


class Hooks(Pagination):
    values: list[Hook] = []


class HookInput(ScmModel):
    name: str = ""
    events: list[str] = []
    url: str = ""
    active: bool = False
    configuration: HookConfig = HookConfig()


class Status(ScmModel):
    state: str = ""
    key: str = ""
    name: str = ""
    url: str = ""
    description: str = ""


class User(ScmModel):
    name: str = ""
    email_address: str = Field(default="", alias="emailAddress")
    id: int = 0
    display_name: str = Field(default="", alias="displayName")
    active: bool = False
    slug: str = ""
    type: str = ""


class Participant(ScmModel):
    user: User = User()
    permission: str = ""


class Participants(Pagination):
    values: list[Participant] = []


class Comment(ScmModel):
    id: int
    version: int = 0
    text: str = ""
    author: User = User()
    created_date: int = Field(default=0, alias="createdDate")
    updated_date: int = Field(default=0, alias="updatedDate")


class CommentInput(ScmModel):
    text: str = ""

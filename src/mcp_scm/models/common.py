"""Common SCM models shared across resource families."""

from __future__ import annotations

from .base import ScmModel


def split_repo(repo: str) -> tuple[str, str]:
    """Split a ``namespace/name`` identifier into its two parts.

    The split happens on the last slash so nested namespaces survive. A value
    without a slash is all name.
    """
    namespace, _, name = repo.rpartition("/")
    return namespace, name


def join_repo(namespace: str, name: str) -> str:
    if not namespace:
        return name
    return f"{namespace}/{name}"


class User(ScmModel):
    login: str = ""
    name: str = ""
    email: str = ""
    avatar: str = ""
    link: str = ""


class Label(ScmModel):
    name: str = ""
    description: str = ""
    color: str = ""
    url: str = ""


class Perm(ScmModel):
    """Repository permissions of the current user.

    Admin implies Push implies Pull by convention only. Heuristic drivers may
    under- or over-approximate.
    """

    pull: bool = False
    push: bool = False
    admin: bool = False


class ListOptions(ScmModel):
    page: int = 1
    size: int = 0


class Page(ScmModel):
    """Normalized pagination cursor. ``None`` means unset."""

    first: int | None = None
    next: int | None = None
    prev: int | None = None
    last: int | None = None


class Response(ScmModel):
    """Envelope returned alongside every result."""

    status: int = 0
    headers: dict[str, str] = {}
    page: Page = Page()

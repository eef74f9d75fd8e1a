"""Stash repository service."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ...models.common import Label, ListOptions, Perm, Response, User, split_repo
from ...models.repositories import (
    CombinedStatus,
    Hook,
    HookInput,
    Repository,
    Status,
    StatusInput,
)
from ...pagination import normalize_last_page
from ...permissions import ADMIN, WRITE, Probe, resolve_perm
from ...services import RepositoryService
from ...transport import Transport
from .._helpers import decode_body
from . import convert
from . import models as wire

DEFAULT_LIMIT = 25
COLLABORATOR_LIMIT = 1000


def encode_list_options(opts: ListOptions) -> dict[str, Any]:
    limit = opts.size or DEFAULT_LIMIT
    params: dict[str, Any] = {"limit": limit}
    if opts.page > 1:
        params["start"] = (opts.page - 1) * limit
    return params


def encode_list_role_options(opts: ListOptions) -> dict[str, Any]:
    return {**encode_list_options(opts), "permission": "REPO_READ"}


def _repo_path(repo: str) -> str:
    namespace, name = split_repo(repo)
    return f"rest/api/1.0/projects/{namespace}/repos/{name}"


def _paged(res: Response, out: wire.Pagination, count: int, opts: ListOptions) -> Response:
    res.page = normalize_last_page(
        res.page, opts.page, is_last_page=out.is_last_page, count=count
    )
    return res


class StashRepositoryService(RepositoryService):
    driver = "stash"

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def find(self, repo: str) -> tuple[Repository, Response]:
        data, res = await self._transport.do("GET", _repo_path(repo))
        return convert.convert_repository(decode_body(wire.Repository, data, res)), res

    async def find_hook(self, repo: str, hook_id: str) -> tuple[Hook, Response]:
        data, res = await self._transport.do("GET", f"{_repo_path(repo)}/webhooks/{hook_id}")
        return convert.convert_hook(decode_body(wire.Hook, data, res)), res

    async def find_perms(self, repo: str) -> tuple[Perm, Response | None]:
        """Infer permissions; Stash has no endpoint for the current user's access.

        Listing webhooks requires repository admin rights, and the repository
        list filtered by ``REPO_WRITE`` contains the repository only when the
        user can push. Both are heuristics; see :mod:`mcp_scm.permissions`.
        """

        async def can_list_hooks() -> bool:
            await self.list_hooks(repo, ListOptions())
            return True

        async def can_write() -> bool:
            _, name = split_repo(repo)
            writable = await self._list_write(repo)
            return any(r.name == name for r in writable)

        perm = await resolve_perm(
            lambda: self.find(repo),
            [
                Probe("list_hooks", can_list_hooks, ADMIN),
                Probe("repo_write", can_write, WRITE),
            ],
        )
        return perm, None

    async def find_user_permission(self, repo: str, user: str) -> tuple[str, Response]:
        raise self.not_supported("find_user_permission")

    async def is_collaborator(self, repo: str, user: str) -> tuple[bool, Response]:
        users, res = await self.list_collaborators(repo)
        return any(u.name == user or u.login == user for u in users), res

    async def list_collaborators(self, repo: str) -> tuple[list[User], Response]:
        opts = ListOptions(size=COLLABORATOR_LIMIT)
        data, res = await self._transport.do(
            "GET", f"{_repo_path(repo)}/permissions/users", params=encode_list_options(opts)
        )
        out = decode_body(wire.Participants, data, res)
        return convert.convert_participants(out), _paged(res, out, len(out.values), opts)

    async def list(self, opts: ListOptions) -> tuple[list[Repository], Response]:
        data, res = await self._transport.do(
            "GET", "rest/api/1.0/repos", params=encode_list_role_options(opts)
        )
        out = decode_body(wire.Repositories, data, res)
        return convert.convert_repository_list(out), _paged(res, out, len(out.values), opts)

    async def _list_write(self, repo: str) -> list[Repository]:
        namespace, name = split_repo(repo)
        params = {
            "limit": COLLABORATOR_LIMIT,
            "permission": "REPO_WRITE",
            "project": namespace,
            "name": name,
        }
        data, res = await self._transport.do("GET", "rest/api/1.0/repos", params=params)
        return convert.convert_repository_list(decode_body(wire.Repositories, data, res))

    async def list_hooks(self, repo: str, opts: ListOptions) -> tuple[list[Hook], Response]:
        data, res = await self._transport.do(
            "GET", f"{_repo_path(repo)}/webhooks", params=encode_list_options(opts)
        )
        out = decode_body(wire.Hooks, data, res)
        return convert.convert_hook_list(out), _paged(res, out, len(out.values), opts)

    async def list_status(
        self, repo: str, ref: str, opts: ListOptions
    ) -> tuple[list[Status], Response]:
        raise self.not_supported("list_status")

    async def list_labels(self, repo: str, opts: ListOptions) -> tuple[list[Label], Response]:
        raise self.not_supported("list_labels")

    async def find_combined_status(self, repo: str, ref: str) -> tuple[CombinedStatus, Response]:
        raise self.not_supported("find_combined_status")

    async def create_hook(self, repo: str, hook: HookInput) -> tuple[Hook, Response]:
        body = convert.convert_hook_input(hook).model_dump(mode="json", by_alias=True)
        data, res = await self._transport.do(
            "POST", f"{_repo_path(repo)}/webhooks", json_data=body
        )
        return convert.convert_hook(decode_body(wire.Hook, data, res)), res

    async def create_status(
        self, repo: str, ref: str, status: StatusInput
    ) -> tuple[Status, Response]:
        # The build-status endpoint answers 204 without a body.
        body = convert.convert_status_input(status).to_dict()
        _, res = await self._transport.do(
            "POST", f"rest/build-status/1.0/commits/{quote(ref, safe='')}", json_data=body
        )
        return Status(
            state=status.state,
            label=status.label,
            desc=status.desc,
            target=status.target,
        ), res

    async def delete_hook(self, repo: str, hook_id: str) -> Response:
        _, res = await self._transport.do("DELETE", f"{_repo_path(repo)}/webhooks/{hook_id}")
        return res

"""GitHub repository service."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ...exceptions import ScmNotFoundError, UnexpectedStatusError
from ...models.common import Label, ListOptions, Perm, Response, User
from ...models.repositories import (
    CombinedStatus,
    Hook,
    HookInput,
    Repository,
    Status,
    StatusInput,
)
from ...services import RepositoryService
from ...transport import Transport
from .._helpers import decode_body, decode_list
from . import convert
from . import models as wire

# Enables the nested teams preview on the collaborator endpoints.
HELLCAT_PREVIEW = "application/vnd.github.hellcat-preview+json"


def encode_list_options(opts: ListOptions) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if opts.page:
        params["page"] = opts.page
    if opts.size:
        params["per_page"] = opts.size
    return params


class GitHubRepositoryService(RepositoryService):
    driver = "github"

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def find(self, repo: str) -> tuple[Repository, Response]:
        data, res = await self._transport.do("GET", f"repos/{repo}")
        return convert.convert_repository(decode_body(wire.Repository, data, res)), res

    async def find_hook(self, repo: str, hook_id: str) -> tuple[Hook, Response]:
        data, res = await self._transport.do("GET", f"repos/{repo}/hooks/{hook_id}")
        return convert.convert_hook(decode_body(wire.Hook, data, res)), res

    async def find_perms(self, repo: str) -> tuple[Perm, Response]:
        found, res = await self.find(repo)
        return found.perm or Perm(), res

    async def find_user_permission(self, repo: str, user: str) -> tuple[str, Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/collaborators/{quote(user, safe='')}/permission"
        )
        return decode_body(wire.CollaboratorPermission, data, res).permission, res

    async def is_collaborator(self, repo: str, user: str) -> tuple[bool, Response]:
        """Return whether *user* is a collaborator of *repo*.

        For organization-owned repositories the collaborators include outside
        collaborators, direct and team members, and organization owners.
        GitHub answers 204 for a collaborator and 404 otherwise.
        """
        try:
            _, res = await self._transport.do(
                "GET",
                f"repos/{repo}/collaborators/{quote(user, safe='')}",
                headers={"Accept": HELLCAT_PREVIEW},
            )
        except ScmNotFoundError:
            return False, Response(status=404)
        if res.status == 204:
            return True, res
        raise UnexpectedStatusError(res.status)

    async def list_collaborators(self, repo: str) -> tuple[list[User], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/collaborators", headers={"Accept": HELLCAT_PREVIEW}
        )
        return convert.convert_users(decode_list(wire.User, data)), res

    async def list(self, opts: ListOptions) -> tuple[list[Repository], Response]:
        data, res = await self._transport.do(
            "GET", "user/repos", params=encode_list_options(opts)
        )
        return convert.convert_repository_list(decode_list(wire.Repository, data)), res

    async def list_hooks(self, repo: str, opts: ListOptions) -> tuple[list[Hook], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/hooks", params=encode_list_options(opts)
        )
        return convert.convert_hook_list(decode_list(wire.Hook, data)), res

    async def list_status(
        self, repo: str, ref: str, opts: ListOptions
    ) -> tuple[list[Status], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/statuses/{quote(ref, safe='')}", params=encode_list_options(opts)
        )
        return convert.convert_status_list(decode_list(wire.Status, data)), res

    async def list_labels(self, repo: str, opts: ListOptions) -> tuple[list[Label], Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/labels", params=encode_list_options(opts)
        )
        return convert.convert_labels(decode_list(wire.Label, data)), res

    async def find_combined_status(self, repo: str, ref: str) -> tuple[CombinedStatus, Response]:
        data, res = await self._transport.do(
            "GET", f"repos/{repo}/commits/{quote(ref, safe='')}/status"
        )
        return convert.convert_combined_status(decode_body(wire.CombinedStatus, data, res)), res

    async def create_hook(self, repo: str, hook: HookInput) -> tuple[Hook, Response]:
        body = convert.convert_hook_input(hook).to_dict()
        data, res = await self._transport.do("POST", f"repos/{repo}/hooks", json_data=body)
        return convert.convert_hook(decode_body(wire.Hook, data, res)), res

    async def create_status(
        self, repo: str, ref: str, status: StatusInput
    ) -> tuple[Status, Response]:
        body = convert.convert_status_input(status).to_dict()
        data, res = await self._transport.do(
            "POST", f"repos/{repo}/statuses/{quote(ref, safe='')}", json_data=body
        )
        return convert.convert_status(decode_body(wire.Status, data, res)), res

    async def delete_hook(self, repo: str, hook_id: str) -> Response:
        _, res = await self._transport.do("DELETE", f"repos/{repo}/hooks/{hook_id}")
        return res

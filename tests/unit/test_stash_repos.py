"""Tests for the Stash repository service."""

from __future__ import annotations

import json

import httpx
import pytest
from httpx import Response

from mcp_scm.exceptions import NotSupportedError, UnexpectedStatusError
from mcp_scm.models.common import ListOptions, Perm
from mcp_scm.models.repositories import HookEvents, HookInput, State, StatusInput
from mcp_scm.pagination import iterate_pages

REPO = "PRJ/my-repo"
REPO_PATH = "/rest/api/1.0/projects/PRJ/repos/my-repo"

REPO_JSON = {
    "slug": "my-repo",
    "id": 1,
    "name": "My repo",
    "scmId": "git",
    "state": "AVAILABLE",
    "forkable": True,
    "project": {"key": "PRJ", "id": 1, "name": "My Project", "public": False, "type": "NORMAL"},
    "public": False,
    "links": {
        "clone": [
            {"href": "https://admin@stash.example.com/scm/prj/my-repo.git", "name": "http"},
            {"href": "ssh://git@stash.example.com:7999/prj/my-repo.git", "name": "ssh"},
        ],
        "self": [{"href": "https://stash.example.com/projects/PRJ/repos/my-repo/browse"}],
    },
}


def _hook(hook_id: int, active: bool) -> dict:
    return {
        "id": hook_id,
        "name": f"hook-{hook_id}",
        "createdDate": 1513106011000,
        "updatedDate": 1513106011000,
        "events": ["repo:refs_changed"],
        "url": "https://ci.example.com/hook",
        "active": active,
        "configuration": {"secret": ""},
    }


def _page(values: list, *, last: bool, start: int = 0) -> dict:
    return {"size": len(values), "limit": 25, "start": start, "isLastPage": last, "values": values}


class TestFind:
    async def test_find(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(200, json=REPO_JSON))
        repo, res = await stash.repositories.find(REPO)
        assert res.status == 200
        assert repo.namespace == "PRJ"
        assert repo.name == "my-repo"
        assert repo.clone == "https://stash.example.com/scm/prj/my-repo.git"
        assert repo.perm is None

    async def test_find_without_body(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(204))
        with pytest.raises(UnexpectedStatusError) as exc_info:
            await stash.repositories.find(REPO)
        assert exc_info.value.status_code == 204

    async def test_list_paginates(self, stash, stash_api):
        route = stash_api.get("/rest/api/1.0/repos").mock(
            return_value=Response(200, json=_page([REPO_JSON], last=False, start=25))
        )
        repos, res = await stash.repositories.list(ListOptions(page=2, size=25))
        assert len(repos) == 1
        assert res.page.first == 1
        assert res.page.next == 3
        params = route.calls.last.request.url.params
        assert params["start"] == "25"
        assert params["limit"] == "25"
        assert params["permission"] == "REPO_READ"


class TestHooks:
    async def test_list_hooks_active_and_inactive(self, stash, stash_api):
        stash_api.get(f"{REPO_PATH}/webhooks").mock(
            return_value=Response(200, json=_page([_hook(1, True), _hook(2, False)], last=True))
        )
        hooks, res = await stash.repositories.list_hooks(REPO, ListOptions())
        assert len(hooks) == 2
        assert [h.active for h in hooks] == [True, False]
        assert hooks[0].id == "1"
        assert res.page.next is None

    async def test_iterate_hook_pages(self, stash, stash_api):
        route = stash_api.get(f"{REPO_PATH}/webhooks").mock(
            side_effect=[
                Response(200, json=_page([_hook(1, True), _hook(2, True)], last=False)),
                Response(200, json=_page([_hook(3, True), _hook(4, True)], last=False, start=2)),
                Response(200, json=_page([_hook(5, False)], last=True, start=4)),
            ]
        )
        seen = []

        async def fetch(opts: ListOptions):
            hooks, res = await stash.repositories.list_hooks(REPO, opts)
            seen.append(res.page.next)
            return hooks, res

        hooks = [h async for h in iterate_pages(fetch, ListOptions(size=2))]
        assert [h.id for h in hooks] == ["1", "2", "3", "4", "5"]
        assert route.call_count == 3
        assert seen == [2, 3, None]
        starts = [call.request.url.params.get("start") for call in route.calls]
        assert starts == [None, "2", "4"]

    async def test_find_hook(self, stash, stash_api):
        stash_api.get(f"{REPO_PATH}/webhooks/1").mock(
            return_value=Response(200, json=_hook(1, True))
        )
        hook, _ = await stash.repositories.find_hook(REPO, "1")
        assert hook.name == "hook-1"
        assert hook.target == "https://ci.example.com/hook"

    async def test_create_hook_without_body(self, stash, stash_api):
        stash_api.post(f"{REPO_PATH}/webhooks").mock(return_value=Response(201))
        with pytest.raises(UnexpectedStatusError):
            await stash.repositories.create_hook(
                REPO, HookInput(target="https://ci.example.com/hook")
            )

    async def test_create_hook_event_mapping(self, stash, stash_api):
        route = stash_api.post(f"{REPO_PATH}/webhooks").mock(
            return_value=Response(201, json=_hook(9, True))
        )
        hook, _ = await stash.repositories.create_hook(
            REPO,
            HookInput(
                name="drone",
                target="https://ci.example.com/hook",
                secret="s3cr3t",
                events=HookEvents(push=True, pull_request_comment=True),
            ),
        )
        assert hook.id == "9"
        body = json.loads(route.calls.last.request.content)
        assert body["events"] == [
            "repo:refs_changed",
            "pr:comment:added",
            "pr:comment:deleted",
            "pr:comment:edited",
        ]
        assert body["name"] == "drone"
        assert body["url"] == "https://ci.example.com/hook"
        assert body["active"] is True
        assert body["configuration"] == {"secret": "s3cr3t"}

    async def test_create_hook_native_events_first(self, stash, stash_api):
        route = stash_api.post(f"{REPO_PATH}/webhooks").mock(
            return_value=Response(201, json=_hook(9, True))
        )
        await stash.repositories.create_hook(
            REPO,
            HookInput(
                target="https://ci.example.com/hook",
                events=HookEvents(tag=True),
                native_events=["repo:refs_changed", "repo:forked"],
            ),
        )
        body = json.loads(route.calls.last.request.content)
        assert body["events"] == ["repo:refs_changed", "repo:forked"]

    async def test_delete_hook(self, stash, stash_api):
        stash_api.delete(f"{REPO_PATH}/webhooks/1").mock(return_value=Response(204))
        res = await stash.repositories.delete_hook(REPO, "1")
        assert res.status == 204


class TestStatus:
    async def test_create_status(self, stash, stash_api):
        route = stash_api.post("/rest/build-status/1.0/commits/6dcb09b").mock(
            return_value=Response(204)
        )
        status, res = await stash.repositories.create_status(
            REPO,
            "6dcb09b",
            StatusInput(
                state=State.RUNNING,
                label="drone",
                desc="Build is running",
                target="https://ci.example.com/1",
            ),
        )
        assert res.status == 204
        assert status.state == State.RUNNING
        assert status.label == "drone"
        assert json.loads(route.calls.last.request.content) == {
            "state": "INPROGRESS",
            "key": "drone",
            "name": "drone",
            "url": "https://ci.example.com/1",
            "description": "Build is running",
        }


    async def test_create_status_quotes_ref(self, stash, stash_api):
        route = stash_api.route(method="POST").mock(return_value=Response(204))
        await stash.repositories.create_status(REPO, "refs/heads/main", StatusInput(label="ci"))
        raw_path = route.calls.last.request.url.raw_path
        assert raw_path == b"/rest/build-status/1.0/commits/refs%2Fheads%2Fmain"


class TestCollaborators:
    async def test_list_collaborators(self, stash, stash_api):
        route = stash_api.get(f"{REPO_PATH}/permissions/users").mock(
            return_value=Response(
                200,
                json=_page(
                    [
                        {
                            "user": {
                                "name": "jcitizen",
                                "emailAddress": "jane@example.com",
                                "id": 101,
                                "displayName": "Jane Citizen",
                                "active": True,
                                "slug": "jcitizen",
                                "type": "NORMAL",
                            },
                            "permission": "REPO_ADMIN",
                        }
                    ],
                    last=True,
                ),
            )
        )
        users, res = await stash.repositories.list_collaborators(REPO)
        assert users[0].login == "jcitizen"
        assert users[0].name == "Jane Citizen"
        assert users[0].email == "jane@example.com"
        assert users[0].avatar.startswith("https://www.gravatar.com/avatar/")
        assert res.page.next is None
        assert route.calls.last.request.url.params["limit"] == "1000"

    async def test_is_collaborator(self, stash, stash_api):
        stash_api.get(f"{REPO_PATH}/permissions/users").mock(
            return_value=Response(
                200,
                json=_page(
                    [{"user": {"slug": "jcitizen", "displayName": "Jane Citizen"}}], last=True
                ),
            )
        )
        yes, _ = await stash.repositories.is_collaborator(REPO, "jcitizen")
        also, _ = await stash.repositories.is_collaborator(REPO, "Jane Citizen")
        no, _ = await stash.repositories.is_collaborator(REPO, "mallory")
        assert (yes, also, no) == (True, True, False)


class TestFindPerms:
    async def test_admin_when_hooks_are_listable(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(200, json=REPO_JSON))
        stash_api.get(f"{REPO_PATH}/webhooks").mock(
            return_value=Response(200, json=_page([], last=True))
        )
        perm, res = await stash.repositories.find_perms(REPO)
        assert perm == Perm(pull=True, push=True, admin=True)
        assert res is None

    async def test_write_from_filtered_repo_list(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(200, json=REPO_JSON))
        stash_api.get(f"{REPO_PATH}/webhooks").mock(return_value=Response(401))
        route = stash_api.get("/rest/api/1.0/repos").mock(
            return_value=Response(200, json=_page([REPO_JSON], last=True))
        )
        perm, _ = await stash.repositories.find_perms(REPO)
        assert perm == Perm(pull=True, push=True, admin=False)
        params = route.calls.last.request.url.params
        assert params["permission"] == "REPO_WRITE"
        assert params["project"] == "PRJ"
        assert params["name"] == "my-repo"

    async def test_read_only_when_not_in_write_list(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(200, json=REPO_JSON))
        stash_api.get(f"{REPO_PATH}/webhooks").mock(return_value=Response(403))
        stash_api.get("/rest/api/1.0/repos").mock(
            return_value=Response(200, json=_page([], last=True))
        )
        perm, _ = await stash.repositories.find_perms(REPO)
        assert perm == Perm(pull=True)

    async def test_fails_closed_when_write_probe_errors(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(200, json=REPO_JSON))
        stash_api.get(f"{REPO_PATH}/webhooks").mock(return_value=Response(403))
        stash_api.get("/rest/api/1.0/repos").mock(return_value=Response(500))
        perm, _ = await stash.repositories.find_perms(REPO)
        assert perm == Perm(pull=True)

    async def test_no_access_when_not_found(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(404))
        perm, _ = await stash.repositories.find_perms(REPO)
        assert perm == Perm()

    async def test_transport_failure_is_raised(self, stash, stash_api):
        stash_api.get(REPO_PATH).mock(return_value=Response(200, json=REPO_JSON))
        stash_api.get(f"{REPO_PATH}/webhooks").mock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(httpx.ConnectError):
            await stash.repositories.find_perms(REPO)


class TestNotSupported:
    async def test_find_user_permission(self, stash):
        with pytest.raises(NotSupportedError) as exc_info:
            await stash.repositories.find_user_permission(REPO, "jcitizen")
        assert exc_info.value.driver == "stash"

    async def test_list_status(self, stash):
        with pytest.raises(NotSupportedError):
            await stash.repositories.list_status(REPO, "6dcb09b", ListOptions())

    async def test_find_combined_status(self, stash):
        with pytest.raises(NotSupportedError):
            await stash.repositories.find_combined_status(REPO, "6dcb09b")

    async def test_list_labels(self, stash):
        with pytest.raises(NotSupportedError):
            await stash.repositories.list_labels(REPO, ListOptions())

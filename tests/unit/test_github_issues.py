"""Tests for the GitHub issue service."""

from __future__ import annotations

import json

from httpx import Response

from mcp_scm.models.common import ListOptions
from mcp_scm.models.issues import CommentInput, IssueInput, IssueListOptions

ISSUE_JSON = {
    "id": 1,
    "number": 1347,
    "state": "open",
    "title": "Found a bug",
    "body": "I'm having a problem with this.",
    "html_url": "https://github.com/octocat/Hello-World/issues/1347",
    "user": {"id": 1, "login": "octocat", "avatar_url": "https://github.com/images/octocat.gif"},
    "assignees": [{"id": 2, "login": "hubot"}],
    "labels": [{"id": 208045946, "name": "bug", "color": "f29513"}],
    "locked": True,
    "created_at": "2011-04-22T13:33:48Z",
    "updated_at": "2011-04-22T13:33:48Z",
}

COMMENT_JSON = {
    "id": 1,
    "body": "Me too",
    "user": {"id": 1, "login": "octocat"},
    "html_url": "https://github.com/octocat/Hello-World/issues/1347#issuecomment-1",
    "created_at": "2011-04-14T16:00:49Z",
    "updated_at": "2011-04-14T16:00:49Z",
}

REPO = "octocat/Hello-World"


class TestIssues:
    async def test_find(self, github, github_api):
        github_api.get("/repos/octocat/Hello-World/issues/1347").mock(
            return_value=Response(200, json=ISSUE_JSON)
        )
        issue, _ = await github.issues.find(REPO, 1347)
        assert issue.number == 1347
        assert issue.labels == ["bug"]
        assert issue.locked is True
        assert issue.closed is False
        assert issue.pull_request is False
        assert issue.author.login == "octocat"
        assert [a.login for a in issue.assignees] == ["hubot"]

    async def test_find_pull_request_issue(self, github, github_api):
        payload = {**ISSUE_JSON, "state": "closed", "pull_request": {"url": "https://x"}}
        github_api.get("/repos/octocat/Hello-World/issues/1347").mock(
            return_value=Response(200, json=payload)
        )
        issue, _ = await github.issues.find(REPO, 1347)
        assert issue.pull_request is True
        assert issue.closed is True

    async def test_list_all_states(self, github, github_api):
        route = github_api.get("/repos/octocat/Hello-World/issues").mock(
            return_value=Response(200, json=[ISSUE_JSON])
        )
        issues, _ = await github.issues.list(REPO, IssueListOptions(open=True, closed=True))
        assert len(issues) == 1
        assert route.calls.last.request.url.params["state"] == "all"

    async def test_list_closed(self, github, github_api):
        route = github_api.get("/repos/octocat/Hello-World/issues").mock(
            return_value=Response(200, json=[])
        )
        issues, _ = await github.issues.list(REPO, IssueListOptions(closed=True))
        assert issues == []
        assert route.calls.last.request.url.params["state"] == "closed"

    async def test_create(self, github, github_api):
        route = github_api.post("/repos/octocat/Hello-World/issues").mock(
            return_value=Response(201, json=ISSUE_JSON)
        )
        issue, _ = await github.issues.create(REPO, IssueInput(title="Found a bug", body="..."))
        assert issue.number == 1347
        assert json.loads(route.calls.last.request.content) == {
            "title": "Found a bug",
            "body": "...",
        }

    async def test_close(self, github, github_api):
        route = github_api.patch("/repos/octocat/Hello-World/issues/1347").mock(
            return_value=Response(200, json={**ISSUE_JSON, "state": "closed"})
        )
        res = await github.issues.close(REPO, 1347)
        assert res.status == 200
        assert json.loads(route.calls.last.request.content) == {"state": "closed"}

    async def test_lock_and_unlock(self, github, github_api):
        github_api.put("/repos/octocat/Hello-World/issues/1347/lock").mock(
            return_value=Response(204)
        )
        github_api.delete("/repos/octocat/Hello-World/issues/1347/lock").mock(
            return_value=Response(204)
        )
        assert (await github.issues.lock(REPO, 1347)).status == 204
        assert (await github.issues.unlock(REPO, 1347)).status == 204


class TestComments:
    async def test_find_comment(self, github, github_api):
        github_api.get("/repos/octocat/Hello-World/issues/comments/1").mock(
            return_value=Response(200, json=COMMENT_JSON)
        )
        comment, _ = await github.issues.find_comment(REPO, 1347, 1)
        assert comment.id == 1
        assert comment.body == "Me too"
        assert comment.author.login == "octocat"

    async def test_list_comments(self, github, github_api):
        github_api.get("/repos/octocat/Hello-World/issues/1347/comments").mock(
            return_value=Response(200, json=[COMMENT_JSON])
        )
        comments, _ = await github.issues.list_comments(REPO, 1347, ListOptions())
        assert [c.id for c in comments] == [1]

    async def test_create_comment(self, github, github_api):
        route = github_api.post("/repos/octocat/Hello-World/issues/1347/comments").mock(
            return_value=Response(201, json=COMMENT_JSON)
        )
        comment, _ = await github.issues.create_comment(REPO, 1347, CommentInput(body="Me too"))
        assert comment.id == 1
        assert json.loads(route.calls.last.request.content) == {"body": "Me too"}

    async def test_delete_comment(self, github, github_api):
        github_api.delete("/repos/octocat/Hello-World/issues/comments/1").mock(
            return_value=Response(204)
        )
        res = await github.issues.delete_comment(REPO, 1347, 1)
        assert res.status == 204


class TestLabelsAndAssignees:
    async def test_list_labels(self, github, github_api):
        github_api.get("/repos/octocat/Hello-World/issues/1347/labels").mock(
            return_value=Response(200, json=[{"name": "bug", "color": "f29513"}])
        )
        labels, _ = await github.issues.list_labels(REPO, 1347, ListOptions())
        assert labels[0].name == "bug"
        assert labels[0].color == "f29513"

    async def test_list_events(self, github, github_api):
        github_api.get("/repos/octocat/Hello-World/issues/1347/events").mock(
            return_value=Response(
                200,
                json=[
                    {
                        "event": "labeled",
                        "actor": {"login": "octocat"},
                        "label": {"name": "bug", "color": "f29513"},
                        "created_at": "2011-04-14T16:00:49Z",
                    },
                    {"event": "closed", "actor": None},
                ],
            )
        )
        events, _ = await github.issues.list_events(REPO, 1347, ListOptions())
        assert events[0].event == "labeled"
        assert events[0].label.name == "bug"
        assert events[0].actor.login == "octocat"
        assert events[1].label is None
        assert events[1].actor.login == ""

    async def test_add_label(self, github, github_api):
        route = github_api.post("/repos/octocat/Hello-World/issues/1347/labels").mock(
            return_value=Response(200, json=[{"name": "bug"}])
        )
        await github.issues.add_label(REPO, 1347, "bug")
        assert json.loads(route.calls.last.request.content) == ["bug"]

    async def test_delete_label(self, github, github_api):
        route = github_api.delete("/repos/octocat/Hello-World/issues/1347/labels/bug").mock(
            return_value=Response(200, json=[])
        )
        await github.issues.delete_label(REPO, 1347, "bug")
        assert route.called

    async def test_assign_and_unassign(self, github, github_api):
        assign = github_api.post("/repos/octocat/Hello-World/issues/1347/assignees").mock(
            return_value=Response(201, json=ISSUE_JSON)
        )
        unassign = github_api.delete("/repos/octocat/Hello-World/issues/1347/assignees").mock(
            return_value=Response(200, json=ISSUE_JSON)
        )
        await github.issues.assign_issue(REPO, 1347, ["hubot", "octocat"])
        await github.issues.unassign_issue(REPO, 1347, ["hubot"])
        assert json.loads(assign.calls.last.request.content) == {"assignees": ["hubot", "octocat"]}
        assert json.loads(unassign.calls.last.request.content) == {"assignees": ["hubot"]}

"""SCM MCP server — all tool registrations."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from ..client import ScmClient, new_client
from ..config import ScmConfig
from ..exceptions import ScmWriteDisabledError
from ..models.base import ScmModel
from ..models.common import ListOptions, Response
from ..models.issues import CommentInput, IssueInput, IssueListOptions
from ..models.repositories import HookEvents, HookInput, State, StatusInput

Repo = Annotated[
    str,
    Field(description="Repository in 'namespace/name' form (e.g. 'octocat/hello')", min_length=3),
]
Number = Annotated[int, Field(description="Issue number", ge=1)]
PageArg = Annotated[int, Field(description="Page number (1-based)", ge=1)]
SizeArg = Annotated[int, Field(description="Page size, 0 for the provider default", ge=0)]


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    config = ScmConfig.from_env()
    client = new_client(config)
    try:
        yield {"client": client, "config": config}
    finally:
        await client.close()


mcp = FastMCP(
    name="SCM MCP Server",
    instructions=(
        "Provides tools for source code hosting providers (GitHub, Bitbucket Server)"
        " — repositories, webhooks, commit statuses, issues, and comments."
    ),
    lifespan=lifespan,
)


def _get_client(ctx: Context) -> ScmClient:
    return ctx.request_context.lifespan_context["client"]


def _get_config(ctx: Context) -> ScmConfig:
    return ctx.request_context.lifespan_context["config"]


def _check_write(ctx: Context) -> None:
    if _get_config(ctx).read_only:
        raise ScmWriteDisabledError


def _plain(data: Any) -> Any:
    if isinstance(data, ScmModel):
        return data.to_dict()
    if isinstance(data, list):
        return [_plain(item) for item in data]
    return data


def _ok(data: Any) -> str:
    return json.dumps(_plain(data), indent=2, ensure_ascii=False)


def _paginated(items: list, res: Response) -> str:
    """Wrap a list response with the normalized pagination cursor."""
    return json.dumps(
        {
            "items": _plain(items),
            "count": len(items),
            "next_page": res.page.next,
            "has_more": res.page.next is not None,
        },
        indent=2,
        ensure_ascii=False,
    )


def _err(error: Exception) -> str:
    detail: dict[str, Any] = {"error": str(error)}
    from ..exceptions import (
        NotSupportedError,
        ScmApiError,
        ScmAuthError,
        ScmDecodeError,
        ScmNotFoundError,
    )

    if isinstance(error, NotSupportedError):
        detail["not_supported"] = True
        detail["hint"] = f"The {error.driver or 'configured'} provider has no equivalent operation."
    elif isinstance(error, ScmNotFoundError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Verify the repository path. Use scm_find_repository to confirm it exists."
    elif isinstance(error, ScmAuthError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Check SCM_TOKEN permissions for this repository."
    elif isinstance(error, ScmWriteDisabledError):
        detail["hint"] = "Server is in read-only mode. Set SCM_READ_ONLY=false to enable writes."
    elif isinstance(error, ScmDecodeError):
        detail["hint"] = "The provider answered with an unexpected payload. Check SCM_URL."
    elif isinstance(error, ScmApiError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        if error.status_code == 409:
            detail["hint"] = "Conflict — resource may already exist."
        elif error.status_code == 422:
            detail["hint"] = "Validation failed — check required fields and formats."
        elif error.status_code == 429:
            detail["hint"] = "Rate limited. Wait before retrying."
    return json.dumps(detail, indent=2, ensure_ascii=False)


# ════════════════════════════════════════════════════════════════════
# Repositories
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_repository(ctx: Context, repo: Repo) -> str:
    """Get details of a repository."""
    try:
        data, _ = await _get_client(ctx).repositories.find(repo)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_repositories(ctx: Context, page: PageArg = 1, size: SizeArg = 0) -> str:
    """List repositories visible to the current user."""
    try:
        items, res = await _get_client(ctx).repositories.list(ListOptions(page=page, size=size))
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_permissions(ctx: Context, repo: Repo) -> str:
    """Get the current user's pull/push/admin permissions on a repository.

    Some providers only allow a heuristic answer; treat it as best effort.
    """
    try:
        data, _ = await _get_client(ctx).repositories.find_perms(repo)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_user_permission(
    ctx: Context,
    repo: Repo,
    user: Annotated[str, Field(description="User login", min_length=1)],
) -> str:
    """Get a user's permission level name on a repository."""
    try:
        data, _ = await _get_client(ctx).repositories.find_user_permission(repo, user)
        return _ok({"user": user, "permission": data})
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_is_collaborator(
    ctx: Context,
    repo: Repo,
    user: Annotated[str, Field(description="User login", min_length=1)],
) -> str:
    """Check whether a user has access to a repository."""
    try:
        data, _ = await _get_client(ctx).repositories.is_collaborator(repo, user)
        return _ok({"user": user, "collaborator": data})
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_collaborators(ctx: Context, repo: Repo) -> str:
    """List users with access to a repository."""
    try:
        items, _ = await _get_client(ctx).repositories.list_collaborators(repo)
        return _ok(items)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "repositories", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_labels(ctx: Context, repo: Repo, page: PageArg = 1, size: SizeArg = 0) -> str:
    """List labels defined on a repository."""
    try:
        items, res = await _get_client(ctx).repositories.list_labels(
            repo, ListOptions(page=page, size=size)
        )
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Webhooks
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"scm", "webhooks", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_hooks(ctx: Context, repo: Repo, page: PageArg = 1, size: SizeArg = 0) -> str:
    """List webhooks registered on a repository."""
    try:
        items, res = await _get_client(ctx).repositories.list_hooks(
            repo, ListOptions(page=page, size=size)
        )
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "webhooks", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_hook(
    ctx: Context,
    repo: Repo,
    hook_id: Annotated[str, Field(description="Webhook ID", min_length=1)],
) -> str:
    """Get a webhook by ID."""
    try:
        data, _ = await _get_client(ctx).repositories.find_hook(repo, hook_id)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "webhooks", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def scm_create_hook(
    ctx: Context,
    repo: Repo,
    target: Annotated[str, Field(description="Delivery URL", min_length=1)],
    name: Annotated[str, Field(description="Webhook name (ignored by GitHub)")] = "",
    secret: Annotated[str, Field(description="Shared secret for payload signatures")] = "",
    push: Annotated[bool, Field(description="Deliver push events")] = False,
    pull_request: Annotated[bool, Field(description="Deliver pull request events")] = False,
    pull_request_comment: Annotated[
        bool, Field(description="Deliver pull request comment events")
    ] = False,
    issue: Annotated[bool, Field(description="Deliver issue events")] = False,
    issue_comment: Annotated[bool, Field(description="Deliver issue comment events")] = False,
    branch: Annotated[bool, Field(description="Deliver branch create/delete events")] = False,
    tag: Annotated[bool, Field(description="Deliver tag create/delete events")] = False,
    native_events: Annotated[
        list[str] | None, Field(description="Provider event names passed through unchanged")
    ] = None,
) -> str:
    """Register a webhook on a repository."""
    try:
        _check_write(ctx)
        hook = HookInput(
            name=name,
            target=target,
            secret=secret,
            events=HookEvents(
                push=push,
                pull_request=pull_request,
                pull_request_comment=pull_request_comment,
                issue=issue,
                issue_comment=issue_comment,
                branch=branch,
                tag=tag,
            ),
            native_events=native_events or [],
        )
        data, _ = await _get_client(ctx).repositories.create_hook(repo, hook)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "webhooks", "write"},
    annotations={"destructiveHint": True, "readOnlyHint": False, "openWorldHint": True},
)
async def scm_delete_hook(
    ctx: Context,
    repo: Repo,
    hook_id: Annotated[str, Field(description="Webhook ID", min_length=1)],
) -> str:
    """Delete a webhook from a repository."""
    try:
        _check_write(ctx)
        await _get_client(ctx).repositories.delete_hook(repo, hook_id)
        return _ok({"status": "deleted", "repo": repo, "hook_id": hook_id})
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Commit statuses
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"scm", "statuses", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_statuses(
    ctx: Context,
    repo: Repo,
    ref: Annotated[str, Field(description="Commit SHA, branch or tag", min_length=1)],
    page: PageArg = 1,
    size: SizeArg = 0,
) -> str:
    """List commit statuses of a ref."""
    try:
        items, res = await _get_client(ctx).repositories.list_status(
            repo, ref, ListOptions(page=page, size=size)
        )
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "statuses", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_combined_status(
    ctx: Context,
    repo: Repo,
    ref: Annotated[str, Field(description="Commit SHA, branch or tag", min_length=1)],
) -> str:
    """Get the combined status of a ref."""
    try:
        data, _ = await _get_client(ctx).repositories.find_combined_status(repo, ref)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "statuses", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def scm_create_status(
    ctx: Context,
    repo: Repo,
    ref: Annotated[str, Field(description="Commit SHA", min_length=1)],
    state: Annotated[State, Field(description="pending, running, success, failure or error")],
    label: Annotated[str, Field(description="Status context / build key", min_length=1)],
    desc: Annotated[str, Field(description="Short description")] = "",
    target: Annotated[str, Field(description="Link to the build")] = "",
) -> str:
    """Set a commit status."""
    try:
        _check_write(ctx)
        status = StatusInput(state=state, label=label, desc=desc, target=target)
        data, _ = await _get_client(ctx).repositories.create_status(repo, ref, status)
        return _ok(data)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Issues
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"scm", "issues", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_issues(
    ctx: Context,
    repo: Repo,
    state: Annotated[str, Field(description="open, closed, or all")] = "open",
    page: PageArg = 1,
    size: SizeArg = 0,
) -> str:
    """List issues of a repository."""
    try:
        opts = IssueListOptions(
            page=page,
            size=size,
            open=state in ("open", "all"),
            closed=state in ("closed", "all"),
        )
        items, res = await _get_client(ctx).issues.list(repo, opts)
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_issue(ctx: Context, repo: Repo, number: Number) -> str:
    """Get an issue by number."""
    try:
        data, _ = await _get_client(ctx).issues.find(repo, number)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def scm_create_issue(
    ctx: Context,
    repo: Repo,
    title: Annotated[str, Field(description="Issue title", min_length=1)],
    body: Annotated[str, Field(description="Issue body (Markdown)")] = "",
) -> str:
    """Create an issue."""
    try:
        _check_write(ctx)
        data, _ = await _get_client(ctx).issues.create(repo, IssueInput(title=title, body=body))
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def scm_close_issue(ctx: Context, repo: Repo, number: Number) -> str:
    """Close an issue."""
    try:
        _check_write(ctx)
        await _get_client(ctx).issues.close(repo, number)
        return _ok({"status": "closed", "repo": repo, "number": number})
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def scm_lock_issue(
    ctx: Context,
    repo: Repo,
    number: Number,
    locked: Annotated[bool, Field(description="True to lock, False to unlock")] = True,
) -> str:
    """Lock or unlock an issue discussion."""
    try:
        _check_write(ctx)
        issues = _get_client(ctx).issues
        if locked:
            await issues.lock(repo, number)
        else:
            await issues.unlock(repo, number)
        return _ok({"status": "locked" if locked else "unlocked", "repo": repo, "number": number})
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_issue_events(
    ctx: Context, repo: Repo, number: Number, page: PageArg = 1, size: SizeArg = 0
) -> str:
    """List the event timeline of an issue."""
    try:
        items, res = await _get_client(ctx).issues.list_events(
            repo, number, ListOptions(page=page, size=size)
        )
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Issue comments
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"scm", "comments", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_issue_comments(
    ctx: Context, repo: Repo, number: Number, page: PageArg = 1, size: SizeArg = 0
) -> str:
    """List comments of an issue."""
    try:
        items, res = await _get_client(ctx).issues.list_comments(
            repo, number, ListOptions(page=page, size=size)
        )
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "comments", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_find_issue_comment(
    ctx: Context,
    repo: Repo,
    number: Number,
    comment_id: Annotated[int, Field(description="Comment ID", ge=1)],
) -> str:
    """Get an issue comment."""
    try:
        data, _ = await _get_client(ctx).issues.find_comment(repo, number, comment_id)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "comments", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def scm_create_issue_comment(
    ctx: Context,
    repo: Repo,
    number: Number,
    body: Annotated[str, Field(description="Comment body (Markdown)", min_length=1)],
) -> str:
    """Add a comment to an issue."""
    try:
        _check_write(ctx)
        data, _ = await _get_client(ctx).issues.create_comment(
            repo, number, CommentInput(body=body)
        )
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "comments", "write"},
    annotations={"destructiveHint": True, "readOnlyHint": False, "openWorldHint": True},
)
async def scm_delete_issue_comment(
    ctx: Context,
    repo: Repo,
    number: Number,
    comment_id: Annotated[int, Field(description="Comment ID", ge=1)],
) -> str:
    """Delete an issue comment."""
    try:
        _check_write(ctx)
        await _get_client(ctx).issues.delete_comment(repo, number, comment_id)
        return _ok({"status": "deleted", "repo": repo, "comment_id": comment_id})
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Issue labels and assignees
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"scm", "issues", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def scm_list_issue_labels(
    ctx: Context, repo: Repo, number: Number, page: PageArg = 1, size: SizeArg = 0
) -> str:
    """List labels on an issue."""
    try:
        items, res = await _get_client(ctx).issues.list_labels(
            repo, number, ListOptions(page=page, size=size)
        )
        return _paginated(items, res)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def scm_add_issue_label(
    ctx: Context,
    repo: Repo,
    number: Number,
    label: Annotated[str, Field(description="Label name", min_length=1)],
) -> str:
    """Add a label to an issue."""
    try:
        _check_write(ctx)
        await _get_client(ctx).issues.add_label(repo, number, label)
        return _ok({"status": "labeled", "repo": repo, "number": number, "label": label})
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def scm_remove_issue_label(
    ctx: Context,
    repo: Repo,
    number: Number,
    label: Annotated[str, Field(description="Label name", min_length=1)],
) -> str:
    """Remove a label from an issue."""
    try:
        _check_write(ctx)
        await _get_client(ctx).issues.delete_label(repo, number, label)
        return _ok({"status": "unlabeled", "repo": repo, "number": number, "label": label})
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"scm", "issues", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def scm_assign_issue(
    ctx: Context,
    repo: Repo,
    number: Number,
    logins: Annotated[list[str], Field(description="User logins to assign", min_length=1)],
    unassign: Annotated[bool, Field(description="Remove the users instead")] = False,
) -> str:
    """Assign users to an issue, or remove them with unassign=true."""
    try:
        _check_write(ctx)
        issues = _get_client(ctx).issues
        if unassign:
            await issues.unassign_issue(repo, number, logins)
        else:
            await issues.assign_issue(repo, number, logins)
        return _ok(
            {
                "status": "unassigned" if unassign else "assigned",
                "repo": repo,
                "number": number,
                "logins": logins,
            }
        )
    except Exception as e:
        return _err(e)

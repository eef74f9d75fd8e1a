"""SCM client: one driver selected at configuration time."""

from __future__ import annotations

import logging

from .config import ScmConfig
from .drivers.github.issues import GitHubIssueService
from .drivers.github.repos import GitHubRepositoryService
from .drivers.stash.issues import StashIssueService
from .drivers.stash.repos import StashRepositoryService
from .services import IssueService, RepositoryService
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)

_DRIVERS: dict[str, tuple[type[RepositoryService], type[IssueService]]] = {
    "github": (GitHubRepositoryService, GitHubIssueService),
    "stash": (StashRepositoryService, StashIssueService),
}


class ScmClient:
    """Capability surface of one provider.

    Services hold nothing but the shared transport, so one client may serve
    concurrent calls.
    """

    def __init__(self, driver: str, transport: Transport) -> None:
        try:
            repo_cls, issue_cls = _DRIVERS[driver]
        except KeyError:
            msg = f"Unknown SCM driver {driver!r}. Expected one of: {', '.join(_DRIVERS)}"
            raise ValueError(msg) from None
        self.driver = driver
        self.transport = transport
        self.repositories: RepositoryService = repo_cls(transport)
        self.issues: IssueService = issue_cls(transport)

    async def close(self) -> None:
        await self.transport.close()


def new_client(config: ScmConfig | None = None) -> ScmClient:
    """Build a client for the configured driver over the default HTTP transport."""
    config = config or ScmConfig.from_env()
    config.validate()
    logger.debug("using %s driver at %s", config.driver, config.api_url)
    return ScmClient(config.driver, HttpTransport(config))

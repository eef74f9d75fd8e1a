"""Shared test fixtures for mcp-scm."""

from __future__ import annotations

import pytest
import respx

from mcp_scm.client import ScmClient
from mcp_scm.config import ScmConfig
from mcp_scm.transport import HttpTransport

GITHUB_API = "https://api.github.com"
STASH_URL = "https://stash.example.com"
TEST_TOKEN = "test-token"


@pytest.fixture
def github_config() -> ScmConfig:
    return ScmConfig(driver="github", url="https://github.com", token=TEST_TOKEN)


@pytest.fixture
def stash_config() -> ScmConfig:
    return ScmConfig(driver="stash", url=STASH_URL, token=TEST_TOKEN)


@pytest.fixture
def github(github_config: ScmConfig) -> ScmClient:
    return ScmClient("github", HttpTransport(github_config))


@pytest.fixture
def stash(stash_config: ScmConfig) -> ScmClient:
    return ScmClient("stash", HttpTransport(stash_config))


@pytest.fixture
def github_api() -> respx.MockRouter:
    with respx.mock(base_url=GITHUB_API) as router:
        yield router


@pytest.fixture
def stash_api() -> respx.MockRouter:
    with respx.mock(base_url=STASH_URL) as router:
        yield router

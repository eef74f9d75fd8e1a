"""SCM client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DRIVERS = ("github", "stash")

GITHUB_URL = "https://github.com"
GITHUB_API_URL = "https://api.github.com"


@dataclass
class ScmConfig:
    """Configuration for the SCM client, loaded from environment variables."""

    driver: str = "github"
    url: str = ""
    token: str = ""
    read_only: bool = False
    timeout: int = 30
    ssl_verify: bool = True

    @classmethod
    def from_env(cls) -> ScmConfig:
        driver = os.getenv("SCM_DRIVER", "github").strip().lower()
        url = os.getenv("SCM_URL", "").rstrip("/")
        if not url and driver == "github":
            url = GITHUB_URL
        token = (
            os.getenv("SCM_TOKEN")
            or os.getenv("GITHUB_TOKEN")
            or os.getenv("STASH_TOKEN")
            or os.getenv("BITBUCKET_TOKEN", "")
        )
        read_only = os.getenv("SCM_READ_ONLY", "false").lower() in (
            "true",
            "1",
            "yes",
        )
        timeout = int(os.getenv("SCM_TIMEOUT", "30"))
        ssl_verify = os.getenv("SCM_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            driver=driver,
            url=url,
            token=token,
            read_only=read_only,
            timeout=timeout,
            ssl_verify=ssl_verify,
        )

    @property
    def api_url(self) -> str:
        if self.driver == "github":
            if not self.url or self.url == GITHUB_URL:
                return GITHUB_API_URL
            return f"{self.url}/api/v3"
        return self.url

    def validate(self) -> None:
        if self.driver not in DRIVERS:
            msg = f"Unknown SCM_DRIVER {self.driver!r}. Expected one of: {', '.join(DRIVERS)}"
            raise ValueError(msg)
        if self.driver == "stash" and not self.url:
            msg = "SCM_URL environment variable is required for the stash driver"
            raise ValueError(msg)
        if not self.token:
            msg = (
                "SCM token is required. Set one of: SCM_TOKEN, GITHUB_TOKEN, "
                "STASH_TOKEN, or BITBUCKET_TOKEN"
            )
            raise ValueError(msg)

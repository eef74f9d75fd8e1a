"""MCP server and client library for source code hosting APIs."""

import asyncio
import logging
import os

import click
from dotenv import load_dotenv


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="MCP transport type",
)
@click.option("--port", default=8000, help="Port for HTTP transports")
@click.option("--host", default="127.0.0.1", help="Host for HTTP transports")
@click.option(
    "--driver",
    type=click.Choice(["github", "stash"]),
    envvar="SCM_DRIVER",
    help="SCM provider driver",
)
@click.option("--scm-url", envvar="SCM_URL", help="Provider base URL")
@click.option("--scm-token", envvar="SCM_TOKEN", help="Provider access token")
@click.option("--read-only", is_flag=True, help="Disable write operations")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level (logs go to stderr)",
)
def main(
    transport: str,
    port: int,
    host: str,
    driver: str | None,
    scm_url: str | None,
    scm_token: str | None,
    read_only: bool,
    log_level: str,
) -> None:
    """Run the SCM MCP server."""
    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if driver:
        os.environ["SCM_DRIVER"] = driver
    if scm_url:
        os.environ["SCM_URL"] = scm_url
    if scm_token:
        os.environ["SCM_TOKEN"] = scm_token
    if read_only:
        os.environ["SCM_READ_ONLY"] = "true"

    from .servers.scm import mcp

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = host
        run_kwargs["port"] = port

    asyncio.run(mcp.run_async(show_banner=False, **run_kwargs))


if __name__ == "__main__":
    main()

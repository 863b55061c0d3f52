# The module provides the process entrypoint for the PostgSail MCP server.
# Version: 0.1.0

import asyncio
import os
import signal
import sys
from typing import Optional

import httpx
from pydantic import ValidationError

from postgsail_mcp.core.config import Settings, get_settings
from postgsail_mcp.core.errors import ConfigurationError, PostgSailError
from postgsail_mcp.models.common import Session
from postgsail_mcp.server import PostgSailServer
from postgsail_mcp.services.postgsail_client import PostgSailClient
from postgsail_mcp.utils.logger import console


async def create_client(settings: Settings,
                        transport: Optional[httpx.AsyncBaseTransport] = None) -> PostgSailClient:
    """
    Builds the backend client from the settings, logging in once when only
    an email/password pair is configured.

    Raises:
        ConfigurationError: Settings are incomplete or the login did not yield a token.
    """
    settings.validate_startup()
    session = Session(base_url=settings.POSTGSAIL_URL, token=settings.POSTGSAIL_TOKEN)
    client = PostgSailClient(session, timeout=settings.POSTGSAIL_TIMEOUT, transport=transport)

    if settings.POSTGSAIL_TOKEN:
        console.success("PostgSailClient initialization successful via token")
        return client

    try:
        jwt = await client.login(settings.POSTGSAIL_USER, settings.POSTGSAIL_PASS)
    except PostgSailError as e:
        raise ConfigurationError(f"Failed to authenticate with PostgSail: {e}") from e

    token = jwt.get("token") if isinstance(jwt, dict) else None
    if not token:
        raise ConfigurationError("Failed to authenticate with PostgSail: no token returned")
    client.set_token(token)
    console.success("PostgSailClient initialization successful via login")
    return client


def _startup_summary(settings: Settings) -> dict:
    return {
        "URL": settings.POSTGSAIL_URL,
        "Auth": "token" if settings.POSTGSAIL_TOKEN else f"login ({settings.POSTGSAIL_USER})",
        "Timeout": f"{settings.POSTGSAIL_TIMEOUT}s",
        "Verbose": settings.POSTGSAIL_VERBOSE,
        "Debug": settings.POSTGSAIL_DEBUG,
    }


async def run(settings: Settings):
    client = await create_client(settings)
    server = PostgSailServer(client)
    await server.serve_stdio()


def _handle_shutdown(signum, frame):
    # The stdio reader thread stays blocked on stdin, so a normal interpreter
    # exit would wait on it forever.
    console.info(f"Received {signal.Signals(signum).name}, shutting down gracefully...")
    console.flush()
    os._exit(0)


def main():
    try:
        settings = get_settings()
    except ValidationError as e:
        console.display_error_panel("Configuration Error", str(e))
        sys.exit(1)

    console.configure(verbose=settings.POSTGSAIL_VERBOSE, debug=settings.POSTGSAIL_DEBUG)
    console.rule("PostgSail MCP Server")
    console.display_data_as_table(_startup_summary(settings), "Startup configuration")
    signal.signal(signal.SIGTERM, _handle_shutdown)
    signal.signal(signal.SIGINT, _handle_shutdown)

    try:
        asyncio.run(run(settings))
    except ConfigurationError as e:
        console.display_error_panel("Configuration Error", str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.info("Received SIGINT, shutting down gracefully...")
        sys.exit(0)
    except Exception:
        console.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()

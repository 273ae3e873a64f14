from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from ..config import create_engine_from_env, load_env_config
from ..logging import setup_logging
from .registry import register_discovered_tools

SERVER_NAME = "twapi-mcp"

log = logging.getLogger("twapi.mcp.server")


def build_app(engine, *, allow_delete: bool = False) -> FastMCP:
    app = FastMCP(SERVER_NAME)
    register_discovered_tools(app, lambda: engine, allow_delete=allow_delete)
    return app


async def main() -> None:
    config = load_env_config(use_dotenv=True)
    setup_logging(config.log_level)

    engine = create_engine_from_env(config)
    async with engine:
        app = build_app(engine, allow_delete=config.allow_delete)
        log.info("Starting stdio server")
        await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()

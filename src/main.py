"""Entry point for the rugcheck API server."""

import asyncio

from loguru import logger

from config.settings import settings
from src.api.server import run_server
from src.utils.logger import setup_logger


async def main() -> None:
    setup_logger(json_logs=settings.json_logs, level=settings.log_level, log_file=settings.log_file)
    logger.info("Starting rugcheck API...")
    await run_server()
    logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())

"""Run the docbot Telegram gateway: ``python -m docbot``."""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from docbot.channels.telegram import TelegramChannel
from docbot.config.loader import load_config
from docbot.session.store import BotContext


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="docbot", description="Rust documentation pager for Telegram")
    parser.add_argument("-c", "--config", type=Path, help="Path to config.json")
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


async def run(channel: TelegramChannel) -> None:
    try:
        await channel.start()
    finally:
        await channel.stop()


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    logger.remove()
    logger.add(sys.stderr, level=(args.log_level or config.log_level).upper())

    context = BotContext.create(
        cache_size=config.docs.cache_size,
        session_limit=config.docs.session_limit,
    )
    channel = TelegramChannel(config, context)
    try:
        asyncio.run(run(channel))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())

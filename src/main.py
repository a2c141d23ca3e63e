"""Entry point for the Solana lookup bot."""

import argparse
import asyncio
import signal
import sys

from loguru import logger

from config.settings import BotConfig, build_bot_config, settings
from src.bot.bot import create_bot, create_dispatcher, run_bot
from src.parsers.rpc.client import SolanaRpcClient
from src.utils.logger import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solana address lookup bot for Telegram")
    parser.add_argument("-t", "--token", default="", help="Telegram bot token")
    parser.add_argument("--rpc", default="", help="Solana RPC URL")
    return parser.parse_args(argv)


def polling_error(task: asyncio.Task) -> BaseException | None:
    """Exception that ended a finished task, None if it was cancelled or returned."""
    if task.cancelled():
        return None
    return task.exception()


async def main(token: str, config: BotConfig) -> None:
    logger.info(f"Starting bot, RPC endpoint: {config.rpc_url}")

    rpc = SolanaRpcClient(config.rpc_url)
    bot = create_bot(token)
    dp = create_dispatcher(rpc, config)

    # Graceful shutdown on SIGINT/SIGTERM
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    bot_task = asyncio.create_task(run_bot(bot, dp), name="telegram_bot")

    done, pending = await asyncio.wait(
        [bot_task, asyncio.create_task(shutdown_event.wait())],
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    if bot_task in done:
        error = polling_error(bot_task)
        if error is not None:
            logger.error(f"[BOT] Polling stopped: {error}")

    await bot.session.close()
    await rpc.close()
    logger.info("Shutdown complete")


def cli(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logger(
        level=settings.log_level, json_logs=settings.json_logs, log_dir=settings.log_dir
    )

    token = args.token or settings.telegram_bot_token
    if not token:
        logger.critical("No token provided. Run with -t <bot token> or set TELEGRAM_BOT_TOKEN")
        sys.exit(1)

    asyncio.run(main(token, build_bot_config(settings, rpc_url=args.rpc)))


if __name__ == "__main__":
    cli()

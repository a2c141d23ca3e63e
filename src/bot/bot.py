"""Telegram bot lifecycle — aiogram 3.x polling mode.

The dispatcher carries the shared RPC-backed classifier and the frozen
BotConfig as workflow data, so handlers receive them as arguments.
Polling dispatches every update as its own asyncio task.
"""

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand
from loguru import logger

from config.settings import BotConfig
from src.bot.handlers import router
from src.parsers.classifier import AccountClassifier
from src.parsers.rpc.client import SolanaRpcClient
from src.parsers.token_analyzer import TokenAnalyzer

BOT_COMMANDS = [
    BotCommand(command="start", description="What this bot does"),
    BotCommand(command="help", description="Usage"),
]


def create_bot(token: str) -> Bot:
    if not token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN not configured")
    return Bot(token=token)


def create_dispatcher(rpc: SolanaRpcClient, config: BotConfig) -> Dispatcher:
    """Dispatcher with handlers registered and shared collaborators injected."""
    analyzer = TokenAnalyzer(rpc, commitment=config.commitment)
    dp = Dispatcher(
        classifier=AccountClassifier(rpc, analyzer),
        bot_config=config,
    )
    dp.include_router(router)
    dp.startup.register(on_startup)
    return dp


async def on_startup(bot: Bot) -> None:
    me = await bot.get_me()
    await bot.set_my_commands(BOT_COMMANDS)
    logger.info(f"[BOT] Logged in as @{me.username} (id={me.id})")


async def run_bot(bot: Bot, dp: Dispatcher) -> None:
    """Poll until cancelled. Bot session is closed by the caller."""
    logger.info("[BOT] Starting Telegram bot (polling mode)")
    await dp.start_polling(bot, close_bot_session=False, handle_signals=False)

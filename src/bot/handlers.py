"""Telegram message handlers."""

from aiogram import Bot, F, Router
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command
from aiogram.types import LinkPreviewOptions, Message
from loguru import logger

from config.settings import BotConfig
from src.bot.formatters import render_card
from src.bot.pipeline import build_reply_card
from src.parsers.address_extractor import extract_addresses
from src.parsers.classifier import AccountClassifier

router = Router()

HELP_TEXT = (
    "<b>Solana Lookup Bot</b>\n\n"
    "Paste a Solana address or a Solscan / BullX / Photon link and I will reply with:\n"
    "• wallet balance for plain accounts\n"
    "• explorer links for programs\n"
    "• holder analysis for token mints"
)


def is_own_message(message: Message, bot: Bot) -> bool:
    author = message.from_user
    return author is not None and author.id == bot.id


@router.message(Command("start", "help"))
async def cmd_start(message: Message) -> None:
    """Usage help."""
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.message(F.text | F.caption)
async def handle_message(
    message: Message,
    bot: Bot,
    classifier: AccountClassifier,
    bot_config: BotConfig,
) -> None:
    """Reply with a lookup card for every address in the message."""
    if is_own_message(message, bot):
        return

    addresses = extract_addresses(message.text or message.caption, bot_config.explorers)
    if not addresses:
        return

    logger.info(
        f"[BOT] chat={message.chat.id} msg={message.message_id}: "
        f"{len(addresses)} address(es)"
    )
    for address in addresses:
        card = await build_reply_card(address, classifier, bot_config)
        if card is None:
            continue
        try:
            await message.reply(
                render_card(card),
                parse_mode="HTML",
                link_preview_options=LinkPreviewOptions(is_disabled=True),
            )
        except TelegramAPIError as e:
            logger.warning(f"[BOT] Reply failed in chat {message.chat.id}: {e}")

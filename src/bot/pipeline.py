"""Per-address lookup: classify the account and build the reply card."""

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from config.settings import BotConfig
from src.bot.formatters import ReplyCard, contract_card, token_card, wallet_card
from src.parsers.classifier import AccountClassifier, AccountKind, Classification
from src.parsers.rpc.exceptions import AccountNotFound, InvalidAddress, LookupFailure


def ensure_pubkey(address: str) -> str:
    """Check that the address decodes to a 32-byte public key."""
    try:
        return str(Pubkey.from_string(address))
    except ValueError as e:
        raise InvalidAddress(address) from e


def card_for(classification: Classification, config: BotConfig) -> ReplyCard:
    address = classification.address
    if classification.kind is AccountKind.TOKEN_MINT and classification.analysis is not None:
        return token_card(address, classification.analysis, config.explorers)
    if classification.kind is AccountKind.WALLET:
        return wallet_card(address, classification.balance_sol or 0.0, config.explorers)
    return contract_card(address, config.explorers)


async def build_reply_card(
    address: str,
    classifier: AccountClassifier,
    config: BotConfig,
) -> ReplyCard | None:
    """Run the lookup for one address. Returns None when nothing should be sent."""
    try:
        ensure_pubkey(address)
    except InvalidAddress:
        logger.debug(f"[BOT] {address[:12]} is not a valid public key, skipping")
        return None

    try:
        classification = await classifier.classify(address)
    except AccountNotFound:
        logger.debug(f"[BOT] Account {address[:12]} not found")
        return None
    except LookupFailure as e:
        logger.warning(f"[BOT] Lookup failed for {address[:12]}: {e}")
        return None

    return card_for(classification, config)

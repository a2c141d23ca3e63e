from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.parsers.address_extractor import EXPLORERS, ExplorerLink


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Telegram bot
    telegram_bot_token: str = ""

    # Solana RPC
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_dir: str = "logs"


@dataclass(frozen=True)
class BotConfig:
    """Read-only runtime configuration shared by every message handler."""

    rpc_url: str
    explorers: tuple[ExplorerLink, ...] = EXPLORERS
    commitment: str = "finalized"


def build_bot_config(source: Settings, *, rpc_url: str = "") -> BotConfig:
    """Freeze settings (plus CLI overrides) into a BotConfig."""
    return BotConfig(rpc_url=rpc_url or source.solana_rpc_url)


settings = Settings()

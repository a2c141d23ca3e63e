"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest

from config.settings import BotConfig
from src.parsers.rpc.client import SolanaRpcClient


@pytest.fixture
def rpc() -> AsyncMock:
    """RPC client double; tests set return values per method."""
    return AsyncMock(spec=SolanaRpcClient)


@pytest.fixture
def bot_config() -> BotConfig:
    return BotConfig(rpc_url="https://rpc.example.com")

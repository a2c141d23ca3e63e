"""Tests for SolanaRpcClient — request shape and error mapping (mocked HTTP)."""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.parsers.rpc.client import SolanaRpcClient
from src.parsers.rpc.exceptions import AccountNotFound, LookupFailure
from tests.helpers import USDC_MINT, build_mint_data

RPC_URL = "https://rpc.example.com"


def _response(payload: dict | None = None, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload or {}
    return resp


@pytest.fixture
def http() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(http: AsyncMock) -> SolanaRpcClient:
    with patch("src.parsers.rpc.client.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = http
        return SolanaRpcClient(RPC_URL)


def test_empty_url_rejected() -> None:
    with pytest.raises(ValueError, match="RPC URL is empty"):
        SolanaRpcClient("")


class TestGetAccountInfo:
    @pytest.mark.asyncio
    async def test_parses_account(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        raw = build_mint_data(decimals=9)
        http.post.return_value = _response(
            {
                "jsonrpc": "2.0",
                "result": {
                    "context": {"slot": 1},
                    "value": {
                        "data": [base64.b64encode(raw).decode(), "base64"],
                        "executable": False,
                        "lamports": 1_461_600,
                        "owner": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
                    },
                },
            }
        )

        snapshot = await client.get_account_info(USDC_MINT)

        assert snapshot.address == USDC_MINT
        assert snapshot.data == raw
        assert snapshot.has_data is True
        assert snapshot.lamports == 1_461_600
        assert snapshot.balance_sol == pytest.approx(0.0014616)
        payload = http.post.call_args.kwargs["json"]
        assert payload["method"] == "getAccountInfo"
        assert payload["params"] == [USDC_MINT, {"encoding": "base64"}]

    @pytest.mark.asyncio
    async def test_empty_data(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(
            {"result": {"value": {"data": ["", "base64"], "executable": False, "lamports": 5}}}
        )
        snapshot = await client.get_account_info(USDC_MINT)
        assert snapshot.has_data is False

    @pytest.mark.asyncio
    async def test_null_value_is_not_found(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response({"result": {"context": {"slot": 1}, "value": None}})
        with pytest.raises(AccountNotFound):
            await client.get_account_info(USDC_MINT)

    @pytest.mark.asyncio
    async def test_http_error_status(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(status_code=429)
        with pytest.raises(LookupFailure, match="HTTP 429"):
            await client.get_account_info(USDC_MINT)

    @pytest.mark.asyncio
    async def test_rpc_error_payload(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(
            {"error": {"code": -32602, "message": "Invalid param"}}
        )
        with pytest.raises(LookupFailure):
            await client.get_account_info(USDC_MINT)

    @pytest.mark.asyncio
    async def test_transport_error(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(LookupFailure):
            await client.get_account_info(USDC_MINT)
        assert http.post.await_count == 1

    @pytest.mark.asyncio
    async def test_non_object_body(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response()
        http.post.return_value.json.return_value = [{"jsonrpc": "2.0"}]
        with pytest.raises(LookupFailure, match="malformed response"):
            await client.get_account_info(USDC_MINT)

    @pytest.mark.asyncio
    async def test_null_lamports(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(
            {"result": {"value": {"lamports": None, "data": ["", "base64"]}}}
        )
        with pytest.raises(LookupFailure, match="malformed value"):
            await client.get_account_info(USDC_MINT)

    @pytest.mark.asyncio
    async def test_value_not_an_object(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response({"result": {"value": "oops"}})
        with pytest.raises(LookupFailure):
            await client.get_account_info(USDC_MINT)


class TestGetTokenLargestAccounts:
    @pytest.mark.asyncio
    async def test_parses_rows(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(
            {
                "result": {
                    "context": {"slot": 1},
                    "value": [
                        {
                            "address": "FYjHNoFtSQ5uijKrZFyYAxvEr87hsKXkXcxkcmkBAf4r",
                            "amount": "771",
                            "decimals": 2,
                            "uiAmount": 7.71,
                            "uiAmountString": "7.71",
                        }
                    ],
                }
            }
        )

        rows = await client.get_token_largest_accounts(USDC_MINT)

        assert len(rows) == 1
        assert rows[0].amount == "771"
        assert rows[0].address == "FYjHNoFtSQ5uijKrZFyYAxvEr87hsKXkXcxkcmkBAf4r"
        payload = http.post.call_args.kwargs["json"]
        assert payload["method"] == "getTokenLargestAccounts"
        assert payload["params"] == [USDC_MINT, {"commitment": "finalized"}]

    @pytest.mark.asyncio
    async def test_not_a_mint(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(
            {"error": {"code": -32602, "message": "Invalid param: not a Token mint"}}
        )
        with pytest.raises(LookupFailure, match="not a Token mint"):
            await client.get_token_largest_accounts(USDC_MINT)

    @pytest.mark.asyncio
    async def test_null_address_row(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response(
            {"result": {"value": [{"address": None, "amount": "10"}]}}
        )
        with pytest.raises(LookupFailure, match="malformed row"):
            await client.get_token_largest_accounts(USDC_MINT)

    @pytest.mark.asyncio
    async def test_row_not_an_object(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response({"result": {"value": ["10"]}})
        with pytest.raises(LookupFailure):
            await client.get_token_largest_accounts(USDC_MINT)

    @pytest.mark.asyncio
    async def test_null_amount_kept_for_analyzer(
        self, client: SolanaRpcClient, http: AsyncMock
    ) -> None:
        http.post.return_value = _response(
            {"result": {"value": [{"address": USDC_MINT, "amount": None}]}}
        )
        rows = await client.get_token_largest_accounts(USDC_MINT)
        assert rows[0].amount == "None"

    @pytest.mark.asyncio
    async def test_missing_value(self, client: SolanaRpcClient, http: AsyncMock) -> None:
        http.post.return_value = _response({"result": {"context": {"slot": 1}}})
        with pytest.raises(LookupFailure):
            await client.get_token_largest_accounts(USDC_MINT)


@pytest.mark.asyncio
async def test_close(client: SolanaRpcClient, http: AsyncMock) -> None:
    await client.close()
    http.aclose.assert_awaited_once()

"""Solana JSON-RPC client — account state and token holder sample."""

import base64
import binascii
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.parsers.rpc.exceptions import AccountNotFound, LookupFailure
from src.parsers.rpc.models import AccountSnapshot, LargestAccount

DEFAULT_TIMEOUT = 15.0


class SolanaRpcClient:
    """Async HTTP client for a Solana RPC endpoint.

    One instance is shared by all message handlers. No retries: any
    transport or RPC error surfaces as LookupFailure.
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        if not rpc_url:
            raise ValueError("RPC URL is empty")
        self._rpc_url = rpc_url
        self._client = httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> dict[str, Any]:
        """POST one JSON-RPC request and return its `result` object."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        try:
            resp = await self._client.post(self._rpc_url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"[RPC] {method} transport error: {e}")
            raise LookupFailure(f"{method}: {e}") from e

        if resp.status_code != 200:
            logger.warning(f"[RPC] {method} HTTP {resp.status_code}")
            raise LookupFailure(f"{method}: HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise LookupFailure(f"{method}: invalid JSON body") from e

        if not isinstance(data, dict):
            logger.warning(f"[RPC] {method} unexpected body type: {type(data).__name__}")
            raise LookupFailure(f"{method}: malformed response")

        if "error" in data:
            logger.debug(f"[RPC] {method} error: {data['error']}")
            raise LookupFailure(f"{method}: {data['error']}")

        result = data.get("result")
        if not isinstance(result, dict):
            raise LookupFailure(f"{method}: missing result")
        return result

    async def get_account_info(self, address: str) -> AccountSnapshot:
        """Fetch account state. Raises AccountNotFound when the account does not exist."""
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64"}],
        )
        value = result.get("value")
        if value is None:
            raise AccountNotFound(address)

        try:
            return _parse_account(address, value)
        except (AttributeError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"[RPC] getAccountInfo malformed value for {address[:12]}: {e}")
            raise LookupFailure(f"getAccountInfo: malformed value for {address[:12]}") from e

    async def get_token_largest_accounts(
        self, mint: str, *, commitment: str = "finalized"
    ) -> list[LargestAccount]:
        """Fetch the chain-capped largest holder accounts (top ~20) for a mint."""
        result = await self._call(
            "getTokenLargestAccounts",
            [mint, {"commitment": commitment}],
        )
        rows = result.get("value")
        if not isinstance(rows, list):
            raise LookupFailure(f"getTokenLargestAccounts: no value for {mint[:12]}")

        try:
            return [
                LargestAccount(address=row.get("address"), amount=str(row.get("amount", "")))
                for row in rows
            ]
        except (AttributeError, ValidationError) as e:
            logger.warning(f"[RPC] getTokenLargestAccounts malformed row for {mint[:12]}: {e}")
            raise LookupFailure(f"getTokenLargestAccounts: malformed row for {mint[:12]}") from e


def _parse_account(address: str, value: dict[str, Any]) -> AccountSnapshot:
    """Build an AccountSnapshot from a getAccountInfo `value` object."""
    raw = b""
    data_field = value.get("data") or []
    if isinstance(data_field, list) and data_field:
        try:
            raw = base64.b64decode(data_field[0])
        except (binascii.Error, TypeError) as e:
            raise LookupFailure(f"getAccountInfo: undecodable data for {address[:12]}") from e

    return AccountSnapshot(
        address=address,
        executable=bool(value.get("executable", False)),
        lamports=int(value.get("lamports", 0)),
        owner=value.get("owner", ""),
        data=raw,
    )

"""Builders for account and holder test data."""

import struct

from src.parsers.rpc.models import AccountSnapshot, LargestAccount

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
WSOL_MINT = "So11111111111111111111111111111111111111112"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
SYSTEM_PROGRAM = "11111111111111111111111111111111"


def build_mint_data(
    *,
    decimals: int = 6,
    supply: int = 1_000_000_000,
    mint_authority: bytes | None = None,
    freeze_authority: bytes | None = None,
) -> bytes:
    """Build a standard SPL Token mint account (82 bytes)."""
    data = bytearray(82)
    if mint_authority:
        struct.pack_into("<I", data, 0, 1)  # Some
        data[4:36] = mint_authority
    struct.pack_into("<Q", data, 36, supply)
    data[44] = decimals
    data[45] = 1  # isInitialized
    if freeze_authority:
        struct.pack_into("<I", data, 46, 1)
        data[50:82] = freeze_authority
    return bytes(data)


def make_snapshot(
    address: str = USDC_MINT,
    *,
    executable: bool = False,
    lamports: int = 0,
    data: bytes = b"",
    owner: str = SYSTEM_PROGRAM,
) -> AccountSnapshot:
    return AccountSnapshot(
        address=address, executable=executable, lamports=lamports, owner=owner, data=data
    )


def make_rows(*amounts: str) -> list[LargestAccount]:
    """Largest-accounts rows with synthetic holder addresses."""
    return [
        LargestAccount(address=f"Hx{i:02d}" + "A" * 40, amount=amount)
        for i, amount in enumerate(amounts)
    ]

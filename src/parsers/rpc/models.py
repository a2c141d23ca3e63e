"""Pydantic models for Solana JSON-RPC account responses."""

from pydantic import BaseModel

LAMPORTS_PER_SOL = 1_000_000_000


class AccountSnapshot(BaseModel):
    """State of one account as returned by getAccountInfo."""

    address: str
    executable: bool = False
    lamports: int = 0
    owner: str = ""
    data: bytes = b""  # raw account data, base64-decoded

    @property
    def has_data(self) -> bool:
        return len(self.data) > 0

    @property
    def balance_sol(self) -> float:
        return self.lamports / LAMPORTS_PER_SOL


class LargestAccount(BaseModel):
    """One row of getTokenLargestAccounts."""

    address: str
    amount: str  # raw u64 as decimal text, parsed by the analyzer

"""Account classification — wallet, contract or token mint.

Rules run in table order and the first one that returns a result wins.
A data-bearing account is tried as a token mint first and only falls back
to "contract" when the holder analysis cannot be done.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from src.parsers.rpc.client import SolanaRpcClient
from src.parsers.rpc.exceptions import LookupFailure
from src.parsers.rpc.models import AccountSnapshot
from src.parsers.token_analyzer import TokenAnalysis, TokenAnalyzer


class AccountKind(str, Enum):
    WALLET = "wallet"
    CONTRACT = "contract"
    TOKEN_MINT = "token_mint"


@dataclass
class Classification:
    """Outcome of classifying one address."""

    address: str
    kind: AccountKind
    rule: str
    balance_sol: float | None = None  # wallets only
    analysis: TokenAnalysis | None = None  # token mints only


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    apply: Callable[[AccountSnapshot], Awaitable[Classification | None]]


def looks_like_token_mint(snapshot: AccountSnapshot) -> bool:
    """Heuristic: any account carrying data is a token mint candidate.

    The owning program is not checked, so arbitrary program accounts also
    qualify; the holder lookup decides in the end.
    """
    return snapshot.has_data


class AccountClassifier:
    """Fetches an account and runs it through the ordered rule table."""

    def __init__(self, rpc: SolanaRpcClient, analyzer: TokenAnalyzer) -> None:
        self._rpc = rpc
        self._analyzer = analyzer
        self.rules: tuple[ClassificationRule, ...] = (
            ClassificationRule("token_mint", self._token_mint_rule),
            ClassificationRule("executable", self._executable_rule),
            ClassificationRule("data_bearing", self._data_bearing_rule),
            ClassificationRule("wallet", self._wallet_rule),
        )

    async def classify(self, address: str) -> Classification:
        """Raises AccountNotFound or LookupFailure from the account lookup."""
        snapshot = await self._rpc.get_account_info(address)
        return await self.classify_snapshot(snapshot)

    async def classify_snapshot(self, snapshot: AccountSnapshot) -> Classification:
        for rule in self.rules:
            result = await rule.apply(snapshot)
            if result is not None:
                logger.debug(
                    f"[CLASSIFY] {snapshot.address[:12]} -> {result.kind.value} ({rule.name})"
                )
                return result
        raise LookupError(f"no rule matched {snapshot.address}")

    async def _token_mint_rule(self, snapshot: AccountSnapshot) -> Classification | None:
        if not looks_like_token_mint(snapshot):
            return None
        try:
            analysis = await self._analyzer.analyze(snapshot.address)
        except LookupFailure as e:
            logger.debug(f"[CLASSIFY] {snapshot.address[:12]} is not an analyzable mint: {e}")
            return None
        return Classification(
            address=snapshot.address,
            kind=AccountKind.TOKEN_MINT,
            rule="token_mint",
            analysis=analysis,
        )

    async def _executable_rule(self, snapshot: AccountSnapshot) -> Classification | None:
        if not snapshot.executable:
            return None
        return Classification(
            address=snapshot.address, kind=AccountKind.CONTRACT, rule="executable"
        )

    async def _data_bearing_rule(self, snapshot: AccountSnapshot) -> Classification | None:
        if not snapshot.has_data:
            return None
        return Classification(
            address=snapshot.address, kind=AccountKind.CONTRACT, rule="data_bearing"
        )

    async def _wallet_rule(self, snapshot: AccountSnapshot) -> Classification | None:
        return Classification(
            address=snapshot.address,
            kind=AccountKind.WALLET,
            rule="wallet",
            balance_sol=snapshot.balance_sol,
        )

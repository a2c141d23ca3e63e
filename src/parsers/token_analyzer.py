"""Token holder analysis over the largest-accounts sample.

All supply and percentage figures are relative to the sample returned by
getTokenLargestAccounts (top ~20 accounts), never the mint's real supply.
"""

from dataclasses import dataclass, field

from loguru import logger

from src.parsers.mint_parser import MintInfo, decode_mint
from src.parsers.rpc.client import SolanaRpcClient
from src.parsers.rpc.exceptions import AccountNotFound, ParseFailure
from src.parsers.rpc.models import LargestAccount

TOP_HOLDERS_LIMIT = 5
BUNDLING_WINDOW = 9  # holders examined after the largest one
BUNDLING_STEP = 0.1
BUNDLING_RATIO_LOW = 0.8
BUNDLING_RATIO_HIGH = 1.2

INSIDER_FLAG_THRESHOLD = 50.0
BUNDLING_FLAG_THRESHOLD = 0.7

FLAG_HIGH_INSIDER = "High insider ownership"
FLAG_BUNDLING = "Possible bundling detected"

U64_MAX = 2**64 - 1


@dataclass
class TokenHolder:
    """One holder account from the sample."""

    address: str
    amount: int
    percent: float = 0.0


@dataclass
class TokenAnalysis:
    """Holder distribution metrics for one mint."""

    mint: str
    sampled_supply: int
    decimals: int
    holder_count: int
    top_holders: list[TokenHolder] = field(default_factory=list)
    insider_percent: float = 0.0
    bundling_score: float = 0.0
    suspicious_flags: list[str] = field(default_factory=list)
    mint_info: MintInfo | None = None


def parse_amount(raw: str) -> int:
    """Parse a base-10 u64 amount. Raises ParseFailure on anything else."""
    if not raw or not raw.isascii() or not raw.isdigit():
        raise ParseFailure(f"not a base-10 integer: {raw!r}")
    value = int(raw)
    if value > U64_MAX:
        raise ParseFailure(f"amount exceeds u64: {raw}")
    return value


def parse_holders(accounts: list[LargestAccount]) -> list[TokenHolder]:
    """Convert sample rows to holders, skipping rows with malformed amounts."""
    holders: list[TokenHolder] = []
    for acc in accounts:
        try:
            amount = parse_amount(acc.amount)
        except ParseFailure as e:
            logger.warning(f"[TOKEN] Skipping holder {acc.address[:12]}: {e}")
            continue
        holders.append(TokenHolder(address=acc.address, amount=amount))
    return holders


def calculate_bundling_score(holders: list[TokenHolder]) -> float:
    """Score near-equal holdings among the holders right after the largest.

    Expects holders sorted by amount, descending. Each of the next
    BUNDLING_WINDOW holders whose amount is within (0.8, 1.2) of the
    largest adds 0.1.
    """
    if len(holders) < 2:
        return 0.0

    largest = holders[0].amount
    if largest == 0:
        return 0.0

    similar = 0
    for holder in holders[1 : BUNDLING_WINDOW + 1]:
        ratio = holder.amount / largest
        if BUNDLING_RATIO_LOW < ratio < BUNDLING_RATIO_HIGH:
            similar += 1

    return round(similar * BUNDLING_STEP, 2)


def detect_suspicious_flags(insider_percent: float, bundling_score: float) -> list[str]:
    flags: list[str] = []
    if insider_percent > INSIDER_FLAG_THRESHOLD:
        flags.append(FLAG_HIGH_INSIDER)
    if bundling_score > BUNDLING_FLAG_THRESHOLD:
        flags.append(FLAG_BUNDLING)
    return flags


def build_analysis(
    mint: str,
    accounts: list[LargestAccount],
    decimals: int,
    mint_info: MintInfo | None = None,
) -> TokenAnalysis:
    """Compute the holder analysis from an already fetched sample."""
    holders = parse_holders(accounts)
    sampled_supply = sum(h.amount for h in holders)

    for holder in holders:
        holder.percent = holder.amount / sampled_supply * 100 if sampled_supply else 0.0

    # sorted() is stable: equal amounts keep fetch order
    ranked = sorted(holders, key=lambda h: h.amount, reverse=True)
    top = ranked[:TOP_HOLDERS_LIMIT]

    insider_percent = sum(h.percent for h in top)
    bundling_score = calculate_bundling_score(ranked)

    return TokenAnalysis(
        mint=mint,
        sampled_supply=sampled_supply,
        decimals=decimals,
        holder_count=len(ranked),
        top_holders=top,
        insider_percent=insider_percent,
        bundling_score=bundling_score,
        suspicious_flags=detect_suspicious_flags(insider_percent, bundling_score),
        mint_info=mint_info,
    )


class TokenAnalyzer:
    """Fetches mint data plus the largest-accounts sample and analyzes it."""

    def __init__(self, rpc: SolanaRpcClient, commitment: str = "finalized") -> None:
        self._rpc = rpc
        self._commitment = commitment

    async def analyze(self, mint: str) -> TokenAnalysis:
        """Analyze holder distribution. Raises LookupFailure if either RPC call fails."""
        mint_info: MintInfo | None = None
        try:
            account = await self._rpc.get_account_info(mint)
        except AccountNotFound:
            logger.debug(f"[TOKEN] Mint account {mint[:12]} not found, decimals=0")
        else:
            mint_info = decode_mint(account.data)

        decimals = mint_info.decimals if mint_info else 0

        accounts = await self._rpc.get_token_largest_accounts(
            mint, commitment=self._commitment
        )
        analysis = build_analysis(mint, accounts, decimals, mint_info)

        logger.debug(
            f"[TOKEN] {mint[:12]}: holders={analysis.holder_count} "
            f"insider={analysis.insider_percent:.1f}% "
            f"bundling={analysis.bundling_score:.2f}"
        )
        return analysis

"""Format lookup results into Telegram HTML messages."""

import html
from dataclasses import dataclass, field

from src.parsers.address_extractor import ExplorerLink
from src.parsers.token_analyzer import TokenAnalysis, TokenHolder

COLOR_WALLET = 0x00FF00
COLOR_INFO = 0x1E88E5

_COLOR_MARKERS = {
    COLOR_WALLET: "🟢",
    COLOR_INFO: "🔵",
}


@dataclass
class CardField:
    name: str
    value: str


@dataclass
class ReplyCard:
    """Platform-neutral reply: title, colour, description and ordered fields."""

    title: str
    color: int
    description: str
    fields: list[CardField] = field(default_factory=list)


def format_number(n: int) -> str:
    """Integer with thousands separators."""
    return f"{n:,}"


def format_token_amount(amount: int, decimals: int) -> str:
    """Render a raw token amount as a fixed-point decimal with grouped integer part."""
    if decimals == 0:
        return format_number(amount)

    full = str(amount)
    if decimals >= len(full):
        full = "0" * (decimals - len(full) + 1) + full

    point = len(full) - decimals
    result = f"{full[:point]}.{full[point:]}".rstrip("0").rstrip(".")

    whole, _, fraction = result.partition(".")
    grouped = format_number(int(whole))
    return f"{grouped}.{fraction}" if fraction else grouped


def truncate_address(address: str) -> str:
    if len(address) <= 12:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_top_holders(holders: list[TokenHolder], decimals: int) -> str:
    """Numbered holder list, one line per holder."""
    lines = [
        f"{rank}. <code>{truncate_address(h.address)}</code>: "
        f"{format_token_amount(h.amount, decimals)} ({h.percent:.2f}%)"
        for rank, h in enumerate(holders, start=1)
    ]
    return "\n".join(lines)


def explorer_link(explorer: ExplorerLink, address: str) -> str:
    url = html.escape(explorer.link_for(address), quote=True)
    return f'<a href="{url}">View on {html.escape(explorer.name)}</a>'


def _explorer_fields(address: str, explorers: tuple[ExplorerLink, ...]) -> list[CardField]:
    return [CardField(name=e.name, value=explorer_link(e, address)) for e in explorers]


def wallet_card(address: str, balance_sol: float, explorers: tuple[ExplorerLink, ...]) -> ReplyCard:
    solscan = next((e for e in explorers if e.name == "Solscan"), explorers[0])
    return ReplyCard(
        title="Solana Wallet",
        color=COLOR_WALLET,
        description=f"Address: <code>{address}</code>",
        fields=[
            CardField(name="Balance", value=f"{balance_sol:.4f} SOL"),
            CardField(name="View on Solscan", value=explorer_link(solscan, address)),
        ],
    )


def contract_card(address: str, explorers: tuple[ExplorerLink, ...]) -> ReplyCard:
    return ReplyCard(
        title="Solana Contract Explorer",
        color=COLOR_INFO,
        description=f"Explorer links for address: <code>{address}</code>",
        fields=_explorer_fields(address, explorers),
    )


def token_card(
    address: str, analysis: TokenAnalysis, explorers: tuple[ExplorerLink, ...]
) -> ReplyCard:
    """Token analysis card: distribution, top holders, risk and warnings."""
    supply = format_token_amount(analysis.sampled_supply, analysis.decimals)
    fields = [
        CardField(
            name="Supply Distribution",
            value=(
                f"Sampled Supply (top accounts): {supply}\n"
                f"Decimals: {analysis.decimals}\n"
                f"Holder Count: {analysis.holder_count}"
            ),
        ),
        CardField(
            name="Top Holders",
            value=format_top_holders(analysis.top_holders, analysis.decimals) or "No holders",
        ),
        CardField(
            name="Insider Ownership",
            value=f"{analysis.insider_percent:.2f}% held by top 5 wallets",
        ),
        CardField(name="Bundling Risk", value=f"Score: {analysis.bundling_score:.2f}/1.0"),
    ]

    info = analysis.mint_info
    if info is not None and info.parse_error is None:
        mint_auth = "active" if info.mint_authority_active else "renounced"
        freeze_auth = "active" if info.freeze_authority_active else "none"
        fields.append(
            CardField(
                name="Mint Authority",
                value=(
                    f"On-chain supply: {format_token_amount(info.supply or 0, info.decimals)}\n"
                    f"Mint authority: {mint_auth}\n"
                    f"Freeze authority: {freeze_auth}"
                ),
            )
        )

    if analysis.suspicious_flags:
        fields.append(
            CardField(
                name="⚠️ Warnings",
                value="\n".join(f"• {flag}" for flag in analysis.suspicious_flags),
            )
        )

    fields.extend(_explorer_fields(address, explorers))
    return ReplyCard(
        title="Token Analysis",
        color=COLOR_INFO,
        description=f"Analysis for token: <code>{address}</code>",
        fields=fields,
    )


def render_card(card: ReplyCard) -> str:
    """Render a ReplyCard as Telegram HTML."""
    marker = _COLOR_MARKERS.get(card.color, "▪️")
    parts = [f"{marker} <b>{html.escape(card.title)}</b>", card.description]
    for f in card.fields:
        parts.append(f"\n<b>{html.escape(f.name)}</b>\n{f.value}")
    return "\n".join(parts)

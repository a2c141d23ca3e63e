"""Solana address detection in free-form chat text.

Explorer URLs are checked first: a pasted Solscan/BullX/Photon link wins
over any bare address in the same message. Without a link match, every
base58-looking token of 32-44 chars is collected.
"""

import re
from dataclasses import dataclass

from loguru import logger

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_CHARS = frozenset(BASE58_ALPHABET)

MIN_ADDRESS_LEN = 32
MAX_ADDRESS_LEN = 44

ADDRESS_PATTERN = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")


@dataclass(frozen=True)
class ExplorerLink:
    """External block explorer: used to detect pasted links and to build new ones."""

    name: str
    url: str
    pattern: re.Pattern[str]

    def link_for(self, address: str) -> str:
        return self.url + address


EXPLORERS: tuple[ExplorerLink, ...] = (
    ExplorerLink(
        name="Solscan",
        url="https://solscan.io/account/",
        pattern=re.compile(r"solscan\.io/account/([1-9A-HJ-NP-Za-km-z]{32,44})"),
    ),
    ExplorerLink(
        name="BullX",
        url="https://bullx.io/terminal?chainId=1399811149&address=",
        pattern=re.compile(
            r"bullx\.io/terminal\?chainId=1399811149&address=([1-9A-HJ-NP-Za-km-z]{32,44})"
        ),
    ),
    ExplorerLink(
        name="Photon",
        url="https://photon-sol.tinyastro.io/en/lp/",
        pattern=re.compile(r"photon-sol\.tinyastro\.io/en/lp/([1-9A-HJ-NP-Za-km-z]{32,44})"),
    ),
)


def is_valid_address(address: str) -> bool:
    """Syntactic check only: length and base58 charset, no chain lookup."""
    if not MIN_ADDRESS_LEN <= len(address) <= MAX_ADDRESS_LEN:
        return False
    return all(char in _BASE58_CHARS for char in address)


def extract_addresses(
    text: str | None,
    explorers: tuple[ExplorerLink, ...] = EXPLORERS,
) -> list[str]:
    """Return validated addresses found in text, deduplicated, first-seen order."""
    if not text:
        return []

    for explorer in explorers:
        match = explorer.pattern.search(text)
        if match is None:
            continue
        address = match.group(1)
        if is_valid_address(address):
            logger.debug(f"[EXTRACT] {explorer.name} link -> {address[:12]}")
            return [address]

    found: list[str] = []
    seen: set[str] = set()
    for candidate in ADDRESS_PATTERN.findall(text):
        if candidate in seen:
            continue
        seen.add(candidate)
        if is_valid_address(candidate):
            found.append(candidate)
        else:
            logger.debug(f"[EXTRACT] Dropped invalid candidate {candidate[:12]}")

    return found

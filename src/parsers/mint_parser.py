"""SPL Token mint account decoder.

Works on raw account bytes already fetched via getAccountInfo. Only the
decimals byte is required for holder analysis; the rest of the layout is
decoded when the full 82-byte mint is present.
"""

import struct
from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

# SPL Token mint layout: 82 bytes
# [0:36]   mintAuthorityOption (4) + mintAuthority (32)
# [36:44]  supply (u64)
# [44:45]  decimals (u8)
# [45:46]  isInitialized (bool)
# [46:82]  freezeAuthorityOption (4) + freezeAuthority (32)
SPL_MINT_SIZE = 82
DECIMALS_OFFSET = 44


@dataclass
class MintInfo:
    """Decoded mint account fields."""

    decimals: int = 0
    supply: int | None = None
    mint_authority: str | None = None  # None = renounced
    freeze_authority: str | None = None
    is_initialized: bool = False
    parse_error: str | None = None

    @property
    def mint_authority_active(self) -> bool:
        return self.mint_authority is not None

    @property
    def freeze_authority_active(self) -> bool:
        return self.freeze_authority is not None


def read_decimals(raw: bytes) -> int:
    """Decimals byte at offset 44, or 0 when the data is too short to hold it."""
    if len(raw) < DECIMALS_OFFSET + 1:
        return 0
    return raw[DECIMALS_OFFSET]


def decode_mint(raw: bytes) -> MintInfo:
    """Decode raw mint account bytes. Short data keeps decimals and sets parse_error."""
    decimals = read_decimals(raw)
    if len(raw) < SPL_MINT_SIZE:
        return MintInfo(decimals=decimals, parse_error=f"Data too short: {len(raw)} bytes")

    mint_auth_option = struct.unpack_from("<I", raw, 0)[0]
    mint_authority = str(Pubkey.from_bytes(raw[4:36])) if mint_auth_option == 1 else None

    supply = struct.unpack_from("<Q", raw, 36)[0]
    is_initialized = raw[45] != 0

    freeze_auth_option = struct.unpack_from("<I", raw, 46)[0]
    freeze_authority = str(Pubkey.from_bytes(raw[50:82])) if freeze_auth_option == 1 else None

    return MintInfo(
        decimals=decimals,
        supply=supply,
        mint_authority=mint_authority,
        freeze_authority=freeze_authority,
        is_initialized=is_initialized,
    )

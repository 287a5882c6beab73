"""Copy of Bubblegum program constants and Solana wire sizes."""

from typing import Final

from solders.pubkey import Pubkey

# ---------------------------------------------------------------------------
# Program IDs
# ---------------------------------------------------------------------------
BUBBLEGUM_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "BGUMAp9Gq7iTEuizy4pqaxsTyUCBK68MDfK752saRPUY"
)
SPL_ACCOUNT_COMPRESSION_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "cmtDvXumGCrqC1Age74AVPhSRVXJMd8PJS91L8KbNCK"
)
SPL_NOOP_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "noopb9bkMVfRPU8AsbpTUg8AQkHtKwMYZiFUjNRtMmV"
)
TOKEN_METADATA_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
)
TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
TOKEN_2022_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
)
ASSOCIATED_TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
SYSTEM_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "11111111111111111111111111111111"
)


# ---------------------------------------------------------------------------
# Borsh wire sizes
# ---------------------------------------------------------------------------
BOOL_SIZE: Final[int] = 1
UINT8_SIZE: Final[int] = 1
UINT16_SIZE: Final[int] = 2
UINT32_SIZE: Final[int] = 4
UINT64_SIZE: Final[int] = 8

PUBKEY_SIZE: Final[int] = 32
HASH_SIZE: Final[int] = 32

# address || verified || share
CREATOR_SIZE: Final[int] = PUBKEY_SIZE + BOOL_SIZE + UINT8_SIZE

MAX_UINT8: Final[int] = 2**8 - 1
MAX_UINT16: Final[int] = 2**16 - 1
MAX_UINT32: Final[int] = 2**32 - 1
MAX_UINT64: Final[int] = 2**64 - 1


# ---------------------------------------------------------------------------
# Program derived addresses
# ---------------------------------------------------------------------------
# The bump byte counts as one of the MAX_SEEDS seeds.
MAX_SEEDS: Final[int] = 16
MAX_SEED_LEN: Final[int] = 32
MAX_BUMP: Final[int] = 255
MIN_BUMP: Final[int] = 1

ASSET_SEED: Final[bytes] = b"asset"
METADATA_SEED: Final[bytes] = b"metadata"
EDITION_SEED: Final[bytes] = b"edition"


# ---------------------------------------------------------------------------
# Leaf schema
# ---------------------------------------------------------------------------
DEFAULT_NFT_VERSION: Final[int] = 1

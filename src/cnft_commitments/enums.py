"""Copy of Bubblegum enum discriminants (declaration order of the on-chain variants)."""

from typing import Final

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
TOKEN_STANDARD_NON_FUNGIBLE: Final[int] = 0
TOKEN_STANDARD_FUNGIBLE_ASSET: Final[int] = 1
TOKEN_STANDARD_FUNGIBLE: Final[int] = 2
TOKEN_STANDARD_NON_FUNGIBLE_EDITION: Final[int] = 3

USE_METHOD_BURN: Final[int] = 0
USE_METHOD_MULTIPLE: Final[int] = 1
USE_METHOD_SINGLE: Final[int] = 2

TOKEN_PROGRAM_VERSION_ORIGINAL: Final[int] = 0
TOKEN_PROGRAM_VERSION_TOKEN_2022: Final[int] = 1

from __future__ import annotations


class CnftCommitmentError(Exception):
    """Base class for all SDK errors."""


class AddressDerivationExhaustedError(CnftCommitmentError, RuntimeError):
    """Raised when no bump seed in the allowed range yields an off-curve address."""


class InvalidSeedsError(CnftCommitmentError, ValueError):
    """Raised when PDA seeds exceed the maximum seed count or seed length."""


class InvalidAddressError(CnftCommitmentError, ValueError):
    """Raised when a value cannot be interpreted as a 32-byte Solana address."""


class MetadataEncodingError(CnftCommitmentError, ValueError):
    """
    Raised when a metadata value cannot be represented in its Borsh wire width
    (e.g. a creator share above 255).

    Business limits such as royalty <= 10000 are never checked.
    """


class MetadataArgsParseError(CnftCommitmentError, ValueError):
    """Raised when a mapping cannot be parsed into MetadataArgs."""

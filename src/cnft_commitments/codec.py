from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from borsh_construct import U8, U16, U64, Bool, CStruct, Enum, Option, String, Vec
from construct import ConstructError
from solders.pubkey import Pubkey

from . import constants as const
from .errors import InvalidAddressError, MetadataEncodingError

if TYPE_CHECKING:  # pragma: no cover
    from .models import Collection, Creator, MetadataArgs, Uses

# Anything callers may hand us as an address.
AddressLike = Pubkey | str | bytes | bytearray


def to_pubkey(value: AddressLike, *, name: str = "address") -> Pubkey:
    """
    Coerce a base58 string, 32 raw bytes, or a Pubkey into a Pubkey.
    """
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) != const.PUBKEY_SIZE:
            raise InvalidAddressError(
                f"{name} must be {const.PUBKEY_SIZE} bytes, got {len(value)}"
            )
        return Pubkey.from_bytes(bytes(value))
    if isinstance(value, str):
        try:
            return Pubkey.from_string(value)
        except ValueError as e:
            raise InvalidAddressError(f"{name} is not a valid base58 address") from e
    raise InvalidAddressError(
        f"{name} must be a Pubkey, base58 string or 32 bytes, got {type(value).__name__}"
    )


def _uint_le(value: int, size: int, name: str) -> bytes:
    if value < 0 or value > 2 ** (8 * size) - 1:
        raise ValueError(f"{name} must fit in uint{8 * size}")
    return int(value).to_bytes(size, "little", signed=False)


def u8_le(value: int, *, name: str = "value") -> bytes:
    """Encode an unsigned 8-bit integer."""
    return _uint_le(value, const.UINT8_SIZE, name)


def u16_le(value: int, *, name: str = "value") -> bytes:
    """Encode an unsigned 16-bit integer, little-endian."""
    return _uint_le(value, const.UINT16_SIZE, name)


def u64_le(value: int, *, name: str = "value") -> bytes:
    """Encode an unsigned 64-bit integer, little-endian."""
    return _uint_le(value, const.UINT64_SIZE, name)


# ---------------------------------------------------------------------------
# Borsh layouts (mirrors the Bubblegum IDL types)
# ---------------------------------------------------------------------------
# Variant order is the discriminant order; names match the IntEnum members in models.
TOKEN_STANDARD_LAYOUT = Enum(
    "NON_FUNGIBLE",
    "FUNGIBLE_ASSET",
    "FUNGIBLE",
    "NON_FUNGIBLE_EDITION",
    enum_name="TokenStandard",
)
USE_METHOD_LAYOUT = Enum("BURN", "MULTIPLE", "SINGLE", enum_name="UseMethod")
TOKEN_PROGRAM_VERSION_LAYOUT = Enum(
    "ORIGINAL", "TOKEN_2022", enum_name="TokenProgramVersion"
)

CREATOR_LAYOUT = CStruct(
    "address" / U8[const.PUBKEY_SIZE],
    "verified" / Bool,
    "share" / U8,
)
COLLECTION_LAYOUT = CStruct(
    "verified" / Bool,
    "key" / U8[const.PUBKEY_SIZE],
)
USES_LAYOUT = CStruct(
    "use_method" / USE_METHOD_LAYOUT,
    "remaining" / U64,
    "total" / U64,
)
METADATA_ARGS_LAYOUT = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "primary_sale_happened" / Bool,
    "is_mutable" / Bool,
    "edition_nonce" / Option(U8),
    "token_standard" / Option(TOKEN_STANDARD_LAYOUT),
    "collection" / Option(COLLECTION_LAYOUT),
    "uses" / Option(USES_LAYOUT),
    "token_program_version" / TOKEN_PROGRAM_VERSION_LAYOUT,
    "creators" / Vec(CREATOR_LAYOUT),
)


def _variant(layout: Enum, member: Any) -> Any:
    """Build the borsh-construct enum value for an IntEnum member."""
    return getattr(layout.enum, member.name)()


def _creator_obj(creator: Creator) -> dict[str, object]:
    return {
        "address": bytes(to_pubkey(creator.address, name="creator address")),
        "verified": bool(creator.verified),
        "share": creator.share,
    }


def _collection_obj(collection: Collection | None) -> dict[str, object] | None:
    if collection is None:
        return None
    return {
        "verified": bool(collection.verified),
        "key": bytes(to_pubkey(collection.key, name="collection key")),
    }


def _uses_obj(uses: Uses | None) -> dict[str, object] | None:
    if uses is None:
        return None
    return {
        "use_method": _variant(USE_METHOD_LAYOUT, uses.use_method),
        "remaining": uses.remaining,
        "total": uses.total,
    }


def metadata_to_borsh_obj(metadata: MetadataArgs) -> dict[str, object]:
    """
    Map MetadataArgs onto the plain containers METADATA_ARGS_LAYOUT builds from.
    """
    token_standard = metadata.token_standard
    return {
        "name": metadata.name,
        "symbol": metadata.symbol,
        "uri": metadata.uri,
        "seller_fee_basis_points": metadata.seller_fee_basis_points,
        "primary_sale_happened": bool(metadata.primary_sale_happened),
        "is_mutable": bool(metadata.is_mutable),
        "edition_nonce": metadata.edition_nonce,
        "token_standard": (
            None
            if token_standard is None
            else _variant(TOKEN_STANDARD_LAYOUT, token_standard)
        ),
        "collection": _collection_obj(metadata.collection),
        "uses": _uses_obj(metadata.uses),
        "token_program_version": _variant(
            TOKEN_PROGRAM_VERSION_LAYOUT, metadata.token_program_version
        ),
        "creators": [_creator_obj(c) for c in metadata.creators],
    }


def encode_metadata(metadata: MetadataArgs) -> bytes:
    """
    Borsh-encode the full on-chain MetadataArgs struct.

    This is the exact byte string Bubblegum pre-hashes when computing the data hash,
    so it includes seller_fee_basis_points and the u32-prefixed creators vector.
    """
    try:
        return bytes(METADATA_ARGS_LAYOUT.build(metadata_to_borsh_obj(metadata)))
    except ConstructError as e:
        raise MetadataEncodingError(f"Cannot encode metadata: {e}") from e


def encode_creators(creators: Iterable[Creator]) -> bytes:
    """
    Encode creators back to back with no length prefix.

    The on-chain program sizes this array by the remaining bytes, so the count is implied
    by the caller holding the complete sequence. An empty list encodes to b"".
    """
    try:
        return b"".join(bytes(CREATOR_LAYOUT.build(_creator_obj(c))) for c in creators)
    except ConstructError as e:
        raise MetadataEncodingError(f"Cannot encode creators: {e}") from e

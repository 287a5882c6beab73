from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final, TypeVar

from solders.pubkey import Pubkey

from . import constants as const
from . import enums
from .codec import AddressLike, to_pubkey
from .errors import InvalidAddressError, MetadataArgsParseError


class _WireEnum(enum.IntEnum):
    @property
    def label(self) -> str:
        """Variant name as written by the JS client, e.g. ``NonFungible``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class TokenStandard(_WireEnum):
    NON_FUNGIBLE = enums.TOKEN_STANDARD_NON_FUNGIBLE
    FUNGIBLE_ASSET = enums.TOKEN_STANDARD_FUNGIBLE_ASSET
    FUNGIBLE = enums.TOKEN_STANDARD_FUNGIBLE
    NON_FUNGIBLE_EDITION = enums.TOKEN_STANDARD_NON_FUNGIBLE_EDITION


class UseMethod(_WireEnum):
    BURN = enums.USE_METHOD_BURN
    MULTIPLE = enums.USE_METHOD_MULTIPLE
    SINGLE = enums.USE_METHOD_SINGLE


class TokenProgramVersion(_WireEnum):
    ORIGINAL = enums.TOKEN_PROGRAM_VERSION_ORIGINAL
    TOKEN_2022 = enums.TOKEN_PROGRAM_VERSION_TOKEN_2022


# Applied when a record is built; the hasher encodes whatever the record holds.
DEFAULT_TOKEN_STANDARD: Final[TokenStandard] = TokenStandard.NON_FUNGIBLE

_E = TypeVar("_E", bound=_WireEnum)

_OPTION_KEY = "__option"


def _normalize_enum_name(name: str) -> str:
    return name.replace("_", "").lower()


def _parse_enum(enum_cls: type[_E], value: object, *, name: str) -> _E:
    """
    Accept an enum member, its discriminant, or its name in any of the
    ``NonFungible`` / ``NON_FUNGIBLE`` / ``nonFungible`` spellings.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        raise MetadataArgsParseError(f"{name} must be an enum name or discriminant")
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError as e:
            raise MetadataArgsParseError(
                f"Invalid {enum_cls.__name__} discriminant for {name}: {value}"
            ) from e
    if isinstance(value, str):
        wanted = _normalize_enum_name(value)
        for member in enum_cls:
            if _normalize_enum_name(member.name) == wanted:
                return member
        raise MetadataArgsParseError(
            f"Unknown {enum_cls.__name__} variant for {name}: {value!r}"
        )
    raise MetadataArgsParseError(f"{name} must be an enum name or discriminant")


def _unwrap_option(value: object) -> object:
    """
    Unwrap the JS client's JSON option shape ``{"__option": "Some", "value": x}``.

    Plain values pass through; ``None`` means absent.
    """
    if isinstance(value, Mapping) and _OPTION_KEY in value:
        if value[_OPTION_KEY] == "None":
            return None
        if value[_OPTION_KEY] == "Some":
            return value.get("value")
        raise MetadataArgsParseError(f"Invalid option tag: {value[_OPTION_KEY]!r}")
    return value


def _pick(data: Mapping[str, object], camel: str, snake: str) -> object:
    if camel in data:
        return data[camel]
    return data.get(snake)


def _require(data: Mapping[str, object], camel: str, snake: str) -> object:
    if camel not in data and snake not in data:
        raise MetadataArgsParseError(f"Missing required field: {camel}")
    return _pick(data, camel, snake)


def _coerce_int(value: object, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise MetadataArgsParseError(f"{name} must be an integer")
    try:
        return int(value)
    except ValueError as e:
        raise MetadataArgsParseError(f"{name} must be an integer") from e


def _coerce_bool(value: object, *, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise MetadataArgsParseError(f"{name} must be a boolean")
    return value


def _coerce_address(value: object, *, name: str) -> Pubkey:
    try:
        return to_pubkey(value, name=name)  # type: ignore[arg-type]
    except InvalidAddressError as e:
        raise MetadataArgsParseError(str(e)) from e


@dataclass(frozen=True, slots=True)
class Creator:
    address: Pubkey
    verified: bool = False
    share: int = 0  # percentage, u8

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> Creator:
        return Creator(
            address=_coerce_address(_require(data, "address", "address"), name="creator address"),
            verified=_coerce_bool(
                _pick(data, "verified", "verified"), name="verified", default=False
            ),
            share=_coerce_int(_require(data, "share", "share"), name="share"),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "address": str(self.address),
            "verified": self.verified,
            "share": self.share,
        }


@dataclass(frozen=True, slots=True)
class Collection:
    key: Pubkey
    verified: bool = False

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> Collection:
        return Collection(
            key=_coerce_address(_require(data, "key", "key"), name="collection key"),
            verified=_coerce_bool(
                _pick(data, "verified", "verified"), name="verified", default=False
            ),
        )

    def to_dict(self) -> dict[str, object]:
        return {"verified": self.verified, "key": str(self.key)}


@dataclass(frozen=True, slots=True)
class Uses:
    use_method: UseMethod
    remaining: int
    total: int

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> Uses:
        return Uses(
            use_method=_parse_enum(
                UseMethod, _require(data, "useMethod", "use_method"), name="useMethod"
            ),
            remaining=_coerce_int(_require(data, "remaining", "remaining"), name="remaining"),
            total=_coerce_int(_require(data, "total", "total"), name="total"),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "useMethod": self.use_method.label,
            "remaining": self.remaining,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class MetadataArgs:
    """
    Mutable description of a compressed NFT, as committed by the data and creator hashes.

    Field order is the Borsh wire order. Values are encoded exactly as given; range and
    business rules (royalty <= 10000, shares summing to 100) belong to the on-chain program.
    """

    name: str
    uri: str
    seller_fee_basis_points: int
    symbol: str = ""
    primary_sale_happened: bool = False
    is_mutable: bool = True
    edition_nonce: int | None = None
    token_standard: TokenStandard | None = DEFAULT_TOKEN_STANDARD
    collection: Collection | None = None
    uses: Uses | None = None
    token_program_version: TokenProgramVersion = TokenProgramVersion.ORIGINAL
    creators: tuple[Creator, ...] = field(default_factory=tuple)

    def with_creators(self, creators: Sequence[Creator]) -> MetadataArgs:
        return MetadataArgs(
            name=self.name,
            uri=self.uri,
            seller_fee_basis_points=self.seller_fee_basis_points,
            symbol=self.symbol,
            primary_sale_happened=self.primary_sale_happened,
            is_mutable=self.is_mutable,
            edition_nonce=self.edition_nonce,
            token_standard=self.token_standard,
            collection=self.collection,
            uses=self.uses,
            token_program_version=self.token_program_version,
            creators=tuple(creators),
        )

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> MetadataArgs:
        """
        Parse the JSON/dict form used by the JS client (camelCase keys) or snake_case keys.

        Omitted optional keys take the same defaults as the dataclass; an explicit
        ``null`` (or ``{"__option": "None"}``) means absent, so ``tokenStandard: null``
        encodes as None rather than NonFungible.
        """
        if not isinstance(data, Mapping):
            raise MetadataArgsParseError("metadata must be a mapping")

        name = _require(data, "name", "name")
        uri = _require(data, "uri", "uri")
        if not isinstance(name, str) or not isinstance(uri, str):
            raise MetadataArgsParseError("name and uri must be strings")
        symbol = _pick(data, "symbol", "symbol")
        if symbol is None:
            symbol = ""
        if not isinstance(symbol, str):
            raise MetadataArgsParseError("symbol must be a string")

        seller_fee = _coerce_int(
            _require(data, "sellerFeeBasisPoints", "seller_fee_basis_points"),
            name="sellerFeeBasisPoints",
        )

        primary_sale = _pick(data, "primarySaleHappened", "primary_sale_happened")
        is_mutable = _pick(data, "isMutable", "is_mutable")

        edition_nonce_raw = _unwrap_option(_pick(data, "editionNonce", "edition_nonce"))
        edition_nonce = (
            None
            if edition_nonce_raw is None
            else _coerce_int(edition_nonce_raw, name="editionNonce")
        )

        token_standard: TokenStandard | None
        if "tokenStandard" in data or "token_standard" in data:
            ts_raw = _unwrap_option(_pick(data, "tokenStandard", "token_standard"))
            token_standard = (
                None
                if ts_raw is None
                else _parse_enum(TokenStandard, ts_raw, name="tokenStandard")
            )
        else:
            token_standard = DEFAULT_TOKEN_STANDARD

        collection_raw = _unwrap_option(_pick(data, "collection", "collection"))
        if collection_raw is not None and not isinstance(collection_raw, Mapping):
            raise MetadataArgsParseError("collection must be a mapping")
        uses_raw = _unwrap_option(_pick(data, "uses", "uses"))
        if uses_raw is not None and not isinstance(uses_raw, Mapping):
            raise MetadataArgsParseError("uses must be a mapping")

        tpv_raw = _pick(data, "tokenProgramVersion", "token_program_version")
        token_program_version = (
            TokenProgramVersion.ORIGINAL
            if tpv_raw is None
            else _parse_enum(TokenProgramVersion, tpv_raw, name="tokenProgramVersion")
        )

        creators_raw = _pick(data, "creators", "creators") or []
        if not isinstance(creators_raw, Sequence) or isinstance(creators_raw, (str, bytes)):
            raise MetadataArgsParseError("creators must be a list")
        creators: list[Creator] = []
        for c in creators_raw:
            if isinstance(c, Creator):
                creators.append(c)
            elif isinstance(c, Mapping):
                creators.append(Creator.from_dict(c))
            else:
                raise MetadataArgsParseError("each creator must be a mapping")

        return MetadataArgs(
            name=name,
            uri=uri,
            seller_fee_basis_points=seller_fee,
            symbol=symbol,
            primary_sale_happened=_coerce_bool(
                primary_sale, name="primarySaleHappened", default=False
            ),
            is_mutable=_coerce_bool(is_mutable, name="isMutable", default=True),
            edition_nonce=edition_nonce,
            token_standard=token_standard,
            collection=None if collection_raw is None else Collection.from_dict(collection_raw),
            uses=None if uses_raw is None else Uses.from_dict(uses_raw),
            token_program_version=token_program_version,
            creators=tuple(creators),
        )

    def to_dict(self) -> dict[str, object]:
        """Render the camelCase JSON form accepted by :meth:`from_dict`."""
        return {
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "sellerFeeBasisPoints": self.seller_fee_basis_points,
            "primarySaleHappened": self.primary_sale_happened,
            "isMutable": self.is_mutable,
            "editionNonce": self.edition_nonce,
            "tokenStandard": None if self.token_standard is None else self.token_standard.label,
            "collection": None if self.collection is None else self.collection.to_dict(),
            "uses": None if self.uses is None else self.uses.to_dict(),
            "tokenProgramVersion": self.token_program_version.label,
            "creators": [c.to_dict() for c in self.creators],
        }


@dataclass(frozen=True, slots=True)
class LeafCommitmentInput:
    """
    Everything the leaf hash commits to.

    ``delegate`` falls back to ``owner`` and ``nft_version`` to 1 when not given.
    """

    merkle_tree: AddressLike
    leaf_index: int
    owner: AddressLike
    metadata: MetadataArgs
    delegate: AddressLike | None = None
    nft_version: int | None = None

    @property
    def resolved_delegate(self) -> AddressLike:
        return self.owner if self.delegate is None else self.delegate

    @property
    def resolved_nft_version(self) -> int:
        return const.DEFAULT_NFT_VERSION if self.nft_version is None else self.nft_version

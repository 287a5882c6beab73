from __future__ import annotations

from collections.abc import Iterable, Sequence

from Crypto.Hash import keccak
from solders.pubkey import Pubkey

from . import constants as const
from .codec import (
    AddressLike,
    encode_creators,
    encode_metadata,
    to_pubkey,
    u8_le,
    u16_le,
    u64_le,
)
from .models import Creator, LeafCommitmentInput, MetadataArgs
from .pda import find_leaf_asset_id_pda


def keccak256(data: bytes | Sequence[bytes]) -> bytes:
    """
    Keccak-256 digest (the pre-standard padding used by Solana's ``keccak::hashv``, not SHA3-256).

    A sequence of segments is concatenated before hashing, never hashed piecewise.
    """
    h = keccak.new(digest_bits=256)
    if isinstance(data, (bytes, bytearray, memoryview)):
        h.update(bytes(data))
    else:
        for segment in data:
            h.update(bytes(segment))
    return h.digest()


def compute_data_hash(metadata: MetadataArgs) -> bytes:
    """
    Compute data_hash = keccak(keccak(borsh(MetadataArgs)) || seller_fee_basis_points as u16 LE)

    The struct digest is hashed a second time together with the royalty, exactly as the
    on-chain program does; a single pass over the encoding gives a different value.

    Returns:
        32-byte data hash
    """
    return keccak256(
        [
            keccak256(encode_metadata(metadata)),
            u16_le(metadata.seller_fee_basis_points, name="seller_fee_basis_points"),
        ]
    )


def compute_creator_hash(creators: Iterable[Creator]) -> bytes:
    """
    Compute creator_hash = keccak(creator[0] || creator[1] || ...)

    Order matters. No creators hashes the empty byte string.
    """
    return keccak256(encode_creators(creators))


def compute_metadata_hash(metadata: MetadataArgs) -> bytes:
    """data_hash || creator_hash (64 bytes)."""
    return compute_data_hash(metadata) + compute_creator_hash(metadata.creators)


def hash_leaf(
    leaf: LeafCommitmentInput,
    *,
    program_id: Pubkey = const.BUBBLEGUM_PROGRAM_ID,
) -> bytes:
    """
    Compute the V1 leaf hash stored in the concurrent Merkle tree.

    leaf = keccak(version || asset_id || owner || delegate || nonce || data_hash || creator_hash)

    where nonce is the leaf index as u64 LE and asset_id is the leaf asset PDA for
    (merkle_tree, leaf_index) under ``program_id``.

    Returns:
        32-byte leaf hash
    """
    asset_id = find_leaf_asset_id_pda(
        leaf.merkle_tree, leaf.leaf_index, program_id=program_id
    ).address
    return keccak256(
        [
            u8_le(leaf.resolved_nft_version, name="nft_version"),
            bytes(asset_id),
            bytes(to_pubkey(leaf.owner, name="owner")),
            bytes(to_pubkey(leaf.resolved_delegate, name="delegate")),
            u64_le(leaf.leaf_index, name="leaf_index"),
            compute_data_hash(leaf.metadata),
            compute_creator_hash(leaf.metadata.creators),
        ]
    )


def compute_leaf_hash(
    *,
    merkle_tree: AddressLike,
    owner: AddressLike,
    leaf_index: int,
    metadata: MetadataArgs,
    delegate: AddressLike | None = None,
    nft_version: int | None = None,
    program_id: Pubkey = const.BUBBLEGUM_PROGRAM_ID,
) -> bytes:
    """
    Keyword form of :func:`hash_leaf`.

    Args:
        merkle_tree: Address of the concurrent Merkle tree account
        owner: Leaf owner
        leaf_index: Leaf index (u64), also the leaf nonce
        metadata: Metadata committed by the data and creator hashes
        delegate: Leaf delegate; defaults to ``owner``
        nft_version: Leaf schema version byte; defaults to 1
        program_id: Program the asset id PDA is derived under

    Returns:
        32-byte leaf hash
    """
    return hash_leaf(
        LeafCommitmentInput(
            merkle_tree=merkle_tree,
            leaf_index=leaf_index,
            owner=owner,
            metadata=metadata,
            delegate=delegate,
            nft_version=nft_version,
        ),
        program_id=program_id,
    )

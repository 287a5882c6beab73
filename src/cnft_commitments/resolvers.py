"""
Glue between the commitment hasher and instruction builders.

Instruction builders (generated from the Bubblegum IDL) and tree-state readers
(RPC account fetch + concurrent Merkle tree parsing) live outside this package; they
are described here only by the shapes this package produces or consumes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from solders.pubkey import Pubkey

from . import constants as const
from .codec import AddressLike, to_pubkey
from .errors import MetadataArgsParseError
from .hashing import compute_creator_hash, compute_data_hash, hash_leaf
from .models import Creator, LeafCommitmentInput, MetadataArgs
from .pda import resolve_asset_identity


@dataclass(frozen=True, slots=True)
class TreeState:
    root: bytes  # current root, 32 bytes
    next_leaf_index: int  # the tree's active index; the next mint lands here


class TreeStateReader(Protocol):
    def get_tree_state(self, merkle_tree: Pubkey) -> TreeState: ...


@dataclass(frozen=True, slots=True)
class LeafUpdateArgs:
    """
    Arguments a transfer / burn / delegate / verify instruction needs to prove the current leaf.
    """

    root: bytes
    data_hash: bytes
    creator_hash: bytes
    nonce: int
    index: int
    proof: tuple[bytes, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class MintPrediction:
    leaf_index: int
    asset_id: Pubkey
    leaf_hash: bytes


def _coerce_metadata(value: object) -> MetadataArgs:
    if isinstance(value, MetadataArgs):
        return value
    if isinstance(value, Mapping):
        return MetadataArgs.from_dict(value)
    raise MetadataArgsParseError("args['metadata'] must be MetadataArgs or a mapping")


def _coerce_creators(value: object) -> tuple[Creator, ...]:
    if isinstance(value, MetadataArgs):
        return value.creators
    if isinstance(value, Mapping):
        raw = value.get("creators") or []
        if not isinstance(raw, Sequence):
            raise MetadataArgsParseError("creators must be a list")
        return tuple(c if isinstance(c, Creator) else Creator.from_dict(c) for c in raw)
    raise MetadataArgsParseError("args['metadata'] must be MetadataArgs or a mapping")


def resolve_data_hash(args: Mapping[str, object]) -> bytes:
    """Default value for an instruction's ``data_hash`` argument, from ``args["metadata"]``."""
    if "metadata" not in args:
        raise MetadataArgsParseError("args must contain 'metadata'")
    return compute_data_hash(_coerce_metadata(args["metadata"]))


def resolve_creator_hash(args: Mapping[str, object]) -> bytes:
    """
    Default value for an instruction's ``creator_hash`` argument.

    Only ``args["metadata"]["creators"]`` is read, so a partial metadata mapping is enough.
    """
    if "metadata" not in args:
        raise MetadataArgsParseError("args must contain 'metadata'")
    return compute_creator_hash(_coerce_creators(args["metadata"]))


def build_leaf_update_args(
    metadata: MetadataArgs,
    *,
    leaf_index: int,
    root: bytes,
    proof: Sequence[bytes] = (),
) -> LeafUpdateArgs:
    """
    Bundle the proof-of-current-state arguments for a leaf.

    Bubblegum V1 leaves use the leaf index as their nonce.
    """
    if len(root) != const.HASH_SIZE:
        raise ValueError(f"root must be {const.HASH_SIZE} bytes")
    for i, node in enumerate(proof):
        if len(node) != const.HASH_SIZE:
            raise ValueError(f"proof node {i} must be {const.HASH_SIZE} bytes")
    return LeafUpdateArgs(
        root=bytes(root),
        data_hash=compute_data_hash(metadata),
        creator_hash=compute_creator_hash(metadata.creators),
        nonce=leaf_index,
        index=leaf_index,
        proof=tuple(bytes(p) for p in proof),
    )


def predict_mint(
    reader: TreeStateReader,
    *,
    merkle_tree: AddressLike,
    owner: AddressLike,
    metadata: MetadataArgs,
    delegate: AddressLike | None = None,
    program_id: Pubkey = const.BUBBLEGUM_PROGRAM_ID,
) -> MintPrediction:
    """
    Predict the asset id and leaf hash a mint into `merkle_tree` will produce.

    Only valid while no other mint lands first; callers needing resilience against
    concurrent mints or RPC failures retry around this call.
    """
    tree = to_pubkey(merkle_tree, name="merkle_tree")
    state = reader.get_tree_state(tree)
    leaf_index = state.next_leaf_index
    return MintPrediction(
        leaf_index=leaf_index,
        asset_id=resolve_asset_identity(tree, leaf_index, program_id=program_id),
        leaf_hash=hash_leaf(
            LeafCommitmentInput(
                merkle_tree=tree,
                leaf_index=leaf_index,
                owner=owner,
                metadata=metadata,
                delegate=delegate,
            ),
            program_id=program_id,
        ),
    )

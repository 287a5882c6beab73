# ruff: noqa: RUF022
"""
Off-chain commitments for Metaplex Bubblegum compressed NFTs.

Public entrypoints:
- :func:`cnft_commitments.hashing.compute_data_hash`
- :func:`cnft_commitments.hashing.compute_creator_hash`
- :func:`cnft_commitments.hashing.compute_leaf_hash`
- :func:`cnft_commitments.pda.resolve_asset_identity`
- :class:`cnft_commitments.hasher.CompressedNftHasher`

Every hash here must match the on-chain program byte for byte; a mismatch makes the
program reject the transfer, burn, delegate or verify request that carries it.
"""

from __future__ import annotations

from . import constants, enums
from .codec import encode_creators, encode_metadata, to_pubkey
from .errors import (
    AddressDerivationExhaustedError,
    CnftCommitmentError,
    InvalidAddressError,
    InvalidSeedsError,
    MetadataArgsParseError,
    MetadataEncodingError,
)
from .hasher import CompressedNftHasher, HasherConfig
from .hashing import (
    compute_creator_hash,
    compute_data_hash,
    compute_leaf_hash,
    compute_metadata_hash,
    hash_leaf,
    keccak256,
)
from .models import (
    DEFAULT_TOKEN_STANDARD,
    Collection,
    Creator,
    LeafCommitmentInput,
    MetadataArgs,
    TokenProgramVersion,
    TokenStandard,
    UseMethod,
    Uses,
)
from .pda import (
    ProgramDerivedAddress,
    create_program_address,
    find_associated_token_pda,
    find_leaf_asset_id_pda,
    find_master_edition_pda,
    find_metadata_pda,
    find_mint_authority_pda,
    find_program_address,
    find_tree_config_pda,
    resolve_asset_identity,
)
from .resolvers import (
    LeafUpdateArgs,
    MintPrediction,
    TreeState,
    TreeStateReader,
    build_leaf_update_args,
    predict_mint,
    resolve_creator_hash,
    resolve_data_hash,
)

__all__ = [
    # Facade
    "CompressedNftHasher",
    "HasherConfig",
    # Codec
    "encode_creators",
    "encode_metadata",
    "to_pubkey",
    # Errors
    "AddressDerivationExhaustedError",
    "CnftCommitmentError",
    "InvalidAddressError",
    "InvalidSeedsError",
    "MetadataArgsParseError",
    "MetadataEncodingError",
    # Hashing
    "compute_creator_hash",
    "compute_data_hash",
    "compute_leaf_hash",
    "compute_metadata_hash",
    "hash_leaf",
    "keccak256",
    # Models
    "DEFAULT_TOKEN_STANDARD",
    "Collection",
    "Creator",
    "LeafCommitmentInput",
    "MetadataArgs",
    "TokenProgramVersion",
    "TokenStandard",
    "UseMethod",
    "Uses",
    # PDAs
    "ProgramDerivedAddress",
    "create_program_address",
    "find_associated_token_pda",
    "find_leaf_asset_id_pda",
    "find_master_edition_pda",
    "find_metadata_pda",
    "find_mint_authority_pda",
    "find_program_address",
    "find_tree_config_pda",
    "resolve_asset_identity",
    # Resolvers
    "LeafUpdateArgs",
    "MintPrediction",
    "TreeState",
    "TreeStateReader",
    "build_leaf_update_args",
    "predict_mint",
    "resolve_creator_hash",
    "resolve_data_hash",
    # Constants
    "constants",
    # Enums
    "enums",
]

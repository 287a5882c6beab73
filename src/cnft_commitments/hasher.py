from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from solders.pubkey import Pubkey

from . import constants as const
from .codec import AddressLike, to_pubkey
from .hashing import (
    compute_creator_hash,
    compute_data_hash,
    compute_metadata_hash,
    hash_leaf,
)
from .models import Creator, LeafCommitmentInput, MetadataArgs
from .pda import resolve_asset_identity
from .resolvers import LeafUpdateArgs, build_leaf_update_args

logger = logging.getLogger(__name__)

ENV_PROGRAM_ID = "CNFT_BUBBLEGUM_PROGRAM_ID"
ENV_NFT_VERSION = "CNFT_NFT_VERSION"


@dataclass(frozen=True, slots=True)
class HasherConfig:
    """
    Configuration for a Bubblegum deployment.

    `program_id` only needs overriding for forks or local test validators that deploy
    Bubblegum under a different address.
    """

    program_id: Pubkey = const.BUBBLEGUM_PROGRAM_ID
    nft_version: int = const.DEFAULT_NFT_VERSION

    def __post_init__(self) -> None:
        if not isinstance(self.program_id, Pubkey):
            raise TypeError("`HasherConfig.program_id` must be a Pubkey")
        if not (0 <= self.nft_version <= const.MAX_UINT8):
            raise ValueError("`HasherConfig.nft_version` must fit in uint8")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HasherConfig:
        """
        Build a config from CNFT_BUBBLEGUM_PROGRAM_ID and CNFT_NFT_VERSION.

        Unset or empty variables keep the defaults.
        """
        env = os.environ if environ is None else environ
        program_raw = env.get(ENV_PROGRAM_ID)
        version_raw = env.get(ENV_NFT_VERSION)

        program_id = (
            const.BUBBLEGUM_PROGRAM_ID
            if not program_raw
            else to_pubkey(program_raw, name=ENV_PROGRAM_ID)
        )
        try:
            nft_version = (
                const.DEFAULT_NFT_VERSION if not version_raw else int(version_raw)
            )
        except ValueError as e:
            raise ValueError(f"{ENV_NFT_VERSION} must be an integer") from e
        return cls(program_id=program_id, nft_version=nft_version)


class CompressedNftHasher:
    """
    Facade over the commitment functions, bound to one Bubblegum deployment.
    """

    def __init__(self, *, config: HasherConfig | None = None) -> None:
        self.config = config or HasherConfig()
        logger.debug(
            "CompressedNftHasher bound to program %s (nft version %d)",
            self.config.program_id,
            self.config.nft_version,
        )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CompressedNftHasher:
        return cls(config=HasherConfig.from_env(environ))

    # ------------------------------------------------------------------
    # Commitments
    # ------------------------------------------------------------------

    def data_hash(self, metadata: MetadataArgs) -> bytes:
        return compute_data_hash(metadata)

    def creator_hash(self, creators: Iterable[Creator]) -> bytes:
        return compute_creator_hash(creators)

    def metadata_hash(self, metadata: MetadataArgs) -> bytes:
        return compute_metadata_hash(metadata)

    def asset_id(self, merkle_tree: AddressLike, leaf_index: int) -> Pubkey:
        return resolve_asset_identity(
            merkle_tree, leaf_index, program_id=self.config.program_id
        )

    def leaf_hash(
        self,
        *,
        merkle_tree: AddressLike,
        owner: AddressLike,
        leaf_index: int,
        metadata: MetadataArgs,
        delegate: AddressLike | None = None,
        nft_version: int | None = None,
    ) -> bytes:
        """
        Leaf hash under the configured program; `nft_version` falls back to the config.
        """
        return hash_leaf(
            LeafCommitmentInput(
                merkle_tree=merkle_tree,
                leaf_index=leaf_index,
                owner=owner,
                metadata=metadata,
                delegate=delegate,
                nft_version=(
                    self.config.nft_version if nft_version is None else nft_version
                ),
            ),
            program_id=self.config.program_id,
        )

    def leaf_update_args(
        self,
        metadata: MetadataArgs,
        *,
        leaf_index: int,
        root: bytes,
        proof: Sequence[bytes] = (),
    ) -> LeafUpdateArgs:
        return build_leaf_update_args(
            metadata, leaf_index=leaf_index, root=root, proof=proof
        )

"""
Unit tests for cnft_commitments.hasher module.

Tests cover:
- HasherConfig validation
- HasherConfig.from_env / CompressedNftHasher.from_env
- CompressedNftHasher delegation to the commitment functions
"""

from typing import Any

import pytest
from solders.pubkey import Pubkey

from cnft_commitments import (
    CompressedNftHasher,
    HasherConfig,
    InvalidAddressError,
    MetadataArgs,
    constants as const,
)
from cnft_commitments.hasher import ENV_NFT_VERSION, ENV_PROGRAM_ID
from cnft_commitments.hashing import (
    compute_creator_hash,
    compute_data_hash,
    compute_leaf_hash,
    compute_metadata_hash,
)
from cnft_commitments.pda import resolve_asset_identity
from tests.helpers.factories import DELEGATE, MERKLE_TREE, OWNER

CUSTOM_PROGRAM = Pubkey.from_bytes(bytes([5] * 32))


class TestHasherConfig:
    """Tests for HasherConfig."""

    def test_defaults(self) -> None:
        config = HasherConfig()
        assert config.program_id == const.BUBBLEGUM_PROGRAM_ID
        assert config.nft_version == const.DEFAULT_NFT_VERSION

    def test_program_id_must_be_pubkey(self) -> None:
        with pytest.raises(TypeError, match="program_id"):
            HasherConfig(program_id=str(CUSTOM_PROGRAM))  # type: ignore[arg-type]

    @pytest.mark.parametrize("version", [-1, 256])
    def test_nft_version_must_fit_u8(self, version: int) -> None:
        with pytest.raises(ValueError, match="nft_version"):
            HasherConfig(nft_version=version)

    def test_frozen(self) -> None:
        config = HasherConfig()
        with pytest.raises(AttributeError):
            config.nft_version = 2  # type: ignore[misc]


class TestHasherConfigFromEnv:
    """Tests for HasherConfig.from_env."""

    def test_empty_environment_keeps_defaults(self) -> None:
        assert HasherConfig.from_env({}) == HasherConfig()

    def test_empty_values_keep_defaults(self) -> None:
        assert HasherConfig.from_env({ENV_PROGRAM_ID: "", ENV_NFT_VERSION: ""}) == HasherConfig()

    def test_reads_both_variables(self) -> None:
        config = HasherConfig.from_env(
            {ENV_PROGRAM_ID: str(CUSTOM_PROGRAM), ENV_NFT_VERSION: "2"}
        )
        assert config.program_id == CUSTOM_PROGRAM
        assert config.nft_version == 2

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_PROGRAM_ID, str(CUSTOM_PROGRAM))
        monkeypatch.delenv(ENV_NFT_VERSION, raising=False)
        config = HasherConfig.from_env()
        assert config.program_id == CUSTOM_PROGRAM
        assert config.nft_version == const.DEFAULT_NFT_VERSION

    def test_bad_program_id_raises(self) -> None:
        with pytest.raises(InvalidAddressError, match=ENV_PROGRAM_ID):
            HasherConfig.from_env({ENV_PROGRAM_ID: "not-an-address"})

    def test_non_integer_version_raises(self) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            HasherConfig.from_env({ENV_NFT_VERSION: "v1"})

    def test_out_of_range_version_raises(self) -> None:
        with pytest.raises(ValueError, match="uint8"):
            HasherConfig.from_env({ENV_NFT_VERSION: "300"})


class TestCompressedNftHasher:
    """Tests for the CompressedNftHasher facade."""

    @pytest.fixture
    def hasher(self) -> CompressedNftHasher:
        return CompressedNftHasher()

    def test_default_config(self, hasher: CompressedNftHasher) -> None:
        assert hasher.config == HasherConfig()

    def test_from_env(self) -> None:
        hasher = CompressedNftHasher.from_env({ENV_NFT_VERSION: "2"})
        assert hasher.config.nft_version == 2

    def test_data_and_creator_hash(
        self, hasher: CompressedNftHasher, rich_metadata: MetadataArgs
    ) -> None:
        assert hasher.data_hash(rich_metadata) == compute_data_hash(rich_metadata)
        assert hasher.creator_hash(rich_metadata.creators) == compute_creator_hash(
            rich_metadata.creators
        )
        assert hasher.metadata_hash(rich_metadata) == compute_metadata_hash(rich_metadata)

    def test_asset_id(self, hasher: CompressedNftHasher, leaf_vectors: dict[str, Any]) -> None:
        vector = leaf_vectors["assetIds"][1]
        assert str(hasher.asset_id(MERKLE_TREE, vector["leafIndex"])) == vector["address"]

    def test_leaf_hash_golden(
        self,
        hasher: CompressedNftHasher,
        rich_metadata: MetadataArgs,
        leaf_vectors: dict[str, Any],
    ) -> None:
        result = hasher.leaf_hash(
            merkle_tree=MERKLE_TREE,
            owner=OWNER,
            delegate=DELEGATE,
            leaf_index=5,
            metadata=rich_metadata,
        )
        assert result.hex() == leaf_vectors["leaves"][3]["leafHash"]

    def test_leaf_hash_uses_configured_version(
        self, base_metadata: MetadataArgs, leaf_vectors: dict[str, Any]
    ) -> None:
        hasher = CompressedNftHasher(config=HasherConfig(nft_version=2))
        result = hasher.leaf_hash(
            merkle_tree=MERKLE_TREE, owner=OWNER, leaf_index=0, metadata=base_metadata
        )
        assert result.hex() == leaf_vectors["leaves"][2]["leafHash"]

    def test_explicit_version_overrides_config(self, base_metadata: MetadataArgs) -> None:
        hasher = CompressedNftHasher(config=HasherConfig(nft_version=2))
        result = hasher.leaf_hash(
            merkle_tree=MERKLE_TREE,
            owner=OWNER,
            leaf_index=0,
            metadata=base_metadata,
            nft_version=1,
        )
        assert result == compute_leaf_hash(
            merkle_tree=MERKLE_TREE, owner=OWNER, leaf_index=0, metadata=base_metadata
        )

    def test_custom_program_id(self, base_metadata: MetadataArgs) -> None:
        hasher = CompressedNftHasher(config=HasherConfig(program_id=CUSTOM_PROGRAM))
        assert hasher.asset_id(MERKLE_TREE, 0) == resolve_asset_identity(
            MERKLE_TREE, 0, program_id=CUSTOM_PROGRAM
        )
        assert hasher.leaf_hash(
            merkle_tree=MERKLE_TREE, owner=OWNER, leaf_index=0, metadata=base_metadata
        ) == compute_leaf_hash(
            merkle_tree=MERKLE_TREE,
            owner=OWNER,
            leaf_index=0,
            metadata=base_metadata,
            program_id=CUSTOM_PROGRAM,
        )

    def test_leaf_update_args(
        self, hasher: CompressedNftHasher, base_metadata: MetadataArgs
    ) -> None:
        args = hasher.leaf_update_args(base_metadata, leaf_index=3, root=bytes(32))
        assert args.index == args.nonce == 3
        assert args.data_hash == compute_data_hash(base_metadata)

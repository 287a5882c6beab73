"""
Program derived address helpers.

Addresses come from solders' ``Pubkey.create_program_address``; this module adds the
seed limit checks and the bump search (255 down to 1, first off-curve address wins)
so their failures surface as this package's errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from solders.pubkey import Pubkey

from . import constants as const
from .codec import AddressLike, to_pubkey, u64_le
from .errors import AddressDerivationExhaustedError, InvalidSeedsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProgramDerivedAddress:
    address: Pubkey
    bump: int

    def __iter__(self) -> Iterator[Pubkey | int]:
        # Allows `address, bump = find_program_address(...)`.
        yield self.address
        yield self.bump


def _check_seeds(seeds: Sequence[bytes], *, with_bump: bool) -> None:
    limit = const.MAX_SEEDS - 1 if with_bump else const.MAX_SEEDS
    if len(seeds) > limit:
        raise InvalidSeedsError(f"At most {limit} seeds allowed, got {len(seeds)}")
    for i, seed in enumerate(seeds):
        if len(seed) > const.MAX_SEED_LEN:
            raise InvalidSeedsError(
                f"Seed {i} is {len(seed)} bytes; max is {const.MAX_SEED_LEN}"
            )


def _create(seeds: list[bytes], program: Pubkey) -> Pubkey:
    # solders raises PubkeyError (not exported by solders.pubkey) for an on-curve result;
    # seed limits are checked by the callers, so that is the only failure left here.
    try:
        return Pubkey.create_program_address(seeds, program)
    except Exception as e:
        raise InvalidSeedsError("Derived address lies on the ed25519 curve") from e


def create_program_address(seeds: Sequence[bytes], program_id: AddressLike) -> Pubkey:
    """
    Derive the address for fully specified seeds (bump included).

    Raises:
        InvalidSeedsError: if the seeds violate the limits or the result lies on the curve.
    """
    seeds = [bytes(s) for s in seeds]
    _check_seeds(seeds, with_bump=False)
    return _create(seeds, to_pubkey(program_id, name="program_id"))


def find_program_address(
    seeds: Sequence[bytes], program_id: AddressLike
) -> ProgramDerivedAddress:
    """
    Search bumps 255 down to 1 and return the first off-curve address.

    Raises:
        InvalidSeedsError: if there are more than 15 seeds or a seed is longer than 32 bytes.
        AddressDerivationExhaustedError: if every bump yields an on-curve point.
    """
    seeds = [bytes(s) for s in seeds]
    _check_seeds(seeds, with_bump=True)
    program = to_pubkey(program_id, name="program_id")

    for bump in range(const.MAX_BUMP, const.MIN_BUMP - 1, -1):
        try:
            address = _create([*seeds, bytes([bump])], program)
        except InvalidSeedsError:
            continue
        logger.debug("Derived PDA %s (bump %d) under %s", address, bump, program)
        return ProgramDerivedAddress(address=address, bump=bump)

    raise AddressDerivationExhaustedError(
        f"No viable bump seed in {const.MIN_BUMP}..{const.MAX_BUMP} for program {program}"
    )


# ---------------------------------------------------------------------------
# Bubblegum
# ---------------------------------------------------------------------------


def find_leaf_asset_id_pda(
    merkle_tree: AddressLike,
    leaf_index: int,
    *,
    program_id: AddressLike = const.BUBBLEGUM_PROGRAM_ID,
) -> ProgramDerivedAddress:
    """Seeds: "asset", merkle tree, leaf index (u64 LE)."""
    return find_program_address(
        [
            const.ASSET_SEED,
            bytes(to_pubkey(merkle_tree, name="merkle_tree")),
            u64_le(leaf_index, name="leaf_index"),
        ],
        program_id,
    )


def resolve_asset_identity(
    merkle_tree: AddressLike,
    leaf_index: int,
    *,
    program_id: AddressLike = const.BUBBLEGUM_PROGRAM_ID,
) -> Pubkey:
    """
    Return the asset id of the leaf at `leaf_index` in `merkle_tree`.

    The same (tree, index) pair always resolves to the same address.
    """
    return find_leaf_asset_id_pda(merkle_tree, leaf_index, program_id=program_id).address


def find_tree_config_pda(
    merkle_tree: AddressLike,
    *,
    program_id: AddressLike = const.BUBBLEGUM_PROGRAM_ID,
) -> ProgramDerivedAddress:
    return find_program_address(
        [bytes(to_pubkey(merkle_tree, name="merkle_tree"))], program_id
    )


def find_mint_authority_pda(
    mint: AddressLike,
    *,
    program_id: AddressLike = const.BUBBLEGUM_PROGRAM_ID,
) -> ProgramDerivedAddress:
    return find_program_address([bytes(to_pubkey(mint, name="mint"))], program_id)


# ---------------------------------------------------------------------------
# Token Metadata / Associated Token
# ---------------------------------------------------------------------------


def find_metadata_pda(
    mint: AddressLike,
    *,
    program_id: AddressLike = const.TOKEN_METADATA_PROGRAM_ID,
) -> ProgramDerivedAddress:
    """Seeds: "metadata", token metadata program, mint."""
    program = to_pubkey(program_id, name="program_id")
    return find_program_address(
        [const.METADATA_SEED, bytes(program), bytes(to_pubkey(mint, name="mint"))],
        program,
    )


def find_master_edition_pda(
    mint: AddressLike,
    *,
    program_id: AddressLike = const.TOKEN_METADATA_PROGRAM_ID,
) -> ProgramDerivedAddress:
    """Seeds: "metadata", token metadata program, mint, "edition"."""
    program = to_pubkey(program_id, name="program_id")
    return find_program_address(
        [
            const.METADATA_SEED,
            bytes(program),
            bytes(to_pubkey(mint, name="mint")),
            const.EDITION_SEED,
        ],
        program,
    )


def find_associated_token_pda(
    owner: AddressLike,
    mint: AddressLike,
    *,
    token_program: AddressLike = const.TOKEN_PROGRAM_ID,
    program_id: AddressLike = const.ASSOCIATED_TOKEN_PROGRAM_ID,
) -> ProgramDerivedAddress:
    """Seeds: owner wallet, token program, mint."""
    return find_program_address(
        [
            bytes(to_pubkey(owner, name="owner")),
            bytes(to_pubkey(token_program, name="token_program")),
            bytes(to_pubkey(mint, name="mint")),
        ],
        program_id,
    )

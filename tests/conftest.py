from typing import Any

import pytest

from cnft_commitments import MetadataArgs

from tests.helpers.factories import create_metadata, create_rich_metadata, load_leaf_vectors


@pytest.fixture(scope="session")
def leaf_vectors() -> dict[str, Any]:
    return load_leaf_vectors()


@pytest.fixture
def base_metadata() -> MetadataArgs:
    return create_metadata()


@pytest.fixture
def rich_metadata() -> MetadataArgs:
    return create_rich_metadata()

from __future__ import annotations

from collections.abc import Iterator

import pytest

from cavern.util import rng

TEST_SEED = "cavern-tests"


@pytest.fixture(autouse=True)
def seeded_rng_streams() -> Iterator[None]:
    """Seed the shared generator streams before each test, unseed after."""
    rng.init(TEST_SEED)
    yield
    rng.reset(None)

"""Deterministic random number generation with isolated streams.

Each generator (cave, cave v2, the two maze carvers) draws from its own stream
derived from a single master seed. As a result:

1. The same master seed always reproduces the same maps.
2. A change in how much randomness one generator consumes never shifts the
   maps another generator produces.

Usage:
    # At startup
    from cavern.util import rng
    rng.init(config.RANDOM_SEED)

    # In any module - cache the stream reference
    _rng = rng.get("map.cave")

    def fill_roll() -> int:
        return _rng.randrange(1, 100)

    # After rng.reset(), cached references automatically use the new stream

Bounds convention:
    Generation code only ever draws with randrange(), which is half-open:
    randrange(1, 100) yields 1..99 and randrange(len(seq)) yields a valid index
    into the whole of seq.

Domain naming convention (hierarchical):
    - "map.cave", "map.cave2"
    - "map.maze.prims", "map.maze.depth_first"
"""

from __future__ import annotations

import zlib
from random import Random
from typing import TYPE_CHECKING

from cavern import config

if TYPE_CHECKING:
    from cavern.types import RandomSeed


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    This wrapper allows callers to cache a reference that survives rng.reset().
    Every call looks up the underlying Random instance fresh from the provider.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Return randomly selected element from range(start, stop, step)."""
        return self._rng().randrange(start, stop, step)


# Type alias for functions that accept either Random or RNGStream.
# Use this in type hints: `def foo(rng: RNG) -> int:`
type RNG = Random | RNGStream


class RNGProvider:
    """Provides isolated RNG streams for the map generators.

    Each domain gets its own Random instance derived deterministically
    from the master seed. Domains are identified by string names.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Get an RNG stream for the named domain.

        Args:
            domain: Hierarchical name like "map.cave" or "map.maze.prims"

        Returns:
            An RNGStream proxy that keeps working after reset().
        """
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                # No seed: use system entropy for non-deterministic behavior
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): hash() is salted per interpreter via
                # PYTHONHASHSEED and would break cross-session determinism.
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reset all streams with a new master seed.

        Existing RNGStream proxies remain valid and will use the new streams.
        """
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize the global RNG provider with a master seed.

    If a provider already exists it is reset instead of replaced, so cached
    RNGStream proxies continue to work.
    """
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get an RNG stream for the named domain.

    Auto-initializes the provider with config.RANDOM_SEED if init() hasn't
    been called yet. The returned stream can be cached at module level.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(config.RANDOM_SEED)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reset all RNG streams with a new master seed.

    Use this before regenerating a set of maps from a known seed.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)

"""
Freshness cache for tree fetch gateways.

Wraps any gateway and serves repeated fetches of the same FetchKey from
memory for a short window, the way a query cache with a stale time
would. This is an optimization only; correctness never depends on a
cache hit.
"""

import asyncio
from typing import Dict, Optional

from cachetools import TTLCache

from ..config import CacheConfig
from ..core.node import DomainNode
from ..navigation import FetchKey
from .gateway import TreeFetchGateway


class CachingTreeGateway(TreeFetchGateway):
    """
    Optional caching layer for any tree gateway.

    Uses Future-based coordination so that concurrent fetches of the
    same key share a single backend request.

    Example:
        base = HttpTreeGateway(config)
        gateway = CachingTreeGateway(base, CacheConfig(ttl=300))
        root = await gateway.fetch(FetchKey(depth=3))
    """

    def __init__(
        self,
        base_gateway: TreeFetchGateway,
        config: Optional[CacheConfig] = None
    ):
        """
        Initialize caching gateway.

        Args:
            base_gateway: The underlying gateway to wrap
            config: Cache size and time-to-live
        """
        super().__init__(max_concurrent=base_gateway.max_concurrent)
        self.config = config or CacheConfig()
        self._gateway = base_gateway
        self._cache = TTLCache(maxsize=self.config.max_size, ttl=self.config.ttl)
        self._fetches_in_progress: Dict[FetchKey, asyncio.Future] = {}

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0
        self.concurrent_waits = 0
        self.refreshes = 0

    @property
    def base_gateway(self) -> TreeFetchGateway:
        return self._gateway

    def _define_capabilities(self):
        return super()._define_capabilities() | {'caching'}

    async def fetch(self, key: FetchKey, refresh: bool = False) -> Optional[DomainNode]:
        """
        Fetch with caching and async coordination.

        1. Join a fetch of the same key that is already running
        2. Serve from cache unless refresh is requested
        3. Otherwise fetch, cache the result and share it with waiters
        """
        if refresh:
            self.refreshes += 1
        elif key in self._fetches_in_progress:
            self.concurrent_waits += 1
            try:
                return await asyncio.shield(self._fetches_in_progress[key])
            except Exception:
                # The original fetch failed; try again ourselves
                pass

        if not refresh and key in self._cache:
            self.cache_hits += 1
            return self._cache[key]

        self.cache_misses += 1

        future = asyncio.get_running_loop().create_future()
        self._fetches_in_progress[key] = future

        try:
            root = await self._gateway.fetch(key, refresh=refresh)
            self._cache[key] = root
            future.set_result(root)
            return root
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so a failure nobody waited on is not reported twice
            future.exception()
            raise
        finally:
            if not future.done():
                future.cancel()
            if self._fetches_in_progress.get(key) is future:
                del self._fetches_in_progress[key]

    def invalidate(self, key: FetchKey) -> None:
        """Drop one cached key."""
        self._cache.pop(key, None)

    def get_cache_stats(self) -> dict:
        """
        Get cache statistics for monitoring and debugging.
        """
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = self.cache_hits / total_requests if total_requests > 0 else 0

        return {
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': hit_rate,
            'concurrent_waits': self.concurrent_waits,
            'refreshes': self.refreshes,
            'cache_size': len(self._cache),
            'max_size': self._cache.maxsize,
            'ttl': self._cache.ttl
        }

    def clear_cache(self) -> None:
        """
        Clear all cached entries and reset statistics.
        """
        self._cache.clear()
        self.cache_hits = 0
        self.cache_misses = 0
        self.concurrent_waits = 0
        self.refreshes = 0

    async def get_stats(self) -> dict:
        stats = await self._gateway.get_stats()
        stats.update(self.get_cache_stats())
        return stats

    async def close(self):
        await self._gateway.close()

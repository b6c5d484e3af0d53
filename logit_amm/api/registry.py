"""In-memory registry of simulated pools served by the API."""

from __future__ import annotations

import threading

import structlog

from logit_amm.config import DEFAULT_POOL_CONFIG, PoolConfig
from logit_amm.pool.pool import LogitPool
from logit_amm.simulation import deploy_pool

logger = structlog.get_logger()


class PoolRegistry:
    """Creates pools and looks them up by id.

    Each pool gets its own address and its own pair of in-memory tokens,
    seeded with the requested reserves and initialized immediately.
    """

    def __init__(self, config: PoolConfig = DEFAULT_POOL_CONFIG) -> None:
        self.config = config
        self._pools: dict[str, LogitPool] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._pools)

    def create(self, short_reserve: int, underlying_reserve: int, scalar: int, anchor: int) -> str:
        """Deploy and seed a pool; returns its id.

        Raises:
            PoolError: If seeding fails (e.g. ZeroLiquidityError)
            ValueError: If the curve parameters are invalid
        """
        with self._lock:
            index = len(self._pools) + 1
            pool_id = f"pool-{index}"
            pool, _, _ = deploy_pool(
                short_reserve,
                underlying_reserve,
                scalar,
                anchor,
                config=self.config,
                pool_address="0x" + f"{0xA11 << 32 | index:040x}",
            )
            self._pools[pool_id] = pool
        logger.info("pool_registered", pool_id=pool_id, address=pool.address)
        return pool_id

    def get(self, pool_id: str) -> LogitPool | None:
        return self._pools.get(pool_id)

    def ids(self) -> list[str]:
        return list(self._pools)


_default_registry: PoolRegistry | None = None


def get_default_registry() -> PoolRegistry:
    """Registry shared by the default API app, created on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = PoolRegistry()
    return _default_registry

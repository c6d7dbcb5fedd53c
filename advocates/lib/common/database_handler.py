"""Shared database handler owning the service's asyncpg pool."""

import os
import asyncpg
from typing import Optional
from abc import ABC, abstractmethod

import logging
logger = logging.getLogger(__name__)


def pool_settings_from_env() -> dict:
    """Pool sizing from ``DB_POOL_MIN_SIZE`` and ``DB_POOL_MAX_SIZE``.

    ``DB_COMMAND_TIMEOUT`` (seconds) is passed through only when set; otherwise
    asyncpg's default applies.
    """
    settings = {
        "min_size": int(os.getenv("DB_POOL_MIN_SIZE", "1")),
        "max_size": int(os.getenv("DB_POOL_MAX_SIZE", "10")),
    }
    timeout = os.getenv("DB_COMMAND_TIMEOUT")
    if timeout:
        settings["command_timeout"] = float(timeout)
    return settings


class DatabaseHandler(ABC):
    """Hold the asyncpg pool that request handlers read from.

    A pool passed in by the caller is borrowed: it is used as-is and left
    open on ``close_pool``. A pool created from ``dsn`` is owned and closed.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used in log lines."""
        ...

    def __init__(
            self,
            dsn: str | None = None,
            pool: Optional[asyncpg.Pool] = None) -> None:
        """
        Args:
            dsn (str | None): PostgreSQL DSN; the pool is created on ``init_pool``.
            pool (asyncpg.Pool | None): Existing pool to borrow.

        Raises:
            ValueError: If neither ``dsn`` nor ``pool`` is given.
        """
        if not dsn and not pool:
            logger.error(f"{self.name}: no DSN or pool given for the database connection.")
            raise ValueError("Provide either dsn or pool")
        self._dsn = dsn
        self._pool: Optional[asyncpg.Pool] = pool
        self._owns_pool = pool is None

    @property
    def pool(self) -> asyncpg.Pool:
        """The live pool; raises ``RuntimeError`` before ``init_pool``."""
        if self._pool is None:
            raise RuntimeError(f"{self.name} pool not started yet")
        return self._pool

    async def init_pool(self) -> None:
        """Create the owned pool. No-op for a borrowed or already created pool."""
        if self._pool is not None:
            return
        settings = pool_settings_from_env()
        self._pool = await asyncpg.create_pool(self._dsn, **settings)
        logger.info(
            f"{self.name} database pool ready (min={settings['min_size']}, max={settings['max_size']})."
        )

    async def close_pool(self) -> None:
        """Close the pool if this handler created it."""
        if not self._owns_pool or self._pool is None:
            return
        if not self._pool._closed:   # type: ignore
            await self._pool.close()
            logger.info(f"{self.name} database pool closed.")

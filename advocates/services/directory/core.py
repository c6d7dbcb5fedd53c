"""Directory service core: advocate search and cursor-paginated listing."""

from typing import Optional
import asyncpg

from advocates.lib.common.database_handler import DatabaseHandler
from advocates.lib.common.api_handler import APIHandler
from advocates.lib.common.enum_guard import validate_enums
from advocates.lib.common.schemas import ErrorResponse, HealthResponse
from advocates.services.directory.handlers import AdvocateHandlersMixin
from advocates.services.directory.schemas import AdvocatePage

import logging
logger = logging.getLogger(__name__)


class Directory(AdvocateHandlersMixin, DatabaseHandler, APIHandler):
    """Serve the read-only advocates directory."""
    name = "Directory"

    def __init__(
            self,
            dsn: str | None = None,
            pool: Optional[asyncpg.Pool] = None,
            api_host: str = '0.0.0.0',
            api_port: int = 8080,
            enum_guard_strict: bool = False) -> None:
        """Create a Directory instance.

        Args:
            dsn (str | None): Database DSN for internal pool creation.
            pool (asyncpg.Pool | None): Existing pool to reuse.
            api_host (str): Host interface for the API.
            api_port (int): Port number for the API.
            enum_guard_strict (bool): Abort startup if stored degrees drift
                from the generated enums.
        """
        self._enum_guard_strict = enum_guard_strict

        # Initialize Supers
        DatabaseHandler.__init__(self, dsn=dsn, pool=pool)
        APIHandler.__init__(self, api_host=api_host, api_port=api_port)

    def _setup_routes(self) -> None:
        """Define API routes for the Directory."""
        logger.info("Directory: Setting up API routes")

        self._api_app.router.add_api_route(
            '/api/advocates',
            self.handle_get_advocates,
            methods=['GET'],
            response_model=AdvocatePage,
            responses={
                400: {"model": ErrorResponse, "description": "Invalid query parameters or cursor"},
                500: {"model": ErrorResponse, "description": "Unexpected server error"},
            },
        )
        self._api_app.router.add_api_route(
            '/api/health',
            self.handle_health,
            methods=['GET'],
            response_model=HealthResponse
        )

    # OBJECT LIFECYCLE
    # ---------------------------------------------------------------------
    async def start(self) -> None:
        """
        Start the Directory.
        """
        # Start Database
        await self.init_pool()
        await validate_enums(self.pool, strict=self._enum_guard_strict)

        # Start API
        await self.start_api_server()

    async def stop(self) -> None:
        """
        Stop the Directory.
        """
        # Stop API
        await self.stop_api_server()

        # Stop Database
        await self.close_pool()
    # ---------------------------------------------------------------------

    async def handle_health(self) -> HealthResponse:
        """Liveness probe."""
        return HealthResponse(status="ok", service=self.name)

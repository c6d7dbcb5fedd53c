"""Shared FastAPI host: app construction, CORS, error shaping and uvicorn lifecycle."""

from typing import List, Optional
from abc import ABC, abstractmethod
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import asyncio
import os

from advocates.lib.common.exception_handlers import configure_exception_handlers

import logging
logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 5.0


def cors_origins_from_env() -> List[str]:
    """Allowed browser origins from ``CORS_ORIGINS`` (comma-separated)."""
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class APIHandler(ABC):
    """Build the service's read-only FastAPI app and serve it with uvicorn."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used for the API title and log lines."""
        ...

    def __init__(
            self,
            api_host: str = '0.0.0.0',
            api_port: int = 8080) -> None:
        """
        Args:
            api_host (str): Interface uvicorn binds to.
            api_port (int): Port uvicorn listens on.
        """
        self._api_host = api_host
        self._api_port = api_port
        self._server: Optional[uvicorn.Server] = None
        self._server_task: Optional[asyncio.Task] = None

        self._api_app = FastAPI(title=f"{self.name} API")

        # The API only serves reads
        origins = cors_origins_from_env()
        logger.debug(f"{self.name} CORS origins: {origins}")
        self._api_app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

        configure_exception_handlers(self._api_app)
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self) -> None:
        """Register routes on ``self._api_app``."""
        pass

    @property
    def app(self) -> FastAPI:
        """The FastAPI application served by this handler."""
        return self._api_app

    @property
    def api_url(self) -> str:
        return f"http://{self._api_host}:{self._api_port}"

    async def start_api_server(self) -> None:
        """Launch uvicorn as a background task on the running loop."""
        config = uvicorn.Config(
            self._api_app,
            host=self._api_host,
            port=self._api_port,
            log_level="info",
            access_log=False,  # request logging happens in the handlers
        )
        self._server = uvicorn.Server(config)
        self._server_task = asyncio.create_task(self._server.serve())
        logger.info(f"{self.name} API listening on {self.api_url}")

    async def stop_api_server(self) -> None:
        """Ask uvicorn to exit and wait up to ``SHUTDOWN_TIMEOUT`` seconds."""
        if self._server is None:
            return
        self._server.should_exit = True
        task, self._server_task = self._server_task, None
        if task is not None:
            try:
                await asyncio.wait_for(task, timeout=SHUTDOWN_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning(f"{self.name} API did not shut down within {SHUTDOWN_TIMEOUT}s")
            except Exception as e:
                logger.error(f"{self.name} API server failed while stopping: {e}")
        logger.info(f"{self.name} API stopped.")

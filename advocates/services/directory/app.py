"""Entrypoint script to start the Directory service."""

import asyncio, os, logging
from advocates.services.directory import Directory

level = os.getenv("LOGLEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s"
)

async def main():
    """Bootstrap the Directory service and block until shutdown."""
    # Load Environment
    dsn = os.environ["DSN"]
    api_host = os.getenv("API_HOST", "0.0.0.0")
    api_port = int(os.getenv("API_PORT", "8080"))
    strict = os.getenv("ENUM_GUARD_STRICT", "").lower() in ("1", "true", "yes")

    # Create Directory
    directory = Directory(dsn=dsn, api_host=api_host, api_port=api_port, enum_guard_strict=strict)
    await directory.start()

    logging.info("Directory started → %s:%s", api_host, api_port)
    try:
        await asyncio.Event().wait()              # keep running
    finally:
        await directory.stop()
        logging.info("Directory stopped")

if __name__ == "__main__":
    asyncio.run(main())

"""
Server entrypoint for the generation backend.

Architectural role:
- Configure process logging.
- Start uvicorn serving `app.api.http_api:app`.

Configuration:
- `HOST` (default `0.0.0.0`), `PORT` (default `3000`), `LOG_LEVEL` (default
  `INFO`).
"""

import logging
import os

import uvicorn


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler at `level` (or `LOG_LEVEL`)."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    configure_logging()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))

    logging.getLogger(__name__).info("Server running at http://localhost:%d", port)
    uvicorn.run("app.api.http_api:app", host=host, port=port)


if __name__ == "__main__":
    main()

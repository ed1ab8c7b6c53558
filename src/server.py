"""HTTP server runner for the e-book store.

Serves ``app:app`` with uvicorn on ``SERVER_ADDR``. On shutdown in-flight
requests get ``SERVER_TIMEOUT`` seconds to finish.

Usage:
    python src/server.py
    python src/server.py --reload   # Local development
"""

import argparse

import uvicorn

from shared.config import get_settings
from shared.logging import configure_logging


def main():
    parser = argparse.ArgumentParser(description="E-book store HTTP server")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging()

    uvicorn.run(
        "app:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=args.reload,
        timeout_graceful_shutdown=settings.server_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    main()

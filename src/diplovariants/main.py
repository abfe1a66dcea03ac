"""Command line entrypoint for the Diplovariants HTTP API."""

from __future__ import annotations

import argparse

import uvicorn

from diplovariants.api.app import app
from diplovariants.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Diplovariants API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    args = parser.parse_args()

    if args.reload:
        uvicorn.run(
            "diplovariants.api.app:app",
            host=args.host,
            port=args.port,
            reload=True,
            log_level=settings.log_level,
        )
    else:
        uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()

"""Command-line entry point for running the admin API locally."""

from __future__ import annotations

import argparse
from typing import Sequence

import uvicorn

from leaguepanel.config import load_settings


APP_FACTORY = "leaguepanel.api:create_app"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="League admin panel backend")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve.add_argument("--port", type=int, default=settings.port, help="Port to listen on (default: $PORT or 5000)")
    serve.add_argument("--reload", action="store_true", help="Reload on source changes (development only)")
    serve.add_argument("--log-level", default="info", help="Uvicorn log level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.command == "serve":
        if args.reload and load_settings().is_production:
            raise SystemExit("--reload is not allowed when LEAGUEPANEL_ENV=production")
        print(f"Local backend server running on http://{args.host}:{args.port}")
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
        )


if __name__ == "__main__":
    main()

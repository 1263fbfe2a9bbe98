"""
Command-line runner for rssview
"""
import argparse
import os
from typing import List, Optional

import uvicorn

from rssview.config import Settings
from rssview.logging_config import setup_logging


def parse_args(settings: Settings, argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve RSS feeds as HTML item lists")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument("--workers", type=int, default=settings.workers, help="Worker processes")
    parser.add_argument("--log-level", default=settings.log_level, help="debug, info, warning, error")
    return parser.parse_args(argv)


def export_overrides(args: argparse.Namespace) -> None:
    """
    Put CLI values into the environment.

    uvicorn imports the app by name (in each worker), and the app reads its
    settings from the environment at import time.
    """
    os.environ["RSSVIEW_HOST"] = args.host
    os.environ["RSSVIEW_PORT"] = str(args.port)
    os.environ["RSSVIEW_WORKERS"] = str(args.workers)
    os.environ["RSSVIEW_LOG_LEVEL"] = args.log_level


def main(argv: Optional[List[str]] = None) -> None:
    settings = Settings.from_env()
    args = parse_args(settings, argv)
    export_overrides(args)
    setup_logging(args.log_level)

    print("=" * 60)
    print("rssview - RSS feed viewer")
    print("=" * 60)
    print(f"Listening on http://{args.host}:{args.port}/")
    print("=" * 60)

    uvicorn.run(
        "rssview.api.routes:app",
        host=args.host,
        port=args.port,
        workers=args.workers,
        log_level=args.log_level,
    )

"""
NoteStore - Command Line Entry Point
======================================

What:  Parses --host/--port/--cache, builds Settings and starts uvicorn.
Who:   The `notestore` console script and `python -m notestore`.

Usage:
    notestore -h 127.0.0.1 -p 3000 -c ./cache
    notestore --host 0.0.0.0 --port 8080 --cache /var/lib/notes --log-level DEBUG

-h is --host, not help. Use --help for the help text.
"""

import argparse
from typing import List, Optional

import uvicorn
from pydantic import ValidationError as SettingsValidationError

from notestore.config import Settings
from notestore.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notestore",
        description="HTTP service storing notes as text files in a cache directory.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-h", "--host", required=True, help="address of the server")
    parser.add_argument("-p", "--port", required=True, type=int, help="port of the server")
    parser.add_argument("-c", "--cache", required=True, help="path for directory with cache files")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)",
    )
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> Settings:
    """
    Turn command-line arguments into Settings.

    Exits with status 2 (argparse's usage error) on missing options or on
    values Settings rejects.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return Settings(
            host=args.host,
            port=args.port,
            cache=args.cache,
            log_level=args.log_level,
        )
    except SettingsValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        parser.error(errors)


def main(argv: Optional[List[str]] = None) -> None:
    settings = parse_settings(argv)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

"""Entry point for ``python -m riskatlas_cli`` and the ``riskatlas-cli`` script."""

import argparse
import asyncio
import sys

from .chat_cli import main

DESCRIPTION = """\
Ask the RiskAtlas assistant about the platform from a terminal.

Each line you type is sent to the chat relay together with the
conversation so far; the reply and its token usage are printed.
The server keeps no state, so history lives only in this session."""

EPILOG = """\
examples:
  riskatlas-cli
  riskatlas-cli --host api.internal --port 9000
  riskatlas-cli --debug    # log request URLs and response headers"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="riskatlas-cli",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--host", default="localhost", help="relay host (default: %(default)s)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="relay port (default: %(default)s)"
    )
    parser.add_argument(
        "--api-path",
        default="/api/chat",
        help="chat endpoint path (default: %(default)s)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="log each request and response to stderr"
    )
    return parser.parse_args(argv)


def cli_entry() -> None:
    args = parse_args()
    try:
        asyncio.run(main(args.host, args.port, args.api_path, args.debug))
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()

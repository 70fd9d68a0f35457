"""Run one command on a remote host: ``python -m remote_session CMD [ARG ...]``."""

import argparse
import asyncio
import getpass
import logging
import sys

from remote_session.config import Settings
from remote_session.exceptions import SessionError
from remote_session.utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_CONNECT_FAILED = 2
EXIT_SIGNALED = 255


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="remote_session",
        description="Run a command on a remote host over SSH. "
        "Connection defaults come from REMOTE_SESSION_* environment variables.",
    )
    p.add_argument("--host", help="Remote host/IP (REMOTE_SESSION_HOST).")
    p.add_argument("-p", "--port", type=int, help="SSH port (REMOTE_SESSION_PORT, default 22).")
    p.add_argument("-u", "--user", help="SSH username (REMOTE_SESSION_USER).")
    p.add_argument("--timeout", type=float, help="Per-operation deadline in seconds.")
    p.add_argument(
        "--raw",
        action="store_true",
        help="Send COMMAND and ARGS joined as-is instead of quoting each ARG.",
    )
    p.add_argument("command", help="Base command to run.")
    # Everything after COMMAND belongs to the remote command, dashes included
    p.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments, each quoted as one shell word.",
    )
    return p


def resolve_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Apply command-line overrides and prompt for a missing password."""
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.user:
        settings.username = args.user
    if args.timeout is not None:
        settings.timeout = args.timeout
    if not settings.password and settings.host and settings.username:
        settings.password = getpass.getpass(
            f"Password for {settings.username}@{settings.host}: "
        )
    return settings


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Connect, run the command, print its output and close.

    Returns:
        Process exit code
    """
    session = settings.create_session()
    result = await session.connect()
    if not result:
        print(f"Connection failed: {result.error}", file=sys.stderr)
        return EXIT_CONNECT_FAILED

    try:
        if args.raw:
            output = await session.raw_exec(" ".join([args.command, *args.args]))
        else:
            output = await session.execute(args.command, args.args)
    finally:
        await session.close()

    sys.stdout.write(output.data)
    if output.exit_code is None:
        logger.warning("Command terminated by signal %s", output.signal)
        return EXIT_SIGNALED
    return output.exit_code


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    settings = Settings.from_env()
    configure_logging(settings)
    settings = resolve_settings(args, settings)

    try:
        code = asyncio.run(run(args, settings))
    except SessionError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        code = EXIT_CONNECT_FAILED
    except KeyboardInterrupt:
        print("[ERROR] Interrupted by user.", file=sys.stderr)
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()

"""Command line for issue-relay: ``serve`` and ``sign``."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from issue_relay import __version__
from issue_relay.errors import ConfigurationError
from issue_relay.main import run
from issue_relay.models.config import Settings
from issue_relay.webhook.validators import compute_signature


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-relay",
        description="GitHub issue webhook relay.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--host", help="bind address (default: HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="listen port (default: PORT or 3000)")

    sign = subparsers.add_parser("sign", help="print the X-Hub-Signature-256 value for a file")
    sign.add_argument("file", type=Path, help="payload file, signed byte for byte")
    sign.add_argument("--secret", help="webhook secret (default: GITHUB_WEBHOOK_SECRET)")

    return parser


def _serve(args: argparse.Namespace) -> int:
    try:
        settings = Settings.from_env()
        run(settings, host=getattr(args, "host", None), port=getattr(args, "port", None))
    except ConfigurationError as e:
        print(f"issue-relay: {e}", file=sys.stderr)
        return 2
    return 0


def _sign(args: argparse.Namespace) -> int:
    secret = args.secret or os.environ.get("GITHUB_WEBHOOK_SECRET")
    if not secret:
        print("issue-relay: no secret given and GITHUB_WEBHOOK_SECRET is not set", file=sys.stderr)
        return 2

    try:
        payload = args.file.read_bytes()
    except OSError as e:
        print(f"issue-relay: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    print(compute_signature(payload, secret))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = _build_parser().parse_args(argv)

    if args.command == "sign":
        return _sign(args)
    return _serve(args)


if __name__ == "__main__":
    sys.exit(main())

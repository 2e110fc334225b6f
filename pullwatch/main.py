"""pullwatch entry point.

Usage: pullwatch check [--request FILE] [--config FILE]

Reads a check request (JSON with source and version) from FILE or stdin,
queries GitHub and prints the list of versions as JSON on stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from pullwatch.adapters.base import PlatformAdapter
from pullwatch.adapters.github import DEFAULT_API_URL, GitHubAdapter
from pullwatch.check import check
from pullwatch.config import CheckRequest, load_config, parse_request
from pullwatch.errors import CheckError, ConfigError
from pullwatch.logging import setup_logging

LOG = logging.getLogger("pullwatch.main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="pullwatch",
        description="pullwatch - detect new pull request versions for a pipeline",
    )
    parser.add_argument("command", choices=["check"], help="Resource step to run")
    parser.add_argument(
        "--request",
        "-r",
        type=Path,
        default=None,
        help="Path to JSON check request (default: stdin)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file (logging settings)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Only load and validate the request, then exit",
    )
    return parser.parse_args(argv)


def make_adapter(request: CheckRequest) -> GitHubAdapter:
    """Build the GitHub adapter described by the request source."""
    source = request.source
    return GitHubAdapter(
        repository=source.repository,
        token=source.access_token,
        api_url=source.v4_endpoint or DEFAULT_API_URL,
        verify_ssl=not source.skip_ssl_verification,
    )


def read_request(path: Path | None, stdin: TextIO) -> CheckRequest:
    """Read the check request from path or stdin."""
    if path is not None:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot read request {path}: {e}") from e
    else:
        text = stdin.read()
    return parse_request(text)


def run_check(request: CheckRequest, out: TextIO, platform: PlatformAdapter | None = None) -> None:
    """Run check and write the versions to out."""
    platform = platform or make_adapter(request)
    versions = check(request.source, request.version, platform)
    json.dump([v.to_json() for v in versions], out)
    out.write("\n")


def main(argv: list[str] | None = None) -> int:
    """Entry point for pullwatch."""
    args = parse_args(argv)
    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        setup_logging()
        LOG.error("%s", e)
        return 1
    setup_logging(config.logging)

    try:
        request = read_request(args.request, sys.stdin)
    except ConfigError as e:
        LOG.error("%s", e)
        return 1

    if args.check_config:
        print("Request OK:", request.source.repository, file=sys.stderr)
        return 0

    try:
        run_check(request, sys.stdout)
    except CheckError as e:
        LOG.error("Check failed: %s", e)
        return 1
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Logpayload CLI entry points.
This module exposes commands for encoding log events and inspecting config.
It maps argparse commands onto encoder calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any, Sequence

from cli.encode_command import add_encode_command, run_encode_command
from core.config import PayloadConfig, load_payload_config
from payload.pipeline import PayloadEncoder


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="logpayload", description="Log payload encoder CLI")
    parser.add_argument("--config", help="YAML config file; defaults to environment settings")
    parser.add_argument("--timezone", help="Override the zone attached to naive timestamps")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_encode_command(subparsers)
    _add_keys_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the logpayload CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _build_config(args.config, args.timezone)
    if args.command == "encode":
        return run_encode_command(PayloadEncoder(config), args)
    if args.command == "keys":
        return _run_keys_command(config)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(config_path: str | None, timezone_name: str | None) -> PayloadConfig:
    """Build encoder config with optional file and timezone overrides.

    Args:
        config_path: Optional YAML config path.
        timezone_name: Optional zone override.

    Returns:
        Validated config.
    """
    config = load_payload_config(config_path) if config_path else PayloadConfig.from_env()
    if timezone_name:
        config = replace(config, timezone=timezone_name)
        config.resolve_timezone()
    return config


def _run_keys_command(config: PayloadConfig) -> int:
    """Handle keys command.

    Args:
        config: Active config.

    Returns:
        Exit code.
    """
    for key in sorted(config.metadata_keys):
        print(key)
    return 0


def _add_keys_command(subparsers: Any) -> None:
    """Register keys subcommand."""
    subparsers.add_parser("keys", help="List metadata keys routed to system context")

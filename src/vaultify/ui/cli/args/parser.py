"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from vaultify.platform.logging import logger, setup_logger
from vaultify.ui.cli.args.options import CLIArgs, InspectArgs, ParseNameArgs, ServeArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="vaultify",
            description="Vaultify - music upload service with metadata reconciliation.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
        _ = serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
        _ = serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
        _ = serve_parser.add_argument(
            "--reload",
            action="store_true",
            help="Restart the server when source files change",
        )
        ArgumentParser._add_common_options(serve_parser, with_config=True)

        inspect_parser = subparsers.add_parser(
            "inspect",
            help="Reconcile a local audio file and show ranked metadata matches",
        )
        _ = inspect_parser.add_argument(
            "file_path",
            type=str,
            help="Path to a local audio file",
            metavar="FILE",
        )
        _ = inspect_parser.add_argument(
            "--existing-json",
            type=str,
            help="JSON object with already-known metadata used as scoring evidence",
            metavar="JSON",
        )
        _ = inspect_parser.add_argument(
            "--no-catalog",
            action="store_true",
            help="Skip external catalog lookups",
        )
        ArgumentParser._add_common_options(inspect_parser, with_config=True)

        parse_parser = subparsers.add_parser(
            "parse-name",
            help="Show what the filename heuristics derive from a name",
        )
        _ = parse_parser.add_argument("name", type=str, help="Filename with or without extension", metavar="NAME")
        ArgumentParser._add_common_options(parse_parser, with_config=False)

        return parser

    @staticmethod
    def _add_common_options(parser: argparse.ArgumentParser, *, with_config: bool) -> None:
        if with_config:
            _ = parser.add_argument(
                "--config",
                type=str,
                help="Path to a TOML configuration file",
                metavar="CONFIG",
            )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug logging",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO
        _ = setup_logger(console_level=log_level)

        command: str = parsed_args.command
        config_path = Path(parsed_args.config) if getattr(parsed_args, "config", None) else None

        if command == "serve":
            return ServeArgs(
                command="serve",
                host=parsed_args.host,
                port=parsed_args.port,
                config_path=config_path,
                reload=parsed_args.reload,
            )

        if command == "inspect":
            file_path = Path(parsed_args.file_path)
            if not file_path.is_file():
                logger.error("File does not exist: %s", file_path)
                sys.exit(1)
            return InspectArgs(
                command="inspect",
                file_path=file_path,
                existing_json=parsed_args.existing_json,
                config_path=config_path,
                use_catalog=not parsed_args.no_catalog,
            )

        if command == "parse-name":
            return ParseNameArgs(command="parse-name", name=parsed_args.name)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

"""Command line interface for Vaultify."""

import json
import os
import sys
from typing import final

import uvicorn

from vaultify.config import AppConfig
from vaultify.config.paths import ENV_CONFIG_PATH
from vaultify.features.metadata.domain.filename_parser import FilenameParser
from vaultify.features.metadata.usecases.reconciler import MetadataReconciler
from vaultify.platform.logging import logger, setup_logger
from vaultify.shared.errors import VaultifyError
from vaultify.shared.track_metadata import TrackMetadata
from vaultify.ui.cli.args import ArgumentParser
from vaultify.ui.cli.args.options import CLIArgs, InspectArgs, ParseNameArgs, ServeArgs
from vaultify.ui.cli.display import MetadataDisplay


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ServeArgs):
                CommandProcessor._serve(args)
                return
            if isinstance(args, InspectArgs):
                CommandProcessor._inspect(args)
                return

            assert isinstance(args, ParseNameArgs)
            CommandProcessor._parse_name(args)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except (VaultifyError, FileNotFoundError, ValueError) as e:
            logger.error("%s", getattr(e, "reason", None) or str(e))
            sys.exit(1)

    @staticmethod
    def _serve(args: ServeArgs) -> None:
        config = AppConfig.load(args.config_path)
        _ = setup_logger(log_file=config.log_file)
        logger.info("Serving on http://%s:%d", args.host, args.port)

        if args.reload:
            # The reloader re-imports the factory, so the config path travels by environment.
            if config.loaded_from is not None:
                os.environ[ENV_CONFIG_PATH] = str(config.loaded_from)
            uvicorn.run(
                "vaultify.api.app:create_app",
                factory=True,
                reload=True,
                host=args.host,
                port=args.port,
                log_config=None,
            )
            return

        # Import here so parse-name and inspect work without building the app.
        from vaultify.api import create_app

        uvicorn.run(create_app(config), host=args.host, port=args.port, log_config=None)

    @staticmethod
    def _inspect(args: InspectArgs) -> None:
        config = AppConfig.load(args.config_path)
        existing: TrackMetadata | None = None
        if args.existing_json:
            try:
                existing = TrackMetadata.from_dict(json.loads(args.existing_json))
            except (json.JSONDecodeError, AttributeError) as exc:
                raise ValueError(f"--existing-json must be a JSON object: {exc}") from exc

        matcher = None
        if args.use_catalog:
            from vaultify.api.dependencies import build_matcher

            matcher = build_matcher(config)
        reconciler = MetadataReconciler(matcher, config.pipeline)
        file_name = args.file_path.name

        display = MetadataDisplay()
        evidence = reconciler.gather_evidence(file_name, args.file_path)
        display.show_candidate("Embedded tags", evidence.tags)
        display.show_candidate("Filename heuristics", evidence.filename)
        display.show_record("Reconciled record", reconciler.reconcile(file_name, args.file_path, existing))
        display.show_matches(reconciler.rank_matches(file_name, args.file_path, existing))

    @staticmethod
    def _parse_name(args: ParseNameArgs) -> None:
        candidate = FilenameParser().parse(args.name)
        MetadataDisplay().show_candidate(args.name, candidate)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Command processing calls
        ``sys.exit(...)`` on errors, so this return is only reached when
        processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0


if __name__ == "__main__":
    sys.exit(main())

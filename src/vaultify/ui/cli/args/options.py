"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class ServeArgs:
    """Command line arguments for the ``serve`` subcommand."""

    command: Literal["serve"]
    host: str
    port: int
    config_path: Path | None
    reload: bool


@final
@dataclass(slots=True)
class InspectArgs:
    """Command line arguments for the ``inspect`` subcommand."""

    command: Literal["inspect"]
    file_path: Path
    existing_json: str | None
    config_path: Path | None
    use_catalog: bool


@final
@dataclass(slots=True)
class ParseNameArgs:
    """Command line arguments for the ``parse-name`` subcommand."""

    command: Literal["parse-name"]
    name: str


CLIArgs = ServeArgs | InspectArgs | ParseNameArgs

__all__ = ["CLIArgs", "InspectArgs", "ParseNameArgs", "ServeArgs"]

"""Command line argument handling package."""

from vaultify.ui.cli.args.options import CLIArgs, InspectArgs, ParseNameArgs, ServeArgs
from vaultify.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "InspectArgs", "ParseNameArgs", "ServeArgs"]

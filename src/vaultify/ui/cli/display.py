"""Rich rendering for CLI results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vaultify.shared.track_metadata import MetadataCandidate, TrackMetadata


@final
class MetadataDisplay:
    """Render reconciled records and candidate rankings."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_candidate(self, heading: str, candidate: MetadataCandidate) -> None:
        table = Table(title=heading, show_header=False, title_justify="left")
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in (
            ("Title", candidate.title),
            ("Artist", candidate.artist),
            ("Album", candidate.album),
        ):
            table.add_row(label, escape(value) if value else "[dim]-[/dim]")
        self.console.print(table)

    def show_record(self, heading: str, record: TrackMetadata) -> None:
        table = Table(title=heading, show_header=False, title_justify="left")
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in record.to_dict().items():
            table.add_row(label, escape(value) if value else "[dim]-[/dim]")
        self.console.print(table)

    def show_matches(self, matches: Sequence[MetadataCandidate]) -> None:
        """Print ranked matches, best first."""

        if not matches:
            self.console.print("[yellow]No matches found[/yellow]")
            return

        table = Table(title="Ranked matches", title_justify="left")
        table.add_column("#", justify="right")
        table.add_column("Confidence", justify="right")
        table.add_column("Source")
        table.add_column("Title")
        table.add_column("Artist")
        table.add_column("Album")
        for index, match in enumerate(matches, start=1):
            table.add_row(
                str(index),
                f"{match.confidence:.2f}",
                match.provider or str(match.source),
                escape(match.title),
                escape(match.artist),
                escape(match.album),
            )
        self.console.print(table)


__all__ = ["MetadataDisplay"]

"""Primary collector: lists the content that is not approved."""

from collections import Counter
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .._lookup import LicenseData, Status
from ..console import console as default_console
from ..console import gha_warning, print_summary_table


class NeedsReviewCollector:
    """
    Collect every result that is not approved and report it on close.

    The status is 1 when at least one restricted or needs-review item was
    seen, 0 otherwise.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or default_console
        self._needs_attention: List[LicenseData] = []
        self._counts: Counter = Counter()

    @property
    def items(self) -> List[LicenseData]:
        """Results that are not approved, in the order they were accepted."""
        return list(self._needs_attention)

    def accept(self, data: LicenseData) -> None:
        self._counts[data.status] += 1
        if not data.is_approved:
            self._needs_attention.append(data)

    def close(self) -> None:
        print_summary_table(
            "License Vetting Summary",
            [
                ("Approved", self._counts[Status.APPROVED]),
                ("Restricted", self._counts[Status.RESTRICTED]),
                ("Needs review", self._counts[Status.NEEDS_REVIEW]),
            ],
        )

        if not self._needs_attention:
            self._console.print("[success]Vetted license information was found for all content.[/success]")
            self._console.print("[success]No further investigation is required.[/success]")
            return

        table = Table(title="Content that requires review", show_header=True, header_style="bold")
        table.add_column("Content id", style="cyan", overflow="fold")
        table.add_column("License")
        table.add_column("Status")
        table.add_column("Authority")

        for data in self._needs_attention:
            status = data.status.value
            table.add_row(
                str(data.content_id),
                data.license or "unknown",
                f"[{status}]{status}[/{status}]",
                data.authority or "-",
            )

        self._console.print(table)
        gha_warning(
            f"{len(self._needs_attention)} item(s) require review before they can be used",
            title="License vetting",
        )

    def get_status(self) -> int:
        return 1 if self._needs_attention else 0

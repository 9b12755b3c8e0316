"""
Plain-text rendering of the tiered scan report.

The report is written with plain ``print`` rather than the colored logger, so
it carries no timestamps or color codes. Log lines share stdout with it.
"""

import sys
from typing import List, Optional, TextIO

from ..core.data_models import TieredReport

CONFIRMED_HEADER = "Confirmed IPMI devices:"
POSSIBLE_HEADER = "Possible IPMI devices (port responded, handshake failed):"
NON_MATCHING_HEADER = "Responsive hosts without IPMI evidence:"
EMPTY_MESSAGE = "No hosts responded in the scanned range."


class ReportPrinter:
    """Renders a TieredReport as grouped sections, one address per line."""

    def render(self, report: TieredReport) -> str:
        """
        Build the report text.

        Args:
            report: Sorted addresses per tier

        Returns:
            Report text ending with a newline
        """
        if report.is_empty():
            return EMPTY_MESSAGE + "\n"

        sections: List[str] = []
        for header, addresses in (
            (CONFIRMED_HEADER, report.confirmed),
            (POSSIBLE_HEADER, report.possible),
            (NON_MATCHING_HEADER, report.non_matching),
        ):
            if not addresses:
                continue
            lines = [header] + [f"  {address}" for address in addresses]
            sections.append("\n".join(lines))

        return "\n\n".join(sections) + "\n"

    def print_report(self, report: TieredReport, stream: Optional[TextIO] = None) -> None:
        stream = stream or sys.stdout
        stream.write(self.render(report))
        stream.flush()

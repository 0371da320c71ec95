"""
Pipe results report produced after a hydraulic solve.
"""
from dataclasses import dataclass, field
from typing import Final, List, Optional

import pandas as pd

REPORT_COLUMNS: Final[List[str]] = [
    'id', 'type', 'node1', 'node2', 'length_m', 'diameter_mm',
    'roughness', 'flow_lps', 'pressure_node1_m',
]

PIPE_LINK_TYPE: Final[str] = "Pipe"

_ROW_TEMPLATE = "| {:<9} | {:<8} | {:<8} | {:>11} | {:>11} | {:>10} | {:>10} | {:>15} |"
_HEADER = _ROW_TEMPLATE.format(
    "ID", "Node1", "Node2", "Length (m)", "Diam. (mm)", "Roughness", "Flow (L/s)", "Pressure N1 (m)"
)
_SEPARATOR = "|" + "|".join("-" * (w + 2) for w in (9, 8, 8, 11, 11, 10, 10, 15)) + "|"


def empty_links() -> pd.DataFrame:
    return pd.DataFrame(columns=REPORT_COLUMNS)


@dataclass
class PipeReport:
    """Structured result from a solver run.

    Attributes:
        links: One row per link, columns as in REPORT_COLUMNS
        success: False when the solver rejected the document
        error_message: Solver message, passed through unchanged
        inp_text: The document that was handed to the solver
    """
    links: pd.DataFrame = field(default_factory=empty_links)
    success: bool = True
    error_message: Optional[str] = None
    inp_text: str = ""

    @property
    def n_links(self) -> int:
        return len(self.links)

    @property
    def n_pipes(self) -> int:
        return len(self.pipes())

    def pipes(self) -> pd.DataFrame:
        """Rows for pipes only (pumps and valves excluded)."""
        if self.links.empty:
            return self.links
        return self.links[self.links['type'] == PIPE_LINK_TYPE]


def format_pipe_report(report: PipeReport, pipes_only: bool = False) -> str:
    """Render a report as a fixed-width text table.

    On failure the solver message is returned with a hint about the
    sections a valid network file contains.
    """
    if not report.success:
        return (
            "Error while processing the .INP file:\n\n"
            f"{report.error_message}\n\n"
            "Check that the file is a valid EPANET network.\n"
            "It must contain sections such as [JUNCTIONS], [PIPES] and [END]."
        )

    rows = report.pipes() if pipes_only else report.links
    lines = ["PIPE REPORT", "", _HEADER, _SEPARATOR]
    for row in rows.itertuples(index=False):
        lines.append(_ROW_TEMPLATE.format(
            str(row.id)[:9],
            str(row.node1)[:8],
            str(row.node2)[:8],
            f"{row.length_m:.2f}",
            f"{row.diameter_mm:.2f}",
            f"{row.roughness:.2f}",
            f"{row.flow_lps:.2f}",
            f"{row.pressure_node1_m:.2f}",
        ))

    label = "pipes" if pipes_only else "links"
    lines.append("")
    lines.append(f"Total {label}: {len(rows)}")
    return "\n".join(lines)

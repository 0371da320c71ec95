#!/usr/bin/env python3
"""
Solver Engine for normalized EPANET networks.

This module hands a normalized INP document to the EPANET 2.2 toolkit shipped
with WNTR, runs a hydraulic solve and collects one results row per link:
identifier, end nodes, length, diameter, roughness, flow and the pressure at
the start node.

EPANET itself parses the document, so sections that only carry the ``; (auto)``
placeholder fall back to EPANET's defaults (GPM flow units, H-W headloss).
The network model is read back from the file EPANET saves after opening it,
where every option is written out explicitly.
"""

import logging
import shutil
import tempfile
import uuid
from pathlib import Path

import pandas as pd
import wntr
from wntr.epanet import toolkit
from wntr.epanet.util import EN, FlowUnits, HydParam, to_si

from .config import (
    LPS_TO_M3S,
    MM_TO_M,
    ROUGHNESS_DEFAULT,
    SOLVER_INPUT_FILE,
    SOLVER_OUTPUT_FILE,
    SOLVER_REPORT_FILE,
    SOLVER_SAVED_FILE,
)
from .data_utils import write_inp_text
from .normalize import Roughness, normalize_inp
from .report import REPORT_COLUMNS, PipeReport, empty_links

logger = logging.getLogger(__name__)

# Errors are reported through PipeReport; keep the toolkit's own log quiet
logging.getLogger('wntr.epanet.toolkit').setLevel(logging.ERROR)
logging.getLogger('wntr.epanet.io').setLevel(logging.ERROR)


class SolverEngine:
    """
    Normalizes INP text and runs it through the EPANET solver.

    An engine only holds its default roughness; every call works in its own
    temporary directory with its own EPANET project, so one engine can be
    shared between threads.
    """
    def __init__(self, default_roughness: Roughness = ROUGHNESS_DEFAULT):
        self.default_roughness = default_roughness

    def prepare(self, inp_text: str) -> str:
        """Normalize a raw document with this engine's default roughness."""
        return normalize_inp(inp_text, self.default_roughness)

    def load_network(self, inp_text: str) -> wntr.network.WaterNetworkModel:
        """Open the document with EPANET and return it as a WNTR model.

        Raises the toolkit's ``EpanetException`` when EPANET rejects the input.
        """
        work_dir = Path(tempfile.mkdtemp(prefix="inp_repair_"))
        project = None
        try:
            project = open_project(inp_text, work_dir)
            return read_saved_network(project, work_dir)
        finally:
            close_project(project)
            shutil.rmtree(work_dir, ignore_errors=True)

    def run(self, inp_text: str, normalize: bool = True) -> PipeReport:
        """Run a hydraulic solve and build the pipe report.

        Solver and reader errors are not raised; they come back as a failed
        report whose ``error_message`` is the solver's own message.
        """
        prepared = self.prepare(inp_text) if normalize else inp_text

        # Unique directory per run so parallel runs never share files
        work_dir = Path(tempfile.mkdtemp(prefix=f"inp_repair_{uuid.uuid4().hex[:8]}_"))
        project = None

        try:
            project = open_project(prepared, work_dir)
            wn = read_saved_network(project, work_dir)
            project.ENsolveH()
            links = collect_link_results(project, wn)
            logger.info(f"Solved network: {len(links)} links")
            return PipeReport(links=links, success=True, inp_text=prepared)

        except Exception as e:
            logger.error(f"Simulation failed: {e}")
            return PipeReport(
                links=empty_links(),
                success=False,
                error_message=str(e),
                inp_text=prepared,
            )
        finally:
            close_project(project)
            # Clean up solver files (.inp, .rpt, .bin)
            shutil.rmtree(work_dir, ignore_errors=True)


def open_project(inp_text: str, work_dir: Path) -> toolkit.ENepanet:
    """Write the document to the solver input file and open it with EPANET."""
    inp_path = write_inp_text(inp_text, work_dir / SOLVER_INPUT_FILE)
    project = toolkit.ENepanet()
    project.ENopen(
        str(inp_path),
        str(work_dir / SOLVER_REPORT_FILE),
        str(work_dir / SOLVER_OUTPUT_FILE),
    )
    return project


def close_project(project) -> None:
    if project is not None and project.isOpen():
        project.ENclose()


def read_saved_network(project: toolkit.ENepanet, work_dir: Path) -> wntr.network.WaterNetworkModel:
    """Let EPANET write the network back out in full and read that with WNTR."""
    saved = work_dir / SOLVER_SAVED_FILE
    project.ENsaveinpfile(str(saved))
    return wntr.network.WaterNetworkModel(str(saved))


def collect_link_results(project: toolkit.ENepanet, wn: wntr.network.WaterNetworkModel) -> pd.DataFrame:
    """Build one row per link from a solved EPANET project.

    Flow and pressure are the values EPANET holds after the solve (the last
    time step). Pumps and valves have no length (reported as 0); lengths are
    in m, diameters in mm, flows in L/s and pressures in m.
    """
    flow_units = FlowUnits(project.ENgetflowunits())

    rows = []
    for name, link in wn.links():
        link_index = project.ENgetlinkindex(name)
        node_index = project.ENgetnodeindex(link.start_node_name)
        flow = to_si(flow_units, project.ENgetlinkvalue(link_index, EN.FLOW), HydParam.Flow)
        pressure = to_si(flow_units, project.ENgetnodevalue(node_index, EN.PRESSURE), HydParam.Pressure)
        diameter = getattr(link, 'diameter', None) or 0.0
        rows.append({
            'id': name,
            'type': link.link_type,
            'node1': link.start_node_name,
            'node2': link.end_node_name,
            'length_m': float(getattr(link, 'length', None) or 0.0),
            'diameter_mm': float(diameter) / MM_TO_M,
            'roughness': float(getattr(link, 'roughness', None) or 0.0),
            'flow_lps': float(flow) / LPS_TO_M3S,
            'pressure_node1_m': float(pressure),
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def solve_inp(inp_text: str, default_roughness: Roughness = ROUGHNESS_DEFAULT) -> PipeReport:
    """Normalize and solve a document in one call."""
    return SolverEngine(default_roughness).run(inp_text)

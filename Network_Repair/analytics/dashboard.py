#!/usr/bin/env python3
"""
Interactive Streamlit Dashboard for INP Repair.
Upload an EPANET network, inspect the normalized document and the pipe report.
"""

import streamlit as st
import numpy as np
import logging
from pathlib import Path

import sys

# Ensure project root is in path
project_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(project_root))

import Network_Repair.analytics.vis_utils as vis_utils
from Network_Repair.core.config import ROUGHNESS_DEFAULT
from Network_Repair.core.data_utils import decode_inp_bytes, output_path_for
from Network_Repair.core.engine import SolverEngine
from Network_Repair.core.report import format_pipe_report

logger = logging.getLogger(__name__)


def main():
    st.set_page_config(page_title="INP Repair", page_icon="💧", layout="wide")

    st.title("💧 EPANET Network Repair")

    # ==========================================================================
    # Sidebar Configuration
    # ==========================================================================
    st.sidebar.header("⚙️ Configuration")

    default_roughness = st.sidebar.number_input(
        "Default Roughness (C-Factor)",
        min_value=0.01,
        value=float(ROUGHNESS_DEFAULT),
        step=5.0,
        help="Used for [PIPES] records that have no roughness column"
    )
    pipes_only = st.sidebar.checkbox(
        "Pipes Only",
        value=False,
        help="Hide pumps and valves from the report"
    )

    # ==========================================================================
    # File Upload
    # ==========================================================================
    uploaded = st.file_uploader("Select an .INP file", type=["inp"])
    if uploaded is None:
        st.info("Upload an EPANET .inp file to begin.")
        return

    raw_text = decode_inp_bytes(uploaded.getvalue())
    engine = SolverEngine(default_roughness=default_roughness)
    normalized = engine.prepare(raw_text)

    with st.expander("📄 Normalized Document", expanded=False):
        st.code(normalized, language=None)
    st.download_button(
        "⬇️ Download Normalized .INP",
        data=normalized,
        file_name=output_path_for(uploaded.name).name,
        mime="text/plain"
    )

    # ==========================================================================
    # Run Simulation
    # ==========================================================================
    run_button = st.sidebar.button("🚀 Run Simulation", type="primary", use_container_width=True)

    # Re-run whenever the file or the roughness changes
    run_key = (uploaded.name, uploaded.size, default_roughness)
    if run_button or st.session_state.get('run_key') != run_key:
        with st.spinner("Simulating..."):
            st.session_state.report = engine.run(normalized, normalize=False)
            st.session_state.run_key = run_key
        if not st.session_state.report.success:
            logger.warning(f"Solver failed for {uploaded.name}: {st.session_state.report.error_message}")

    # ==========================================================================
    # Display Results
    # ==========================================================================
    report = st.session_state.report

    if not report.success:
        st.error(format_pipe_report(report))
        return

    links = report.pipes() if pipes_only else report.links

    c1, c2, c3 = st.columns(3)
    c1.metric("Links", report.n_links)
    c2.metric("Pipes", report.n_pipes)
    c3.metric("Total |Flow|", f"{np.abs(links['flow_lps']).sum():.2f} L/s")

    st.header("📋 Pipe Report")
    st.dataframe(links, use_container_width=True, hide_index=True)

    col_left, col_right = st.columns(2)
    with col_left:
        st.plotly_chart(vis_utils.create_roughness_chart(links, default_roughness), use_container_width=True)
    with col_right:
        st.plotly_chart(vis_utils.create_flow_chart(links), use_container_width=True)

    with st.expander("🧾 Text Report", expanded=False):
        st.code(format_pipe_report(report, pipes_only=pipes_only), language=None)


if __name__ == "__main__":
    main()

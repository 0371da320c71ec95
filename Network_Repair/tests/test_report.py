"""Tests for pipe report rendering."""

import pandas as pd

from Network_Repair.core.report import REPORT_COLUMNS, PipeReport, format_pipe_report


def make_report():
    links = pd.DataFrame([
        {
            'id': 'P1', 'type': 'Pipe', 'node1': 'R1', 'node2': 'J1',
            'length_m': 304.8, 'diameter_mm': 254.0, 'roughness': 100.0,
            'flow_lps': 12.3456, 'pressure_node1_m': 0.0,
        },
        {
            'id': 'PU1', 'type': 'Pump', 'node1': 'J1', 'node2': 'J2',
            'length_m': 0.0, 'diameter_mm': 0.0, 'roughness': 0.0,
            'flow_lps': -3.5, 'pressure_node1_m': 21.0,
        },
    ], columns=REPORT_COLUMNS)
    return PipeReport(links=links, success=True, inp_text="[END]")


def test_report_counts():
    report = make_report()
    assert report.n_links == 2
    assert report.n_pipes == 1
    assert list(report.pipes()['id']) == ['P1']


def test_empty_report_defaults():
    report = PipeReport()
    assert report.success
    assert report.n_links == 0
    assert report.n_pipes == 0
    assert list(report.links.columns) == REPORT_COLUMNS


def test_format_all_links():
    text = format_pipe_report(make_report())
    lines = text.splitlines()
    assert lines[0] == "PIPE REPORT"
    assert lines[2].startswith("| ID        | Node1    | Node2    |")
    assert lines[3].startswith("|-----------|")
    assert "| P1        | R1       | J1       |      304.80 |      254.00 |     100.00 |      12.35 |" in text
    assert "| PU1       | J1       | J2       |" in text
    assert "-3.50" in text
    assert lines[-1] == "Total links: 2"


def test_format_pipes_only():
    text = format_pipe_report(make_report(), pipes_only=True)
    assert "PU1" not in text
    assert text.endswith("Total pipes: 1")


def test_format_failure_carries_solver_message():
    report = PipeReport(success=False, error_message="(Error 203) undefined node J9")
    text = format_pipe_report(report)
    assert "(Error 203) undefined node J9" in text
    assert "[JUNCTIONS], [PIPES] and [END]" in text

"""Tests for the run_normalizer command-line script."""

import pytest

from Network_Repair.tools.run_normalizer import main, positive_float

RAW = "[JUNCTIONS]\nJ1 0 1\n[CONTROLS]\n[PIPES]\nP1 R1 J1 1000\n[END]\n"


def test_normalizes_file_next_to_input(tmp_path, capsys):
    source = tmp_path / "net.inp"
    source.write_text(RAW)

    assert main([str(source)]) == 0

    fixed = (tmp_path / "net_fixed.inp").read_text()
    assert "P1 R1 J1 1000 100 100 0.0 Open" in fixed
    assert "[CONTROLS]" not in fixed
    assert "[ENERGY]\n; (auto)\n\n[END]" in fixed
    assert "net_fixed.inp" in capsys.readouterr().out


def test_directory_input_with_output_dir_and_roughness(tmp_path):
    src = tmp_path / "in"
    src.mkdir()
    (src / "a.inp").write_text(RAW)
    (src / "b.inp").write_text("[PIPES]\nP9 J1 J2\n[END]")
    out = tmp_path / "out"

    assert main([str(src), "-o", str(out), "--roughness", "130"]) == 0

    assert sorted(p.name for p in out.iterdir()) == ["a_fixed.inp", "b_fixed.inp"]
    assert "P9 J1 J2 0 100 130 0.0 Open" in (out / "b_fixed.inp").read_text()


def test_stdout_mode_prints_document_only(tmp_path, capsys):
    source = tmp_path / "net.inp"
    source.write_text("[PIPES]\nP1 N1 N2 100")

    assert main([str(source), "--stdout"]) == 0

    assert capsys.readouterr().out == "[PIPES]\nP1 N1 N2 100 100 100 0.0 Open\n"
    assert not (tmp_path / "net_fixed.inp").exists()


def test_missing_input_fails(tmp_path):
    assert main([str(tmp_path / "missing.inp")]) == 1


def test_empty_directory_fails(tmp_path):
    assert main([str(tmp_path)]) == 1


def test_rejects_non_positive_roughness(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), "--roughness", "0"])
    assert exc.value.code == 2


def test_positive_float():
    assert positive_float("85.5") == 85.5
    with pytest.raises(Exception):
        positive_float("abc")

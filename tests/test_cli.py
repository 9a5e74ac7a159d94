"""
Tests for the click command line.
"""

import json

import numpy as np
import pytest
from click.testing import CliRunner

from smrk_probe.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:

    def test_version(self, runner):
        result = runner.invoke(main, ["version"])
        assert result.exit_code == 0
        assert "smrk_probe v0.1" in result.output

    def test_info(self, runner):
        result = runner.invoke(main, ["info", "--preset", "quick"])
        assert result.exit_code == 0
        assert "Primes <= Pmax:" in result.output
        assert "Prime cutoff (Pmax):   30" in result.output

    def test_matvec_unit(self, runner):
        result = runner.invoke(main, ["matvec", "--n", "10", "--p-max", "5", "--unit", "1"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[1] == "2\t0.5"
        assert lines[4] == "5\t0.20000000000000001"

    def test_matvec_file_roundtrip(self, runner, tmp_path):
        src = tmp_path / "x.txt"
        dst = tmp_path / "y.txt"
        np.savetxt(src, [1.0, 0.0, 0.0, 0.0])
        result = runner.invoke(main, ["matvec", "--n", "4", "--p-max", "3",
                                      "--input", str(src), "-o", str(dst)])
        assert result.exit_code == 0
        np.testing.assert_array_equal(np.loadtxt(dst), [0.0, 0.5, 1 / 3, 0.0])

    def test_matvec_length_mismatch_exits_2(self, runner, tmp_path):
        src = tmp_path / "x.txt"
        np.savetxt(src, [1.0, 2.0])
        result = runner.invoke(main, ["matvec", "--n", "4", "--p-max", "3",
                                      "--input", str(src)])
        assert result.exit_code == 2
        assert "length" in result.output

    @pytest.mark.parametrize("n", ["0", "100000000000"])
    def test_matvec_unit_rejects_n_before_allocating(self, runner, n):
        result = runner.invoke(main, ["matvec", "--n", n, "--p-max", "5", "--unit", "1"])
        assert result.exit_code == 2
        assert "N must be in 1..=50000" in result.output

    def test_matvec_requires_one_source(self, runner):
        result = runner.invoke(main, ["matvec", "--n", "4", "--p-max", "3"])
        assert result.exit_code != 0

    def test_probe_json(self, runner):
        result = runner.invoke(main, ["probe", "--preset", "quick", "--seed", "3", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["n"] == 200 and data["seed"] == 3 and data["trials"] == 5
        assert data["sym_abs_max"] >= data["sym_abs_mean"]

    def test_probe_text(self, runner):
        result = runner.invoke(main, ["probe", "--preset", "quick"])
        assert result.exit_code == 0
        assert "SMRK Spectral Probe v0.1" in result.output
        assert "sym_abs_mean" in result.output

    def test_probe_rejects_zero_trials(self, runner):
        result = runner.invoke(main, ["probe", "--trials", "0"])
        assert result.exit_code == 2
        assert "trials" in result.output

    def test_sweep(self, runner):
        result = runner.invoke(main, ["sweep", "--sizes", "20,40", "--p-max", "7",
                                      "--trials", "2"])
        assert result.exit_code == 0
        assert "SYMMETRY DEFECT vs TRUNCATION SIZE" in result.output

    def test_validate(self, runner):
        result = runner.invoke(main, ["validate", "--preset", "quick"])
        assert result.exit_code == 0
        assert "ENGINE NOMINAL" in result.output

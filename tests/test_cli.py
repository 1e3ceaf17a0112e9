"""Tests for the command-line calculator."""

import json
from pathlib import Path

import pytest

from ke_payroll.cli import EXIT_INVALID_INPUT, main


def test_text_report(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["50000"]) == 0
    out = capsys.readouterr().out
    assert "40,373.15" in out
    assert "10% on 24,000.00 + 25% on 8,333.00 + 30% on 14,462.00" in out


def test_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["50,000", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["income_tax"] == 6421.85
    assert data["net_pay"] == 40373.15


@pytest.mark.parametrize("value", ["0", "-5", "abc"])
def test_invalid_salary(value: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([value]) == EXIT_INVALID_INPUT
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Please enter a valid monthly gross salary." in captured.err


def test_custom_rates_file(rates_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """20,000 under the test regime.

    Pension 5,000*5% + 5,000*5% = 500, levies 200 + 400,
    taxable 18,900 = 10,000*10% + 8,900*30% = 3,670, less 1,000 relief.
    """
    assert main(["20000", "--rates", str(rates_file), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["pension_contribution"] == 500.0
    assert data["taxable_income"] == 18900.0
    assert data["income_tax"] == 2670.0


def test_missing_rates_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["50000", "--rates", str(tmp_path / "missing.yaml")]) == EXIT_INVALID_INPUT
    assert "Error:" in capsys.readouterr().err


def test_malformed_rates_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("name: [unclosed\n")
    assert main(["50000", "--rates", str(path)]) == EXIT_INVALID_INPUT
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not valid YAML" in captured.err


def test_salary_above_maximum(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["100000000000000000000000000000"]) == EXIT_INVALID_INPUT
    assert "Please enter a valid monthly gross salary." in capsys.readouterr().err

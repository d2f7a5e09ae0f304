"""Tests for the totpgen command line."""

import pytest
from click.testing import CliRunner

from main import cli

RFC_SECRET = "12345678901234567890"
RFC_SECRET_B32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
NOW = 1111111109


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def frozen_now(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("core.totp._now", lambda: NOW)


# ── generate ──────────────────────────────────────────────────────────────────

def test_generate_with_timestamp(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", RFC_SECRET, "--digits", "8", "--timestamp", "59"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "94287082"


def test_generate_with_date(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["generate", "MICLAVESECRATACOMPARTIDACONELSERVIDOR", "--date", "202503131728"]
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "787078"


def test_generate_algorithm_case_insensitive(runner: CliRunner) -> None:
    result = runner.invoke(
        cli,
        ["generate", "12345678901234567890123456789012", "-a", "sha256", "-d", "8", "-t", "59"],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "46119246"


def test_generate_base32_secret(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", RFC_SECRET_B32, "--base32", "-d", "8", "-t", "59"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "94287082"


def test_generate_grouped(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", RFC_SECRET, "-t", "1111111109", "--grouped"])
    assert result.output.strip() == "081 804"


def test_generate_secret_from_env(runner: CliRunner) -> None:
    result = runner.invoke(
        cli,
        ["generate", "-t", "59"],
        env={"TOTP_SECRET": RFC_SECRET, "TOTP_DIGITS": "8"},
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "94287082"


def test_generate_invalid_digits(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", RFC_SECRET, "--digits", "0"])
    assert result.exit_code == 1
    assert "Digits must be between" in result.output


def test_generate_timestamp_and_date_conflict(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", RFC_SECRET, "-t", "59", "--date", "202503131728"])
    assert result.exit_code == 2


def test_generate_invalid_base32(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "not base32!", "--base32"])
    assert result.exit_code == 2
    assert "base32" in result.output


# ── verify ────────────────────────────────────────────────────────────────────

def test_verify_valid(runner: CliRunner, frozen_now: None) -> None:
    result = runner.invoke(cli, ["verify", "731029", RFC_SECRET])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "VALID"


def test_verify_outside_window(runner: CliRunner, frozen_now: None) -> None:
    result = runner.invoke(cli, ["verify", "150727", RFC_SECRET, "--window", "1"])
    assert result.exit_code == 1
    assert result.output.strip() == "INVALID"


def test_verify_wider_window(runner: CliRunner, frozen_now: None) -> None:
    result = runner.invoke(cli, ["verify", "150727", RFC_SECRET, "--window", "2"])
    assert result.exit_code == 0


def test_verify_negative_window(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["verify", "123456", RFC_SECRET, "--window", "-1"])
    assert result.exit_code == 1
    assert "Window size" in result.output


# ── window ────────────────────────────────────────────────────────────────────

def test_window_lists_offsets(runner: CliRunner, frozen_now: None) -> None:
    result = runner.invoke(cli, ["window", RFC_SECRET, "-w", "1"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["-1\t731029", "+0\t081804", "+1\t050471"]


# ── demo ──────────────────────────────────────────────────────────────────────

def test_demo_prints_reference_codes(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["demo"])
    assert result.exit_code == 0, result.output
    assert "6-digit code for 202503131728: 787078" in result.output
    assert "8-digit code for 202503131728: 04787078" in result.output
    assert "Current code verifies: yes" in result.output

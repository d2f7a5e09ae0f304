"""Tests for core.totp verification and window enumeration."""

import pytest

from core.errors import InvalidArgument
from core.totp import Algorithm, enumerate_valid_codes, generate_totp, verify_totp

SECRET = b"12345678901234567890"
NOW = 1111111109  # counter 37037036

# 6-digit SHA1 codes around NOW, keyed by step offset
_CODES_AROUND_NOW = {
    -4: "734088",
    -3: "404137",
    -2: "150727",
    -1: "731029",
    0: "081804",
    1: "050471",
    2: "266759",
    3: "306183",
    4: "466594",
}


@pytest.fixture()
def frozen_now(monkeypatch: pytest.MonkeyPatch) -> list:
    """Pin the engine clock to NOW and record how often it is read."""
    reads: list = []

    def fake_now() -> int:
        reads.append(NOW)
        return NOW

    monkeypatch.setattr("core.totp._now", fake_now)
    return reads


# ── Verify ────────────────────────────────────────────────────────────────────

def test_verify_current_code() -> None:
    code = generate_totp(SECRET, timestamp=NOW)
    assert verify_totp(code, SECRET, timestamp=NOW)


@pytest.mark.parametrize("window", [0, 1, 2, 3])
def test_verify_accepts_every_offset_in_window(window: int) -> None:
    for k in range(-window, window + 1):
        assert verify_totp(_CODES_AROUND_NOW[k], SECRET, window_size=window, timestamp=NOW), k


@pytest.mark.parametrize("window", [0, 1, 2, 3])
def test_verify_rejects_just_outside_window(window: int) -> None:
    assert not verify_totp(_CODES_AROUND_NOW[window + 1], SECRET, window_size=window, timestamp=NOW)
    assert not verify_totp(_CODES_AROUND_NOW[-(window + 1)], SECRET, window_size=window, timestamp=NOW)


def test_verify_window_zero_only_current() -> None:
    assert verify_totp("081804", SECRET, window_size=0, timestamp=NOW)
    assert not verify_totp("731029", SECRET, window_size=0, timestamp=NOW)


def test_verify_uses_clock_once(frozen_now: list) -> None:
    assert verify_totp("466594", SECRET, window_size=4)
    assert len(frozen_now) == 1


def test_verify_against_live_clock() -> None:
    code = generate_totp(SECRET)
    # ±1 step tolerates a step boundary between the two calls
    assert verify_totp(code, SECRET, window_size=1)


def test_verify_exact_comparison() -> None:
    assert not verify_totp(" 081804", SECRET, timestamp=NOW)
    assert not verify_totp("81804", SECRET, timestamp=NOW)
    assert not verify_totp("081 804", SECRET, timestamp=NOW)


def test_verify_non_ascii_code_is_rejected_not_raised() -> None:
    assert not verify_totp("０８１８０４", SECRET, timestamp=NOW)


def test_verify_wrong_code() -> None:
    assert not verify_totp("000000", SECRET, timestamp=0)


def test_verify_respects_algorithm() -> None:
    code = generate_totp(SECRET, timestamp=NOW, algorithm=Algorithm.SHA512)
    assert verify_totp(code, SECRET, timestamp=NOW, algorithm=Algorithm.SHA512)


def test_verify_eight_digits() -> None:
    assert verify_totp("07081804", SECRET, digits=8, timestamp=NOW)


def test_verify_negative_window_raises() -> None:
    with pytest.raises(InvalidArgument):
        verify_totp("081804", SECRET, window_size=-1, timestamp=NOW)


def test_verify_invalid_time_step_raises() -> None:
    with pytest.raises(InvalidArgument):
        verify_totp("081804", SECRET, time_step=0, timestamp=NOW)


# ── Enumerate ─────────────────────────────────────────────────────────────────

def test_enumerate_known_window() -> None:
    codes = enumerate_valid_codes(SECRET, window_size=2, timestamp=NOW)
    assert codes == {k: _CODES_AROUND_NOW[k] for k in range(-2, 3)}


@pytest.mark.parametrize("window", [0, 1, 2, 5])
def test_enumerate_size_and_keys(window: int) -> None:
    codes = enumerate_valid_codes(SECRET, window_size=window, timestamp=NOW)
    assert len(codes) == 2 * window + 1
    assert list(codes) == list(range(-window, window + 1))


def test_enumerate_codes_all_verify() -> None:
    for code in enumerate_valid_codes(SECRET, digits=8, window_size=2, timestamp=NOW).values():
        assert len(code) == 8
        assert verify_totp(code, SECRET, digits=8, window_size=2, timestamp=NOW)


def test_enumerate_uses_clock_once(frozen_now: list) -> None:
    codes = enumerate_valid_codes(SECRET, window_size=3)
    assert codes[0] == "081804"
    assert len(frozen_now) == 1


def test_enumerate_negative_window_raises() -> None:
    with pytest.raises(InvalidArgument):
        enumerate_valid_codes(SECRET, window_size=-2)

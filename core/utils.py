"""
Utility helpers for the OTP engine.
"""

import base64
import re
from datetime import datetime, timezone
from typing import Union

from core.errors import EncodingError, InvalidArgument

SecretLike = Union[str, bytes, bytearray, memoryview]

MAX_DIGITS = 9  # 10**9 still fits below the 31-bit truncated value

_DATE_STRING_RE = re.compile(r"\d{12}")


# ── Secrets ───────────────────────────────────────────────────────────────────

def encode_secret(secret: SecretLike) -> bytes:
    """
    Convert a shared secret to the raw key bytes used for HMAC.

    Text is encoded as UTF-8; bytes-like values are copied as-is.

    Args:
        secret: Text or bytes-like secret.

    Returns:
        Key bytes.

    Raises:
        EncodingError:   If the secret is not text/bytes or cannot be encoded.
        InvalidArgument: If the secret is empty.
    """
    if isinstance(secret, str):
        try:
            raw = secret.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"Secret cannot be encoded as UTF-8: {exc}") from exc
    elif isinstance(secret, (bytes, bytearray, memoryview)):
        raw = bytes(secret)
    else:
        raise EncodingError(
            f"Secret must be str or bytes-like, got {type(secret).__name__}."
        )
    if not raw:
        raise InvalidArgument("Secret must not be empty.")
    return raw


def normalize_base32(secret: str) -> str:
    """
    Normalise a base32 secret: strip spaces, uppercase, add padding.

    Raises:
        EncodingError: If the string contains invalid base32 characters.
    """
    secret = secret.strip().upper().replace(" ", "").replace("-", "")
    # Base32 alphabet: A-Z and 2-7
    if not re.fullmatch(r"[A-Z2-7]+=*", secret):
        raise EncodingError("Secret contains invalid base32 characters.")
    pad = (8 - len(secret) % 8) % 8
    return secret + "=" * pad


def decode_base32_secret(secret: str) -> bytes:
    """
    Decode an authenticator-app style base32 secret to raw key bytes.

    Raises:
        EncodingError: On invalid base32 input.
    """
    try:
        return base64.b32decode(normalize_base32(secret), casefold=True)
    except EncodingError:
        raise
    except ValueError as exc:
        raise EncodingError(f"Invalid base32 secret: {exc}") from exc


# ── Time helpers ──────────────────────────────────────────────────────────────

def utc_timestamp(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    """Return Unix seconds for a UTC calendar date/time (seconds fixed at 0)."""
    try:
        moment = datetime(year, month, day, hour, minute, 0, tzinfo=timezone.utc)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Invalid UTC date/time: {exc}") from exc
    return int(moment.timestamp())


def parse_date_string(date_string: str) -> datetime:
    """
    Parse a ``YYYYMMDDHHMM`` string (e.g. ``"202503131728"``) as UTC.

    Raises:
        InvalidArgument: If the string is not twelve digits or not a valid date.
    """
    date_string = date_string.strip()
    if not _DATE_STRING_RE.fullmatch(date_string):
        raise InvalidArgument(
            f"Date string must have the form YYYYMMDDHHMM, got '{date_string}'."
        )
    try:
        return datetime.strptime(date_string, "%Y%m%d%H%M").replace(tzinfo=timezone.utc)
    except ValueError as exc:
        raise InvalidArgument(f"Invalid date string '{date_string}': {exc}") from exc


def format_otp(code: str, group: int = 3) -> str:
    """
    Format an OTP code with spaces for readability.

    Example::

        >>> format_otp("123456")
        "123 456"
    """
    return " ".join(code[i : i + group] for i in range(0, len(code), group))


# ── Validation ────────────────────────────────────────────────────────────────

def _require_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}.")


def validate_digits(digits: int) -> None:
    _require_int("digits", digits)
    if digits < 1 or digits > MAX_DIGITS:
        raise InvalidArgument(f"Digits must be between 1 and {MAX_DIGITS}, got {digits}.")


def validate_time_step(time_step: int) -> None:
    _require_int("time_step", time_step)
    if time_step <= 0:
        raise InvalidArgument(f"Time step must be a positive number of seconds, got {time_step}.")


def validate_window(window_size: int) -> None:
    _require_int("window_size", window_size)
    if window_size < 0:
        raise InvalidArgument(f"Window size must be non-negative, got {window_size}.")

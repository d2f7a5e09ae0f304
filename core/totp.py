"""
TOTP (Time-based One-Time Password) implementation following RFC 6238.

Produces codes identical to Google Authenticator when used with SHA1,
6 digits and a 30 second time step.
"""

import logging
import time
from typing import Dict, Optional

from core.crypto import Algorithm, constant_time_compare
from core.hotp import hotp_value
from core.utils import (
    SecretLike,
    encode_secret,
    parse_date_string,
    utc_timestamp,
    validate_digits,
    validate_time_step,
    validate_window,
)

__all__ = [
    "Algorithm",
    "DEFAULT_ALGORITHM",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "DEFAULT_WINDOW",
    "enumerate_valid_codes",
    "generate_totp",
    "generate_totp_from_date_string",
    "generate_totp_from_datetime",
    "remaining_seconds",
    "time_counter",
    "verify_totp",
]

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_TIME_STEP = 30
DEFAULT_WINDOW = 1
DEFAULT_ALGORITHM = Algorithm.SHA1


def _now() -> int:
    return int(time.time())


def time_counter(timestamp: float, time_step: int = DEFAULT_TIME_STEP) -> int:
    """
    Return the number of whole ``time_step`` intervals in ``timestamp``.

    Division truncates toward zero, so timestamps in ``(-time_step, time_step)``
    all map to counter 0. Only negative timestamps are affected.
    """
    validate_time_step(time_step)
    seconds = int(timestamp)
    steps = abs(seconds) // time_step
    return steps if seconds >= 0 else -steps


def generate_totp(
    secret: SecretLike,
    digits: int = DEFAULT_DIGITS,
    time_step: int = DEFAULT_TIME_STEP,
    timestamp: Optional[float] = None,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
) -> str:
    """
    Generate a TOTP code.

    Args:
        secret:    Shared secret; text is UTF-8 encoded.
        digits:    Number of digits in the OTP (default 6).
        time_step: Time step in seconds (default 30).
        timestamp: Unix timestamp override (uses the current time if None).
        algorithm: HMAC algorithm (default SHA1 for authenticator compatibility).

    Returns:
        OTP string, zero-padded to ``digits`` characters.

    Raises:
        InvalidArgument: On a non-positive time step or unsupported digit count.
        EncodingError:   If the secret cannot be converted to bytes.
    """
    validate_digits(digits)
    validate_time_step(time_step)
    algorithm = Algorithm.parse(algorithm)
    key = encode_secret(secret)

    t = timestamp if timestamp is not None else _now()
    return hotp_value(key, time_counter(t, time_step), digits, algorithm)


def generate_totp_from_datetime(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    secret: SecretLike,
    digits: int = DEFAULT_DIGITS,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
    time_step: int = DEFAULT_TIME_STEP,
) -> str:
    """Generate the code for a UTC calendar minute (seconds fixed at 0)."""
    timestamp = utc_timestamp(year, month, day, hour, minute)
    return generate_totp(secret, digits, time_step, timestamp, algorithm)


def generate_totp_from_date_string(
    date_string: str,
    secret: SecretLike,
    digits: int = DEFAULT_DIGITS,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
) -> str:
    """
    Generate the code for a ``YYYYMMDDHHMM`` UTC date string.

    Example::

        >>> generate_totp_from_date_string("202503131728", "MICLAVESECRATACOMPARTIDACONELSERVIDOR")
        '787078'
    """
    moment = parse_date_string(date_string)
    return generate_totp_from_datetime(
        moment.year,
        moment.month,
        moment.day,
        moment.hour,
        moment.minute,
        secret,
        digits=digits,
        algorithm=algorithm,
    )


def remaining_seconds(time_step: int = DEFAULT_TIME_STEP, timestamp: Optional[float] = None) -> int:
    """Return seconds until the current TOTP window expires."""
    validate_time_step(time_step)
    t = timestamp if timestamp is not None else time.time()
    return time_step - (int(t) % time_step)


def _window_codes(
    key: bytes,
    digits: int,
    time_step: int,
    window_size: int,
    algorithm: Algorithm,
    now: int,
):
    """Yield ``(offset, code)`` for each offset in ``-window_size..window_size``."""
    for offset in range(-window_size, window_size + 1):
        candidate = now + offset * time_step
        yield offset, hotp_value(key, time_counter(candidate, time_step), digits, algorithm)


def verify_totp(
    user_code: str,
    secret: SecretLike,
    digits: int = DEFAULT_DIGITS,
    time_step: int = DEFAULT_TIME_STEP,
    window_size: int = DEFAULT_WINDOW,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
    timestamp: Optional[float] = None,
) -> bool:
    """
    Validate a TOTP code within ±``window_size`` time steps.

    The current time is read once, so every candidate is computed against
    the same reference instant.

    Args:
        user_code:   Code submitted by the user; compared exactly.
        secret:      Shared secret.
        digits:      Expected number of digits.
        time_step:   Time step in seconds.
        window_size: Allowed skew in steps (default 1).
        algorithm:   HMAC algorithm.
        timestamp:   Override for "now" (Unix seconds).

    Returns:
        True if the code matches any step in the window.
    """
    validate_digits(digits)
    validate_time_step(time_step)
    validate_window(window_size)
    algorithm = Algorithm.parse(algorithm)
    key = encode_secret(secret)

    now = int(timestamp) if timestamp is not None else _now()
    for offset, expected in _window_codes(key, digits, time_step, window_size, algorithm, now):
        if constant_time_compare(user_code, expected):
            logger.debug("TOTP accepted at offset %+d (%s)", offset, algorithm.value)
            return True

    logger.debug("TOTP rejected within ±%d step(s) (%s)", window_size, algorithm.value)
    return False


def enumerate_valid_codes(
    secret: SecretLike,
    digits: int = DEFAULT_DIGITS,
    time_step: int = DEFAULT_TIME_STEP,
    window_size: int = DEFAULT_WINDOW,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
    timestamp: Optional[float] = None,
) -> Dict[int, str]:
    """
    Return every code accepted by :func:`verify_totp`, keyed by step offset.

    Keys run from ``-window_size`` to ``+window_size`` in ascending order.
    """
    validate_digits(digits)
    validate_time_step(time_step)
    validate_window(window_size)
    algorithm = Algorithm.parse(algorithm)
    key = encode_secret(secret)

    now = int(timestamp) if timestamp is not None else _now()
    return dict(_window_codes(key, digits, time_step, window_size, algorithm, now))

"""
HOTP (HMAC-based One-Time Password) implementation following RFC 4226.
"""

import struct

from core.crypto import Algorithm, hmac_digest
from core.errors import InvalidArgument
from core.utils import SecretLike, encode_secret, validate_digits

_COUNTER_MASK = 0xFFFFFFFFFFFFFFFF
_COUNTER_MIN = -(1 << 63)


def counter_bytes(counter: int) -> bytes:
    """
    Encode ``counter`` as exactly 8 big-endian bytes.

    Negative counters are written as 64-bit two's complement.

    Raises:
        InvalidArgument: If the counter does not fit in 64 bits.
    """
    if counter < _COUNTER_MIN or counter > _COUNTER_MASK:
        raise InvalidArgument(f"Counter {counter} does not fit in 64 bits.")
    return struct.pack(">Q", counter & _COUNTER_MASK)


def truncate(digest: bytes) -> int:
    """
    Dynamic truncation (RFC 4226 §5.3).

    Returns:
        31-bit non-negative integer taken from the digest.
    """
    offset = digest[-1] & 0x0F
    return (
        (digest[offset] & 0x7F) << 24
        | (digest[offset + 1] & 0xFF) << 16
        | (digest[offset + 2] & 0xFF) << 8
        | (digest[offset + 3] & 0xFF)
    )


def hotp_value(key: bytes, counter: int, digits: int, algorithm: Algorithm) -> str:
    # Arguments are already validated by the public callers.
    digest = hmac_digest(key, counter_bytes(counter), algorithm)
    otp = truncate(digest) % (10**digits)
    return str(otp).zfill(digits)


def generate_hotp(
    secret: SecretLike,
    counter: int,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Generate an HOTP code.

    Args:
        secret:    Shared secret (text is UTF-8 encoded).
        counter:   Moving factor.
        digits:    Number of OTP digits (6 or 8).
        algorithm: HMAC algorithm.

    Returns:
        Zero-padded OTP string.
    """
    validate_digits(digits)
    return hotp_value(encode_secret(secret), counter, digits, Algorithm.parse(algorithm))

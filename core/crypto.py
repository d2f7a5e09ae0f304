"""
Keyed-hash primitives for the OTP engine.

HMAC        : SHA-1 / SHA-256 / SHA-512 (stdlib ``hmac``)
Comparison  : constant time over UTF-8 bytes
"""

import hashlib
import hmac
from enum import Enum

from core.errors import InvalidArgument


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def parse(cls, name: "str | Algorithm") -> "Algorithm":
        """
        Look up an algorithm by name, ignoring case and dashes.

        ``"sha-256"``, ``"SHA256"`` and ``Algorithm.SHA256`` all resolve to
        :attr:`Algorithm.SHA256`.

        Raises:
            InvalidArgument: If the name is not a supported algorithm.
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().upper().replace("-", "")
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidArgument(
                f"Unsupported algorithm '{name}'. Supported: SHA1, SHA256, SHA512."
            ) from None


# ── Constants ────────────────────────────────────────────────────────────────

_ALG_MAP: dict[Algorithm, str] = {
    Algorithm.SHA1: "sha1",
    Algorithm.SHA256: "sha256",
    Algorithm.SHA512: "sha512",
}


# ── HMAC ─────────────────────────────────────────────────────────────────────

def hmac_digest(key: bytes, message: bytes, algorithm: Algorithm = Algorithm.SHA1) -> bytes:
    """
    Compute ``HMAC(key, message)`` with the selected hash.

    Args:
        key:       Secret key bytes.
        message:   Message bytes (the encoded counter for OTPs).
        algorithm: Hash function selector.

    Returns:
        Raw digest: 20, 32 or 64 bytes depending on ``algorithm``.
    """
    return hmac.new(key, message, _ALG_MAP[algorithm]).digest()


def digest_size(algorithm: Algorithm) -> int:
    """Return the digest length in bytes for ``algorithm``."""
    return hashlib.new(_ALG_MAP[algorithm]).digest_size


def constant_time_compare(a: str, b: str) -> bool:
    """Return True if *a* == *b* in constant time (timing-safe)."""
    return hmac.compare_digest(a.encode("utf-8", "surrogatepass"), b.encode("utf-8", "surrogatepass"))

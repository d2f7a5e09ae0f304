"""
Exception taxonomy for the OTP engine.

Every failure is a caller input error; nothing here is retried.
"""


class TOTPError(ValueError):
    """Base class for all errors raised by :mod:`core`."""


class InvalidArgument(TOTPError):
    """A numeric parameter or input value is outside its accepted range."""


class EncodingError(TOTPError):
    """A secret could not be converted to bytes."""

"""
Exception hierarchy for ecsig.

Every error raised on purpose by the package derives from ECSigError, so
callers can catch the whole family at once. A failed verification is not an
error: verify() simply returns False.
"""


class ECSigError(Exception):
    """Base class for all ecsig errors."""


class InvalidCurveError(ECSigError):
    """The curve cannot be used (zero order, unknown name)."""


class MalformedEncodingError(ECSigError, ValueError):
    """A byte or hex string is not a DER sequence of exactly two integers."""


class SigningError(ECSigError):
    """Signing could not produce a valid (r, s) pair."""


class EntropyError(SigningError):
    """The entropy source returned fewer bytes than requested."""

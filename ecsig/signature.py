"""
ECDSA signature value.

A Signature is an immutable pair of non-negative integers (r, s) with DER and
hex-encoded DER serialisation. The codec never checks the components against a
curve order: zero and out-of-range values round-trip and are left for
verify() to reject.
"""

import string

from ecsig.der import decode_der_signature, encode_der_signature
from ecsig.errors import MalformedEncodingError

_HEX_DIGITS = frozenset(string.hexdigits)


class Signature:
    """An ECDSA signature (r, s)."""

    __slots__ = ("_r", "_s")

    def __init__(self, r: int, s: int):
        for name, value in (("r", r), ("s", s)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, not {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")
        self._r = r
        self._s = s

    @classmethod
    def from_rs(cls, r: int, s: int) -> "Signature":
        return cls(r, s)

    @classmethod
    def from_encoded(cls, data: bytes) -> "Signature":
        """
        Parse a DER-encoded signature.

        Raises:
            MalformedEncodingError: If data is not a SEQUENCE of exactly two INTEGERs
        """
        r, s = decode_der_signature(data)
        return cls(r, s)

    @classmethod
    def from_encoded_hex(cls, text: str) -> "Signature":
        """
        Parse a hex string holding a DER-encoded signature.

        Upper and lower case digits are accepted, separators and whitespace are not.

        Raises:
            MalformedEncodingError: On odd length, non-hex characters or bad DER
        """
        if not isinstance(text, str):
            raise MalformedEncodingError("Hex signature must be a string")
        if len(text) % 2:
            raise MalformedEncodingError("Hex signature has odd length")
        if not _HEX_DIGITS.issuperset(text):
            raise MalformedEncodingError("Hex signature contains non-hex characters")
        return cls.from_encoded(bytes.fromhex(text))

    @property
    def r(self) -> int:
        return self._r

    @property
    def s(self) -> int:
        return self._s

    def encode(self) -> bytes:
        """Return the DER encoding of the signature."""
        return encode_der_signature(self._r, self._s)

    def encode_hex(self) -> str:
        """Return the DER encoding as lowercase hex."""
        return self.encode().hex()

    def __eq__(self, other):
        if not isinstance(other, Signature):
            return NotImplemented
        return self._r == other._r and self._s == other._s

    def __hash__(self):
        return hash((self._r, self._s))

    def __repr__(self):
        return f"Signature(r={self._r:#x}, s={self._s:#x})"

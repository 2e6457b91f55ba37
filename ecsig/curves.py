"""
Elliptic curve capability used by the signer and verifier.

The ECDSA code never touches curve arithmetic directly. It talks to a
CurveProvider, which exposes the curve order, its bit size and three point
operations taking big-endian scalar bytes. EcdsaCurve implements the interface
on top of the python-ecdsa library; tests and callers can plug in any other
implementation, e.g. a toy curve with hand-checkable parameters.

Points cross the interface as AffinePoint tuples, with (0, 0) standing for the
point at infinity.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple

from ecdsa import curves as ecdsa_curves
from ecdsa.ellipticcurve import INFINITY, PointJacobi

from ecsig.errors import InvalidCurveError
from ecsig.math_utils import bytes_to_long


class AffinePoint(NamedTuple):
    x: int
    y: int

    def is_infinity(self):
        return self.x == 0 and self.y == 0


AffinePoint.INFINITY = AffinePoint(0, 0)


class CurveProvider(ABC):
    """
    Abstract elliptic curve.

    Attributes:
        name (str): Curve name, for logging
        order (int): Order n of the base point
        bit_size (int): Bit length of n
    """

    name = "unnamed"
    order = 0
    bit_size = 0

    @abstractmethod
    def scalar_base_mul(self, scalar_bytes):
        """Return k*G for the big-endian scalar k."""

    @abstractmethod
    def scalar_mul(self, point, scalar_bytes):
        """Return k*point for the big-endian scalar k."""

    @abstractmethod
    def add(self, p1, p2):
        """Return p1 + p2."""

    @property
    def scalar_size(self):
        """Number of bytes needed to hold a scalar modulo the order."""
        return (self.bit_size + 7) // 8

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class EcdsaCurve(CurveProvider):
    """CurveProvider backed by a python-ecdsa ``ecdsa.curves.Curve``."""

    def __init__(self, curve):
        self.curve = curve
        self.name = curve.name
        self.order = int(curve.order)
        self.bit_size = self.order.bit_length()

    def _to_native(self, point):
        if point.is_infinity():
            return INFINITY
        return PointJacobi(self.curve.curve, point.x, point.y, 1, self.order)

    @staticmethod
    def _from_native(point):
        if point == INFINITY:
            return AffinePoint.INFINITY
        if isinstance(point, PointJacobi):
            point = point.to_affine()
            if point == INFINITY:
                return AffinePoint.INFINITY
        # gmpy may hand back mpz values
        return AffinePoint(int(point.x()), int(point.y()))

    def scalar_base_mul(self, scalar_bytes):
        k = bytes_to_long(scalar_bytes)
        return self._from_native(self.curve.generator * k)

    def scalar_mul(self, point, scalar_bytes):
        k = bytes_to_long(scalar_bytes)
        native = self._to_native(point)
        if native == INFINITY or k == 0:
            return AffinePoint.INFINITY
        return self._from_native(native * k)

    def add(self, p1, p2):
        if p1.is_infinity():
            return p2
        if p2.is_infinity():
            return p1
        return self._from_native(self._to_native(p1) + self._to_native(p2))

    def contains(self, point):
        """Check that an affine point lies on the curve (infinity excluded)."""
        if point.is_infinity():
            return False
        return self.curve.curve.contains_point(point.x, point.y)


# SEC 2 names used by the cryptography package that python-ecdsa knows under
# another name
_CURVE_ALIASES = {
    "secp192r1": "NIST192p",
    "secp256r1": "NIST256p",
}


def get_curve(name):
    """
    Look up a named curve.

    Args:
        name (str): python-ecdsa name (``NIST256p``), OpenSSL name
            (``prime256v1``) or SEC 2 name (``secp256r1``)

    Returns:
        EcdsaCurve: The curve

    Raises:
        InvalidCurveError: If the name is unknown
    """
    try:
        curve = ecdsa_curves.curve_by_name(_CURVE_ALIASES.get(name, name))
    except ecdsa_curves.UnknownCurveError as e:
        raise InvalidCurveError(f"Unknown curve: {name}") from e
    return EcdsaCurve(curve)


def digest_to_scalar(digest, curve):
    """
    Convert a message digest to the integer e used by ECDSA.

    The leftmost bit_size bits of the digest are read as a big-endian integer.
    The value is truncated, never reduced modulo the order.

    Args:
        digest (bytes): Message digest
        curve (CurveProvider): Curve whose order bounds the result

    Returns:
        int: Integer of at most curve.bit_size bits
    """
    order_bits = curve.bit_size
    order_bytes = (order_bits + 7) // 8
    digest = bytes(digest[:order_bytes])

    e = bytes_to_long(digest)
    excess = len(digest) * 8 - order_bits
    if excess > 0:
        e >>= excess
    return e

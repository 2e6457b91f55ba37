import hashlib
import logging

import pytest

from ecsig.curves import AffinePoint, CurveProvider, get_curve
from ecsig.keys import PrivateKey
from ecsig.logger import LOGGER_NAME, set_verbose_mode
from ecsig.math_utils import bytes_to_long


class ToyCurve(CurveProvider):
    """y^2 = x^3 + 4x + 20 over F_29, G = (8, 10) of prime order 37.

    Small enough to check by hand. (0, 0) is not on the curve, so it can
    stand for the point at infinity without ambiguity.
    """

    name = "toy29"
    p = 29
    a = 4
    b = 20
    order = 37
    bit_size = 6
    G = AffinePoint(8, 10)

    def contains(self, point):
        x, y = point
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0

    def add(self, p1, p2):
        if p1.is_infinity():
            return p2
        if p2.is_infinity():
            return p1

        p = self.p
        x1, y1 = p1
        x2, y2 = p2
        if x1 == x2 and (y1 + y2) % p == 0:
            return AffinePoint.INFINITY
        if p1 == p2:
            m = (3 * x1 * x1 + self.a) * pow(2 * y1, -1, p) % p
        else:
            m = (y2 - y1) * pow(x2 - x1, -1, p) % p
        x3 = (m * m - x1 - x2) % p
        y3 = (m * (x1 - x3) - y1) % p
        return AffinePoint(x3, y3)

    def multiply(self, k, point):
        result = AffinePoint.INFINITY
        addend = point
        k %= self.order
        while k:
            if k & 1:
                result = self.add(result, addend)
            addend = self.add(addend, addend)
            k >>= 1
        return result

    def scalar_base_mul(self, scalar_bytes):
        return self.multiply(bytes_to_long(scalar_bytes), self.G)

    def scalar_mul(self, point, scalar_bytes):
        return self.multiply(bytes_to_long(scalar_bytes), point)


class ScriptedEntropy:
    """Entropy source replaying a fixed list of nonces, for reproducible tests."""

    def __init__(self, *nonces):
        self.nonces = list(nonces)
        self.calls = 0

    def __call__(self, count):
        value = self.nonces[min(self.calls, len(self.nonces) - 1)]
        self.calls += 1
        return value.to_bytes(count, "big")


@pytest.fixture
def toy_curve():
    return ToyCurve()


@pytest.fixture
def toy_key(toy_curve):
    return PrivateKey(toy_curve, 3)


@pytest.fixture(scope="session")
def p256():
    return get_curve("secp256r1")


@pytest.fixture(scope="session")
def p256_key(p256):
    # RFC 6979 A.2.5 private key
    return PrivateKey(p256, 0xC9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721)


@pytest.fixture
def sample_digest():
    return hashlib.sha256(b"sample").digest()


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to captured streams and restore the default verbosity."""
    yield
    set_verbose_mode(False)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.INFO)

"""
ECDSA signing.

sign() produces a randomized ECDSA signature over a message digest. The nonce
k is drawn fresh from the entropy source for every attempt, oversampled by
NONCE_OVERSAMPLE_BYTES so that its reduction modulo n is statistically
uniform. Deterministic (RFC 6979) nonces are not implemented.
"""

import os

from ecsig.curves import digest_to_scalar
from ecsig.errors import EntropyError, InvalidCurveError, SigningError
from ecsig.logger import get_logger
from ecsig.math_utils import bytes_to_long, inverse
from ecsig.signature import Signature

logger = get_logger()

NONCE_OVERSAMPLE_BYTES = 8

# Total nonce draws allowed per signature, across both rejection loops
MAX_SIGN_ATTEMPTS = 256


def _draw_nonce(entropy, size):
    rand = entropy(size)
    if len(rand) != size:
        raise EntropyError(f"Entropy source returned {len(rand)} bytes, expected {size}")
    return rand


def sign(private_key, digest, entropy=None):
    """
    Sign a message digest.

    If the digest is longer than the bit length of the curve order it is
    truncated to that length.

    Args:
        private_key (PrivateKey): Signing key, exposes curve and d
        digest (bytes): Message digest, non-empty
        entropy (callable, optional): Function returning n random bytes,
            os.urandom by default

    Returns:
        Signature: (r, s) with 0 < r, s < n

    Raises:
        InvalidCurveError: If the curve order is zero
        SigningError: If no valid signature was found within MAX_SIGN_ATTEMPTS nonces
        ValueError: If the digest is empty
    """
    curve = private_key.curve
    n = curve.order

    if n == 0:
        raise InvalidCurveError(f"Curve {curve.name} has order zero")
    if not digest:
        raise ValueError("Digest must not be empty")
    if entropy is None:
        entropy = os.urandom

    byte_len = curve.bit_size // 8 + NONCE_OVERSAMPLE_BYTES
    e = digest_to_scalar(digest, curve)

    attempts = 0
    while attempts < MAX_SIGN_ATTEMPTS:
        # Pick k until it gives a non-zero r
        while attempts < MAX_SIGN_ATTEMPTS:
            attempts += 1
            rand = _draw_nonce(entropy, byte_len)
            r = curve.scalar_base_mul(rand).x % n
            if r != 0:
                break
            logger.debug("Nonce gave r == 0, drawing a new one")
        else:
            break

        k_inv = inverse(bytes_to_long(rand), n)
        s = (private_key.d * r + e) * k_inv % n
        if s != 0:
            if attempts > 1:
                logger.debug(f"Signed on {curve.name} after {attempts} nonce draws")
            return Signature(r, s)
        logger.debug("Nonce gave s == 0, starting over")

    raise SigningError(f"No valid signature after {MAX_SIGN_ATTEMPTS} nonces on {curve.name}")

"""
ECDSA Signature Verification

This module checks an ECDSA signature over a message digest against a public
key. It performs the raw mathematical operations of the verification equation
on top of a CurveProvider.

Functions:
    verify(public_key, digest, signature):
        Returns whether (r, s) is a valid signature of digest under public_key.

A signature that fails any check is reported as False, never as an exception.
The public point itself is not re-validated here; keys loaded through
ecsig.keys are validated by cryptography at load time.
"""

from ecsig.curves import digest_to_scalar
from ecsig.logger import get_logger
from ecsig.math_utils import inverse, long_to_bytes

logger = get_logger()


def verify(public_key, digest, signature):
    """
    Verify an ECDSA signature.

    Args:
        public_key (PublicKey): Public key, exposes curve and point
        digest (bytes): The message digest that was signed
        signature (Signature): The signature to verify

    Returns:
        bool: True if the signature is valid, False otherwise
    """
    curve = public_key.curve
    n = curve.order
    r, s = signature.r, signature.s

    # Perform ECDSA signature range checks
    if r <= 0 or s <= 0:
        logger.debug("Signature rejected: r or s is not positive")
        return False
    if r >= n or s >= n:
        logger.debug("Signature rejected: r or s is not below the curve order")
        return False

    e = digest_to_scalar(digest, curve)

    # Calculate signature verification values
    w = inverse(s, n)
    u1 = (e * w) % n
    u2 = (r * w) % n

    # Perform the ECDSA verification calculation P = u1*G + u2*Q
    size = curve.scalar_size
    p1 = curve.scalar_base_mul(long_to_bytes(u1, size))
    p2 = curve.scalar_mul(public_key.point, long_to_bytes(u2, size))
    P = curve.add(p1, p2)

    if P.is_infinity():
        logger.debug("Signature rejected: u1*G + u2*Q is the point at infinity")
        return False

    r1 = P.x % n
    if r1 != r:
        logger.debug("Signature rejected: x coordinate does not match r")
        return False
    return True

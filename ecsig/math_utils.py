"""
Integer Utilities for ECDSA

Small helpers shared by the signer, the verifier and the DER codec for moving
between byte strings and integers, and for modular arithmetic over the curve
order.

Functions:
    bytes_to_long(byte_array):
        Converts a byte string to an integer using big-endian byte order.

    long_to_bytes(n, blocksize=0):
        Converts a non-negative integer to a byte string using big-endian byte order.

    inverse(a, m):
        Calculates the modular multiplicative inverse using the extended Euclidean algorithm.

Note:
    These implementations are not constant-time. Side-channel resistance is
    outside the scope of this package.
"""


def bytes_to_long(byte_array):
    """
    Convert a byte string to an integer.

    Args:
        byte_array (bytes): Bytes to convert

    Returns:
        int: Integer representation of the byte array (big-endian)
    """
    return int.from_bytes(byte_array, byteorder='big')


def long_to_bytes(n, blocksize=0):
    """
    Convert a non-negative integer to a byte string.

    Zero becomes a single zero byte unless a larger blocksize is requested.

    Args:
        n (int): Integer to convert
        blocksize (int, optional): Minimum size of the resulting byte string

    Returns:
        bytes: Byte representation of the integer (big-endian)

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError("Cannot convert a negative integer to bytes")

    byte_length = max(1, (n.bit_length() + 7) // 8)

    if blocksize > 0 and byte_length < blocksize:
        byte_length = blocksize

    return n.to_bytes(byte_length, byteorder='big')


def inverse(a, m):
    """
    Calculate the modular multiplicative inverse of 'a' modulo 'm'.

    Args:
        a (int): Number to find the inverse for
        m (int): Modulus, must be positive

    Returns:
        int: x in [0, m) such that (a * x) % m == 1

    Raises:
        ValueError: If the modulus is not positive or the inverse doesn't exist
    """
    if m <= 0:
        raise ValueError("Modulus must be positive")
    if m == 1:
        return 0

    # Extended Euclid, iterative so that large moduli don't hit the recursion limit
    old_r, r = a % m, m
    old_x, x = 1, 0
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x

    if old_r != 1:
        raise ValueError("Modular inverse does not exist")
    return old_x % m

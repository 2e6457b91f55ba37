"""
DER-Encoded ECDSA Signature Codec

This module encodes and decodes ECDSA signatures in the DER form used by
X.509, TLS, OpenSSL and most ECDSA libraries:

    SEQUENCE {
        INTEGER r,
        INTEGER s
    }

Functions:
    encode_der_signature(r, s):
        Encodes the r and s components as a DER sequence of two integers.

    decode_der_signature(sequence):
        Decodes a DER-encoded ECDSA signature and extracts its r and s components.

Decoding is strict: anything other than exactly one sequence holding exactly
two non-negative, minimally encoded integers is rejected with
MalformedEncodingError. The codec does not check that r and s lie in the
range of a curve order; that is the verifier's job.
"""

from ecsig.errors import MalformedEncodingError
from ecsig.math_utils import bytes_to_long, long_to_bytes

SEQUENCE_TAG = 0x30
INTEGER_TAG = 0x02


def _encode_length(length):
    """Encode a DER length: short form below 128, minimal long form above."""
    if length < 0x80:
        return bytes([length])
    length_bytes = long_to_bytes(length)
    return bytes([0x80 | len(length_bytes)]) + length_bytes


def _encode_integer(value):
    """Encode a non-negative integer as a DER INTEGER."""
    content = long_to_bytes(value)
    # A set high bit would be read back as a negative number
    if content[0] & 0x80:
        content = b"\x00" + content
    return bytes([INTEGER_TAG]) + _encode_length(len(content)) + content


def encode_der_signature(r, s):
    """
    Encode an ECDSA signature as DER.

    Args:
        r (int): First signature component, non-negative
        s (int): Second signature component, non-negative

    Returns:
        bytes: DER-encoded signature

    Raises:
        ValueError: If r or s is negative
    """
    body = _encode_integer(r) + _encode_integer(s)
    return bytes([SEQUENCE_TAG]) + _encode_length(len(body)) + body


def _read_length(data, offset):
    """
    Read a DER length field.

    Args:
        data (bytes): Encoded data
        offset (int): Position of the first length byte

    Returns:
        tuple: (length, offset of the first content byte)
    """
    if offset >= len(data):
        raise MalformedEncodingError("Truncated length field")

    first = data[offset]
    offset += 1
    if first < 0x80:
        return first, offset

    num_bytes = first & 0x7F
    if num_bytes == 0:
        raise MalformedEncodingError("Indefinite length is not allowed in DER")
    if offset + num_bytes > len(data):
        raise MalformedEncodingError("Truncated long-form length field")

    length_bytes = data[offset:offset + num_bytes]
    if length_bytes[0] == 0:
        raise MalformedEncodingError("Non-minimal long-form length")
    length = bytes_to_long(length_bytes)
    if length < 0x80:
        raise MalformedEncodingError("Long-form length used for a short length")
    return length, offset + num_bytes


def _read_integer(data, offset):
    """
    Read one DER INTEGER holding a non-negative value.

    Returns:
        tuple: (value, offset just past the integer)
    """
    if offset >= len(data):
        raise MalformedEncodingError("Missing integer")
    if data[offset] != INTEGER_TAG:
        raise MalformedEncodingError(
            "Expected INTEGER tag 0x02, found 0x%02x" % data[offset]
        )

    length, offset = _read_length(data, offset + 1)
    if length == 0:
        raise MalformedEncodingError("Empty integer")
    end = offset + length
    if end > len(data):
        raise MalformedEncodingError("Truncated integer")

    content = data[offset:end]
    if content[0] & 0x80:
        raise MalformedEncodingError("Negative integer in signature")
    if length > 1 and content[0] == 0 and not content[1] & 0x80:
        raise MalformedEncodingError("Non-minimal integer encoding")

    return bytes_to_long(content), end


def decode_der_signature(sequence):
    """
    Decode a DER-encoded ECDSA signature.

    Args:
        sequence (bytes): DER-encoded signature

    Returns:
        tuple: (r, s) components of the signature

    Raises:
        MalformedEncodingError: If the data is not exactly one SEQUENCE of two INTEGERs
    """
    if not isinstance(sequence, (bytes, bytearray, memoryview)):
        raise MalformedEncodingError("Signature must be bytes-like")
    sequence = bytes(sequence)

    if not sequence:
        raise MalformedEncodingError("Empty signature")

    # Verify this is a sequence
    if sequence[0] != SEQUENCE_TAG:
        raise MalformedEncodingError(
            "Expected SEQUENCE tag 0x30, found 0x%02x" % sequence[0]
        )

    sequence_length, offset = _read_length(sequence, 1)
    end = offset + sequence_length
    if end > len(sequence):
        raise MalformedEncodingError("Truncated sequence")
    if end < len(sequence):
        raise MalformedEncodingError("Trailing data after sequence")

    # Parse the r and s components
    r, offset = _read_integer(sequence, offset)
    s, offset = _read_integer(sequence, offset)

    if offset != end:
        raise MalformedEncodingError("Sequence holds more than two elements")

    return r, s

"""
ECDSA key holders and loaders.

PrivateKey and PublicKey bind key material to a CurveProvider. Keys usually
come from the cryptography package, either as key objects or from PEM/DER
files, including the subject public key of an X.509 certificate.

Functions:
    private_key_from_cryptography(key):
        Wraps a cryptography EllipticCurvePrivateKey.

    public_key_from_cryptography(key):
        Wraps a cryptography EllipticCurvePublicKey.

    load_private_key(file_format, file_name, password=None):
        Loads a PEM or DER private key file.

    load_public_key(file_format, file_name):
        Loads a PEM or DER public key or X.509 certificate file.

Point validation happens in cryptography when a key is loaded; PublicKey does
not check that its point lies on the curve.
"""

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ecsig.curves import AffinePoint, get_curve
from ecsig.logger import get_logger
from ecsig.math_utils import long_to_bytes

logger = get_logger()


class PrivateKey:
    """Private scalar d on a curve."""

    def __init__(self, curve, d):
        # a zero order is reported by sign() as InvalidCurveError
        if d <= 0 or (curve.order and d >= curve.order):
            raise ValueError("Private scalar must be in [1, n - 1]")
        self.curve = curve
        self.d = d

    def public_key(self):
        """Derive the matching public key Q = d*G."""
        point = self.curve.scalar_base_mul(long_to_bytes(self.d, self.curve.scalar_size))
        return PublicKey(self.curve, point)

    def __repr__(self):
        # never show d
        return f"PrivateKey(curve={self.curve.name})"


class PublicKey:
    """Public point Q on a curve."""

    def __init__(self, curve, point):
        self.curve = curve
        self.point = AffinePoint(*point)

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.curve.name == other.curve.name and self.point == other.point

    def __hash__(self):
        return hash((self.curve.name, self.point))

    def __repr__(self):
        return f"PublicKey(curve={self.curve.name}, x={self.point.x:#x}, y={self.point.y:#x})"


def private_key_from_cryptography(key):
    """
    Convert a cryptography private key.

    Args:
        key (ec.EllipticCurvePrivateKey): Private key object

    Returns:
        PrivateKey: Equivalent key

    Raises:
        TypeError: If the key is not an elliptic curve key
        InvalidCurveError: If the curve is not supported
    """
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise TypeError(f"Expected an EC private key, got {type(key).__name__}")
    numbers = key.private_numbers()
    curve = get_curve(key.curve.name)
    return PrivateKey(curve, numbers.private_value)


def public_key_from_cryptography(key):
    """
    Convert a cryptography public key.

    Args:
        key (ec.EllipticCurvePublicKey): Public key object

    Returns:
        PublicKey: Equivalent key

    Raises:
        TypeError: If the key is not an elliptic curve key
        InvalidCurveError: If the curve is not supported
    """
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise TypeError(f"Expected an EC public key, got {type(key).__name__}")
    numbers = key.public_numbers()
    curve = get_curve(key.curve.name)
    return PublicKey(curve, AffinePoint(numbers.x, numbers.y))


def _read_file(file_name):
    with open(file_name, "rb") as f:
        return f.read()


def load_private_key(file_format, file_name, password=None):
    """
    Load a private key from a file.

    Args:
        file_format (str): Format of the key ('pem' or 'der')
        file_name (str): Path to the key file
        password (bytes, optional): Password of an encrypted key

    Returns:
        PrivateKey: Loaded key
    """
    file_data = _read_file(file_name)

    if file_format.lower() == "pem":
        key = serialization.load_pem_private_key(file_data, password=password)
    else:
        key = serialization.load_der_private_key(file_data, password=password)

    logger.debug(f"Loaded private key from {file_name}")
    return private_key_from_cryptography(key)


def load_public_key(file_format, file_name):
    """
    Load a public key from a key file or an X.509 certificate.

    Args:
        file_format (str): Format of the file ('pem' or 'der')
        file_name (str): Path to the public key or certificate

    Returns:
        PublicKey: Loaded key
    """
    file_data = _read_file(file_name)

    if file_format.lower() == "pem":
        if b"-----BEGIN CERTIFICATE-----" in file_data:
            cert = x509.load_pem_x509_certificate(file_data)
            logger.debug(f"Using subject key of {cert.subject.rfc4514_string()}")
            key = cert.public_key()
        else:
            key = serialization.load_pem_public_key(file_data)
    else:
        try:
            key = serialization.load_der_public_key(file_data)
        except ValueError:
            cert = x509.load_der_x509_certificate(file_data)
            logger.debug(f"Using subject key of {cert.subject.rfc4514_string()}")
            key = cert.public_key()

    logger.debug(f"Loaded public key from {file_name}")
    return public_key_from_cryptography(key)

"""ECDSA signing and verification with DER-encoded signatures."""

from ecsig.curves import AffinePoint, CurveProvider, EcdsaCurve, digest_to_scalar, get_curve
from ecsig.der import decode_der_signature, encode_der_signature
from ecsig.errors import (
    ECSigError,
    EntropyError,
    InvalidCurveError,
    MalformedEncodingError,
    SigningError,
)
from ecsig.keys import (
    PrivateKey,
    PublicKey,
    load_private_key,
    load_public_key,
    private_key_from_cryptography,
    public_key_from_cryptography,
)
from ecsig.signature import Signature
from ecsig.signer import sign
from ecsig.verifier import verify

__version__ = "0.1.0"

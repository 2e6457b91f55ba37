import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.x509.oid import NameOID

from ecsig.curves import AffinePoint
from ecsig.keys import (
    PrivateKey,
    PublicKey,
    load_private_key,
    load_public_key,
    private_key_from_cryptography,
    public_key_from_cryptography,
)


@pytest.fixture(scope="module")
def crypto_key():
    return ec.generate_private_key(ec.SECP256R1())


def self_signed_certificate(key):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "ecsig test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )


def test_conversion_matches_cryptography_numbers(crypto_key):
    private_key = private_key_from_cryptography(crypto_key)
    public_key = public_key_from_cryptography(crypto_key.public_key())
    numbers = crypto_key.public_key().public_numbers()

    assert private_key.d == crypto_key.private_numbers().private_value
    assert public_key.point == AffinePoint(numbers.x, numbers.y)
    assert private_key.public_key() == public_key


def test_conversion_rejects_non_ec_keys():
    key = ed25519.Ed25519PrivateKey.generate()

    with pytest.raises(TypeError):
        private_key_from_cryptography(key)
    with pytest.raises(TypeError):
        public_key_from_cryptography(key.public_key())


@pytest.mark.parametrize("d", [0, -1])
def test_private_scalar_range(p256, d):
    with pytest.raises(ValueError):
        PrivateKey(p256, d)


def test_private_scalar_below_order(p256):
    with pytest.raises(ValueError):
        PrivateKey(p256, p256.order)


def test_private_key_repr_hides_scalar(p256):
    key = PrivateKey(p256, 0xDEADBEEF)

    assert "deadbeef" not in repr(key).lower()
    assert str(0xDEADBEEF) not in repr(key)


def test_public_key_equality(p256):
    point = PrivateKey(p256, 7).public_key().point

    assert PublicKey(p256, point) == PublicKey(p256, tuple(point))
    assert PublicKey(p256, point) != PrivateKey(p256, 8).public_key()


@pytest.mark.parametrize("file_format, encoding", [
    ("PEM", serialization.Encoding.PEM),
    ("DER", serialization.Encoding.DER),
])
def test_load_key_files(tmp_path, crypto_key, file_format, encoding):
    private_path = tmp_path / "key"
    public_path = tmp_path / "key.pub"
    private_path.write_bytes(crypto_key.private_bytes(
        encoding, serialization.PrivateFormat.PKCS8, serialization.NoEncryption()
    ))
    public_path.write_bytes(crypto_key.public_key().public_bytes(
        encoding, serialization.PublicFormat.SubjectPublicKeyInfo
    ))

    private_key = load_private_key(file_format, str(private_path))
    public_key = load_public_key(file_format, str(public_path))

    assert private_key.public_key() == public_key


def test_load_encrypted_private_key(tmp_path, crypto_key):
    path = tmp_path / "key.pem"
    path.write_bytes(crypto_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.BestAvailableEncryption(b"hunter2"),
    ))

    key = load_private_key("pem", str(path), password=b"hunter2")

    assert key.d == crypto_key.private_numbers().private_value


@pytest.mark.parametrize("file_format, encoding", [
    ("PEM", serialization.Encoding.PEM),
    ("DER", serialization.Encoding.DER),
])
def test_load_public_key_from_certificate(tmp_path, crypto_key, file_format, encoding):
    path = tmp_path / "cert"
    path.write_bytes(self_signed_certificate(crypto_key).public_bytes(encoding))

    public_key = load_public_key(file_format, str(path))

    assert public_key == public_key_from_cryptography(crypto_key.public_key())


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_public_key("PEM", str(tmp_path / "nope.pem"))

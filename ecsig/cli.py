"""Command line front-end: sign files, verify signatures, inspect DER blobs."""

import argparse
import os
import sys

from cryptography.hazmat.primitives import hashes

from ecsig.colors import Colors, colored
from ecsig.errors import ECSigError
from ecsig.keys import load_private_key, load_public_key
from ecsig.logger import get_logger, set_verbose_mode
from ecsig.signature import Signature
from ecsig.signer import sign
from ecsig.verifier import verify

HASH_ALGORITHMS = {
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha3-256": hashes.SHA3_256,
    "sha3-384": hashes.SHA3_384,
    "sha3-512": hashes.SHA3_512,
}


def compute_digest(file_name, hash_name, prehashed=False):
    """
    Read a file and return the digest to sign or verify.

    Args:
        file_name (str): Path to the message file
        hash_name (str): Key of HASH_ALGORITHMS
        prehashed (bool): The file already holds the digest

    Returns:
        bytes: Message digest
    """
    with open(file_name, "rb") as f:
        data = f.read()

    if prehashed:
        return data

    hash_obj = hashes.Hash(HASH_ALGORITHMS[hash_name]())
    hash_obj.update(data)
    return hash_obj.finalize()


def read_signature(value):
    """Accept either a path to a binary DER file or a hex string."""
    if os.path.isfile(value):
        with open(value, "rb") as f:
            return Signature.from_encoded(f.read())
    return Signature.from_encoded_hex(value.strip())


def _add_key_arguments(parser):
    parser.add_argument(
        "-f", "--format",
        choices=["DER", "PEM"],
        default="PEM",
        help="Key file format (default: PEM)"
    )
    parser.add_argument(
        "-k", "--key",
        required=True,
        help="Key file"
    )
    parser.add_argument(
        "--hash",
        choices=sorted(HASH_ALGORITHMS),
        default="sha256",
        help="Hash algorithm applied to the message (default: sha256)"
    )
    parser.add_argument(
        "--prehashed",
        action="store_true",
        help="The message file already contains the digest"
    )


def parse_arguments(argv=None):
    """Parse command line arguments using argparse."""
    parser = argparse.ArgumentParser(
        prog="ecsig",
        description="Create and check ECDSA signatures",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_parser = subparsers.add_parser("sign", help="Sign a file, print the hex DER signature")
    _add_key_arguments(sign_parser)
    sign_parser.add_argument(
        "--password",
        help="Password of an encrypted private key"
    )
    sign_parser.add_argument("message", help="File to sign")

    verify_parser = subparsers.add_parser("verify", help="Verify a signature over a file")
    _add_key_arguments(verify_parser)
    verify_parser.add_argument("message", help="Signed file")
    verify_parser.add_argument("signature", help="Hex DER signature or path to a DER file")

    inspect_parser = subparsers.add_parser("inspect", help="Print the r and s components")
    inspect_parser.add_argument("signature", help="Hex DER signature or path to a DER file")

    return parser.parse_args(argv)


def run_sign(args):
    password = args.password.encode() if args.password else None
    private_key = load_private_key(args.format, args.key, password)
    digest = compute_digest(args.message, args.hash, args.prehashed)
    print(sign(private_key, digest).encode_hex())
    return 0


def run_verify(args, logger):
    public_key = load_public_key(args.format, args.key)
    digest = compute_digest(args.message, args.hash, args.prehashed)
    signature = read_signature(args.signature)
    logger.debug(f"Verifying {signature!r} on {public_key.curve.name}")

    if verify(public_key, digest, signature):
        print(colored("✓ Signature is valid", Colors.GREEN))
        return 0
    print(colored("✗ Signature is invalid", Colors.RED))
    return 1


def run_inspect(args):
    signature = read_signature(args.signature)
    print(f"r: {signature.r:x}")
    print(f"s: {signature.s:x}")
    return 0


def main(argv=None):
    """Main entry point for the ecsig tool."""
    try:
        args = parse_arguments(argv)

        # Set global verbose mode and get a logger for this module
        set_verbose_mode(args.verbose)
        logger = get_logger()
        logger.debug(f"Running command: {args.command}")

        if args.command == "sign":
            return run_sign(args)
        if args.command == "verify":
            return run_verify(args, logger)
        return run_inspect(args)

    except (ECSigError, ValueError, TypeError, OSError) as e:
        print(colored(f"Error: {str(e)}", Colors.RED, sys.stderr), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

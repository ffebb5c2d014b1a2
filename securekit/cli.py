#!/usr/bin/env python3
"""
SecureKit command line tool

Usage:
    securekit digest -a SHA-256 file1 file2
    securekit hmac -a HmacSHA1 -k 6b6579 file1
    securekit keygen -a AES
    securekit keypair -a RSA --size 2048 --output keys
    securekit cert certs/server_cert.pem
"""

import argparse
import os
import sys
from pathlib import Path

from .common.exceptions import CryptoError
from .common.utils import decode_hex, encode_hex
from .crypto.algorithms import AsymmetricAlgorithm, DigestAlgorithm, HmacAlgorithm
from .crypto.digest import Digester
from .crypto.keys import encode_private_key, encode_public_key, generate_key, generate_key_pair
from .crypto.mac import HMac
from .crypto.pki import get_certificate_info, read_x509_certificate


def _digest_targets(digester: Digester, targets, buffer_length=None):
    for target in targets:
        if target == "-":
            value = digester.digest_stream_hex(sys.stdin.buffer, buffer_length)
        else:
            with open(target, "rb") as f:
                value = digester.digest_stream_hex(f, buffer_length)
        print(f"{value}  {target}")


def cmd_digest(args):
    _digest_targets(Digester(args.algorithm), args.files, args.buffer)


def cmd_hmac(args):
    try:
        key = decode_hex(args.key)
    except ValueError as e:
        raise CryptoError(f"Key is not valid hex: {e}") from e
    _digest_targets(HMac(args.algorithm, key), args.files, args.buffer)


def cmd_keygen(args):
    print(encode_hex(generate_key(args.algorithm).encoded))


def cmd_keypair(args):
    seed = None
    if args.seed is not None:
        try:
            seed = decode_hex(args.seed)
        except ValueError as e:
            raise CryptoError(f"Seed is not valid hex: {e}") from e

    print(f"[*] Generating {args.algorithm} key pair...")
    key_pair = generate_key_pair(args.algorithm, args.size, seed)

    os.makedirs(args.output, exist_ok=True)

    private_path = os.path.join(args.output, "private_key.der")
    with open(private_path, "wb") as f:
        f.write(encode_private_key(key_pair.private_key))
    print(f"[+] PKCS#8 private key saved to: {private_path}")

    public_path = os.path.join(args.output, "public_key.der")
    with open(public_path, "wb") as f:
        f.write(encode_public_key(key_pair.public_key))
    print(f"[+] X.509 public key saved to: {public_path}")


def cmd_cert(args):
    with open(args.certificate, "rb") as f:
        cert = read_x509_certificate(f)

    print("[*] Certificate Information:")
    for key, value in get_certificate_info(cert).items():
        print(f"    {key}: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="securekit",
        description="Digests, HMACs, keys and certificates"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    digest = subparsers.add_parser("digest", help="Print the digest of files")
    digest.add_argument(
        "-a", "--algorithm",
        default=DigestAlgorithm.SHA256.value,
        help="Digest algorithm (default: SHA-256)"
    )
    digest.add_argument("--buffer", type=int, default=None, help="Read buffer size in bytes")
    digest.add_argument("files", nargs="+", help="Files to digest, '-' for stdin")
    digest.set_defaults(func=cmd_digest)

    hmac = subparsers.add_parser("hmac", help="Print the HMAC of files")
    hmac.add_argument(
        "-a", "--algorithm",
        default=HmacAlgorithm.HmacSHA256.value,
        help="HMAC algorithm (default: HmacSHA256)"
    )
    hmac.add_argument("-k", "--key", required=True, help="Hex-encoded key")
    hmac.add_argument("--buffer", type=int, default=None, help="Read buffer size in bytes")
    hmac.add_argument("files", nargs="+", help="Files to authenticate, '-' for stdin")
    hmac.set_defaults(func=cmd_hmac)

    keygen = subparsers.add_parser("keygen", help="Print a random hex secret key")
    keygen.add_argument("-a", "--algorithm", default="AES", help="Key algorithm (default: AES)")
    keygen.set_defaults(func=cmd_keygen)

    keypair = subparsers.add_parser("keypair", help="Write a DER key pair")
    keypair.add_argument(
        "-a", "--algorithm",
        default=AsymmetricAlgorithm.RSA.value,
        help="RSA or DSA (default: RSA)"
    )
    keypair.add_argument("--size", type=int, default=None, help="Key size in bits (default: 1024)")
    keypair.add_argument("--seed", default=None, help="Hex seed for deterministic generation")
    keypair.add_argument("--output", default="keys", help="Output directory (default: keys)")
    keypair.set_defaults(func=cmd_keypair)

    cert = subparsers.add_parser("cert", help="Show an X.509 certificate")
    cert.add_argument("certificate", type=Path, help="PEM or DER certificate file")
    cert.set_defaults(func=cmd_cert)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (CryptoError, OSError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

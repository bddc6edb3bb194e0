"""
Strong-name key blobs: public key extraction and token derivation.

A ``.snk`` key pair file is a CryptoAPI PRIVATEKEYBLOB:

    BLOBHEADER   bType(1)=0x07 | bVersion(1) | reserved(2) | aiKeyAlg(4)
    RSAPUBKEY    magic(4)="RSA2" | bitlen(4) | pubexp(4)
    modulus(bitlen/8) | prime1 | prime2 | exponent1 | exponent2 |
    coefficient (bitlen/16 each) | privateExponent(bitlen/8)

The strong-name public key embedded in an assembly is:

    SigAlgId(4)=CALG_RSA_SIGN | HashAlgId(4)=CALG_SHA1 | cbPublicKey(4) |
    PUBLICKEYBLOB (same layout as above, bType=0x06, magic="RSA1", modulus only,
    aiKeyAlg copied from the key pair)

All integers are little-endian, including the big numbers.
"""

from __future__ import annotations

import hashlib
import logging
import struct

from cryptography.hazmat.primitives.asymmetric import rsa

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────

PRIVATE_KEY_BLOB_ID = 0x07
PUBLIC_KEY_BLOB_ID = 0x06
BLOB_VERSION = 0x02

CALG_RSA_SIGN = 0x00002400
CALG_RSA_KEYX = 0x0000A400
CALG_SHA1 = 0x00008004

RSA1 = 0x31415352  # "RSA1" little-endian: public key
RSA2 = 0x32415352  # "RSA2" little-endian: private key

TOKEN_LEN = 8

_BLOB_HEADER = struct.Struct("<BBHI")
_RSA_PUB_KEY = struct.Struct("<III")
_SN_HEADER = struct.Struct("<III")

OFFSET_TO_KEY_DATA = _BLOB_HEADER.size + _RSA_PUB_KEY.size  # 20


class InvalidKeyBlobError(ValueError):
    """Raised when a key blob cannot be parsed as an RSA key pair."""


# ── Parse ────────────────────────────────────────────────────────────


def public_key_from_private_key_blob(blob: bytes) -> bytes:
    """Extract the strong-name public key from a PRIVATEKEYBLOB.

    Args:
        blob: Raw contents of a ``.snk`` key pair file.

    Returns:
        The strong-name public key blob (as embedded in assembly metadata).

    Raises:
        InvalidKeyBlobError: The blob is truncated, is not an RSA private
            key blob, or does not describe a usable RSA public key.
    """
    if len(blob) < OFFSET_TO_KEY_DATA:
        raise InvalidKeyBlobError(
            f"Key blob too short: {len(blob)} bytes (need at least {OFFSET_TO_KEY_DATA})"
        )

    b_type, version, _reserved, alg_id = _BLOB_HEADER.unpack_from(blob, 0)
    magic, bit_len, pub_exp = _RSA_PUB_KEY.unpack_from(blob, _BLOB_HEADER.size)

    modulus_len = bit_len // 8
    if len(blob) - OFFSET_TO_KEY_DATA < modulus_len:
        raise InvalidKeyBlobError(
            f"Key blob truncated: {bit_len}-bit modulus needs {modulus_len} bytes"
        )

    if b_type != PRIVATE_KEY_BLOB_ID or magic != RSA2:
        raise InvalidKeyBlobError(
            f"Not an RSA private key blob (type=0x{b_type:02x}, magic=0x{magic:08x})"
        )

    modulus = blob[OFFSET_TO_KEY_DATA:OFFSET_TO_KEY_DATA + modulus_len]
    _check_rsa_public_numbers(modulus, pub_exp)

    logger.debug("Extracted %d-bit RSA public key from key pair blob", bit_len)
    return _sn_public_key_blob(version, alg_id, bit_len, pub_exp, modulus)


def _check_rsa_public_numbers(modulus: bytes, pub_exp: int) -> None:
    """Reject modulus/exponent pairs that are not a valid RSA public key."""
    n = int.from_bytes(modulus, "little")
    try:
        rsa.RSAPublicNumbers(pub_exp, n).public_key()
    except ValueError as e:
        raise InvalidKeyBlobError(f"Invalid RSA public key in blob: {e}") from e


def _sn_public_key_blob(
    version: int, alg_id: int, bit_len: int, pub_exp: int, modulus: bytes
) -> bytes:
    """Assemble a strong-name public key blob from RSA public parts.

    The signature algorithm is always CALG_RSA_SIGN; the inner PUBLICKEYBLOB
    keeps the key pair's own ``aiKeyAlg`` (e.g. CALG_RSA_KEYX).
    """
    out = bytearray()
    out.extend(_SN_HEADER.pack(CALG_RSA_SIGN, CALG_SHA1, OFFSET_TO_KEY_DATA + len(modulus)))
    out.extend(_BLOB_HEADER.pack(PUBLIC_KEY_BLOB_ID, version, 0, alg_id))
    out.extend(_RSA_PUB_KEY.pack(RSA1, bit_len, pub_exp))
    out.extend(modulus)
    return bytes(out)


# ── Token ────────────────────────────────────────────────────────────


def strong_name_token(public_key: bytes) -> bytes:
    """Derive the 8-byte public key token: SHA-1, last 8 bytes, reversed."""
    digest = hashlib.sha1(public_key).digest()
    return digest[-TOKEN_LEN:][::-1]


# ── Serialize ────────────────────────────────────────────────────────


def private_key_blob_from_rsa(private_key: rsa.RSAPrivateKey) -> bytes:
    """Serialize an RSA private key as a PRIVATEKEYBLOB (``.snk`` format)."""
    numbers = private_key.private_numbers()
    public = numbers.public_numbers
    bit_len = private_key.key_size
    full = bit_len // 8
    half = bit_len // 16

    if public.e >= 1 << 32:
        raise InvalidKeyBlobError(f"Public exponent does not fit in 32 bits: {public.e}")

    out = bytearray()
    out.extend(_BLOB_HEADER.pack(PRIVATE_KEY_BLOB_ID, BLOB_VERSION, 0, CALG_RSA_SIGN))
    out.extend(_RSA_PUB_KEY.pack(RSA2, bit_len, public.e))
    out.extend(public.n.to_bytes(full, "little"))
    out.extend(numbers.p.to_bytes(half, "little"))
    out.extend(numbers.q.to_bytes(half, "little"))
    out.extend(numbers.dmp1.to_bytes(half, "little"))
    out.extend(numbers.dmq1.to_bytes(half, "little"))
    out.extend(numbers.iqmp.to_bytes(half, "little"))
    out.extend(numbers.d.to_bytes(full, "little"))
    return bytes(out)


def generate_key_pair_blob(bits: int = 1024) -> bytes:
    """Create a new RSA key pair and return it as a PRIVATEKEYBLOB."""
    if bits < 1024 or bits % 16:
        raise ValueError(f"Key size must be a multiple of 16 and at least 1024: {bits}")
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    logger.info("Generated %d-bit RSA key pair", bits)
    return private_key_blob_from_rsa(private_key)

from __future__ import annotations

import base64
import binascii
import hashlib
import os
from typing import Literal, Optional

from cryptography.exceptions import InvalidSignature, InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

RsaDigest = Literal["sha1", "sha256"]

GCM_NONCE_LENGTH = 12
GCM_TAG_LENGTH = 16

_RSA_DIGESTS: dict[str, type[hashes.HashAlgorithm]] = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
}


def md5_hex(data: str) -> str:
    """Return the lowercase hex MD5 digest of the UTF-8 bytes of ``data``."""
    return hashlib.md5(data.encode("utf-8")).hexdigest()


def sign_md5(data: str, secret: str) -> str:
    """Keyed hash used for SS1 and outbound request signing: md5(data || secret)."""
    return md5_hex(data + secret)


def load_rsa_public_key_from_pem(pem_str: str) -> rsa.RSAPublicKey:
    """Load an RSA public key from a PEM string. Raises ValueError if it is not RSA."""
    key = serialization.load_pem_public_key(pem_str.encode("utf-8"))
    if not isinstance(key, rsa.RSAPublicKey):
        raise ValueError("Public key is not an RSA key")
    return key


def verify_rsa_signature(
    data: str,
    signature_b64: str,
    public_key_pem: str,
    algorithm: RsaDigest,
) -> bool:
    """Verify a base64 PKCS#1 v1.5 RSA signature over the UTF-8 bytes of ``data``.

    Returns False for a bad signature as well as for a malformed signature,
    key or algorithm name.
    """
    digest = _RSA_DIGESTS.get(algorithm)
    if digest is None:
        return False
    try:
        signature = base64.b64decode(signature_b64)
        public_key = load_rsa_public_key_from_pem(public_key_pem)
        public_key.verify(signature, data.encode("utf-8"), padding.PKCS1v15(), digest())
    except (InvalidSignature, UnsupportedAlgorithm, ValueError, TypeError, binascii.Error):
        return False
    return True


def _derive_aes_key(password: str) -> bytes:
    return hashlib.sha256(password.encode("utf-8")).digest()


def decrypt_aes_gcm(blob: bytes, password: str) -> Optional[str]:
    """Decrypt ``nonce(12) || ciphertext || tag(16)`` with AES-256-GCM.

    The key is SHA-256 of the password. Returns the UTF-8 plaintext, or None
    when the blob is too short, fails authentication, or is not valid UTF-8.
    """
    if len(blob) < GCM_NONCE_LENGTH + GCM_TAG_LENGTH:
        return None
    nonce = blob[:GCM_NONCE_LENGTH]
    # AESGCM expects the tag appended to the ciphertext, which is the wire layout.
    ciphertext_and_tag = blob[GCM_NONCE_LENGTH:]
    try:
        plaintext = AESGCM(_derive_aes_key(password)).decrypt(
            nonce, ciphertext_and_tag, None
        )
        return plaintext.decode("utf-8")
    except (InvalidTag, ValueError):
        return None


def encrypt_aes_gcm(
    plaintext: str, password: str, nonce: Optional[bytes] = None
) -> bytes:
    """Produce a blob accepted by :func:`decrypt_aes_gcm`."""
    if nonce is None:
        nonce = os.urandom(GCM_NONCE_LENGTH)
    if len(nonce) != GCM_NONCE_LENGTH:
        raise ValueError(f"Nonce must be {GCM_NONCE_LENGTH} bytes")
    ciphertext_and_tag = AESGCM(_derive_aes_key(password)).encrypt(
        nonce, plaintext.encode("utf-8"), None
    )
    return nonce + ciphertext_and_tag

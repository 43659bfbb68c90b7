from __future__ import annotations
from typing import Tuple
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives import serialization
import hashlib
"""
keypass_core.crypto
-------------------
Ed25519 signing keys protected at rest by a passphrase:

- ed25519_generate / ed25519_sign / ed25519_verify
- encrypt_private_key / decrypt_private_key: PKCS8 PEM with the best
  available passphrase-based encryption
- compute_key_id: stable id derived from the public key
"""

# --------- Ed25519 (sign/verify) ----------
def ed25519_generate() -> Tuple[bytes, bytes]:
    sk = ed25519.Ed25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()

def ed25519_sign(priv_raw: bytes, data: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    return sk.sign(data)

def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(sig, data)
        return True
    except Exception:
        return False

# --------- Passphrase protection ----------
def encrypt_private_key(priv_raw: bytes, passphrase: str) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    if passphrase:
        enc = serialization.BestAvailableEncryption(passphrase.encode("utf-8"))
    else:
        enc = serialization.NoEncryption()
    return sk.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=enc,
    )

def decrypt_private_key(pem: bytes, passphrase: str) -> bytes:
    """
    Returns the raw Ed25519 private key.

    Raises ValueError when the passphrase is wrong (or missing for an
    encrypted key), TypeError when one is given for an unencrypted key.
    """
    password = passphrase.encode("utf-8") if passphrase else None
    sk = serialization.load_pem_private_key(pem, password=password)
    if not isinstance(sk, ed25519.Ed25519PrivateKey):
        raise ValueError("not an Ed25519 private key")
    return sk.private_bytes_raw()

def compute_key_id(pub_raw: bytes) -> str:
    """
    Key id for an Ed25519 public key: full sha256 hex of the raw bytes.

    Prompts only ever show the first 7 characters.
    """
    return hashlib.sha256(pub_raw).hexdigest()

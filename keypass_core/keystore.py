# keypass_core/keystore.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from keypass_core.crypto import (
    compute_key_id,
    decrypt_private_key,
    ed25519_generate,
    ed25519_sign,
    ed25519_verify,
    encrypt_private_key,
)
from keypass_core.errors import PassphraseMismatchError, TooManyAttemptsError
from keypass_core.logger import get_logger
from keypass_core.prompt import KEY_NAME_SEPARATOR, short_id
from keypass_core.retriever.retriever_base import BaseRetriever
from keypass_core.roles import validate_role
from keypass_core.utils import b64d, b64e, now_ts

log = get_logger("keypass.keystore")


@dataclass
class KeyRecord:
    """
    A signing key as held by the key store.

    The private key is only kept as passphrase-encrypted PEM; it is
    decrypted for the duration of a single sign() call.
    """
    key_id: str
    role: str
    alias: str
    pubkey_b64: str
    encrypted_pem: bytes
    created_at: str = field(default_factory=now_ts)

    @property
    def key_name(self) -> str:
        if not self.alias:
            return self.key_id
        return f"{self.alias}{KEY_NAME_SEPARATOR}{self.key_id}"


class InMemoryKeyStore:
    """
    Holds passphrase-protected Ed25519 keys for one repository alias and owns
    the retry loop around the passphrase retriever: the attempt counter is
    incremented here after every rejected passphrase, and the loop stops as
    soon as the retriever signals give-up.
    """

    def __init__(self, retriever: BaseRetriever, alias: str = ""):
        self.retriever = retriever
        self.alias = alias
        self.keys: Dict[str, KeyRecord] = {}

    def create_key(self, role: str) -> KeyRecord:
        validate_role(role)
        priv, pub = ed25519_generate()
        key_id = compute_key_id(pub)
        key_name = f"{self.alias}{KEY_NAME_SEPARATOR}{key_id}" if self.alias else key_id

        attempt = 0
        while True:
            try:
                passphrase, give_up = self.retriever(key_name, role, True, attempt)
            except PassphraseMismatchError:
                attempt += 1
                log.info(f"[CREATE] passphrase mismatch for role={role} key={short_id(key_id)}, attempt={attempt}")
                continue
            if give_up:
                raise TooManyAttemptsError(f"Gave up creating {role} key {short_id(key_id)}")
            break

        rec = KeyRecord(
            key_id=key_id,
            role=role,
            alias=self.alias,
            pubkey_b64=b64e(pub),
            encrypted_pem=encrypt_private_key(priv, passphrase),
        )
        self.keys[key_id] = rec
        log.info(f"[CREATE] role={role} key={short_id(key_id)}")
        return rec

    def get_key(self, key_id: str) -> Optional[KeyRecord]:
        return self.keys.get(key_id)

    def list_keys(self) -> List[KeyRecord]:
        return list(self.keys.values())

    def sign(self, key_id: str, data: bytes) -> bytes:
        rec = self.keys.get(key_id)
        if rec is None:
            raise KeyError(f"Unknown key id: {key_id}")

        attempt = 0
        while True:
            passphrase, give_up = self.retriever(rec.key_name, rec.role, False, attempt)
            if give_up:
                raise TooManyAttemptsError(f"Gave up unlocking {rec.role} key {short_id(key_id)}")
            try:
                priv = decrypt_private_key(rec.encrypted_pem, passphrase)
            except (ValueError, TypeError):
                attempt += 1
                log.info(f"[SIGN] wrong passphrase for role={rec.role} key={short_id(key_id)}, attempt={attempt}")
                continue
            return ed25519_sign(priv, data)

    def verify(self, key_id: str, sig: bytes, data: bytes) -> bool:
        rec = self.keys.get(key_id)
        if rec is None:
            return False
        return ed25519_verify(b64d(rec.pubkey_b64), sig, data)

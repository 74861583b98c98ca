import os
import base64
from typing import Iterable, Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from config.settings import FormConfig


class FieldCipher:
    VERSION = b"v1"
    NONCE_SIZE = 12

    def __init__(self, key: bytes):
        if len(key) != 32:
            raise RuntimeError(
                f"ENCRYPTION_KEY must decode to 32 bytes for AES-256. Got {len(key)} bytes."
            )
        self._aesgcm = AESGCM(key)

    @classmethod
    def from_b64(cls, key_b64: str) -> "FieldCipher":
        return cls(base64.b64decode(key_b64))

    @classmethod
    def from_env(cls, config: Optional[FormConfig] = None) -> "FieldCipher":
        config = config or FormConfig.from_env()
        if not config.encryption_key:
            raise RuntimeError("ENCRYPTION_KEY missing in .env")
        return cls.from_b64(config.encryption_key)

    @staticmethod
    def generate_key() -> str:
        return base64.b64encode(AESGCM.generate_key(bit_length=256)).decode("utf-8")

    @staticmethod
    def should_encrypt(key: str, encrypt_keys: Iterable[str]) -> bool:
        return key in encrypt_keys

    def encrypt_bytes(self, plaintext: bytes, aad: bytes) -> str:
        nonce = os.urandom(self.NONCE_SIZE)
        ct = self._aesgcm.encrypt(nonce, plaintext, aad)
        payload = self.VERSION + nonce + ct
        return base64.b64encode(payload).decode("utf-8")

    def decrypt_bytes(self, payload_b64: str, aad: bytes) -> bytes:
        raw = base64.b64decode(payload_b64.encode("utf-8"))
        if raw[:2] != self.VERSION:
            raise ValueError("Not encrypted with expected format/version header")
        nonce = raw[2:2 + self.NONCE_SIZE]
        ct = raw[2 + self.NONCE_SIZE:]
        return self._aesgcm.decrypt(nonce, ct, aad)

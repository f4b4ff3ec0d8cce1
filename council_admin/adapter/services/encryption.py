"""
AES-256-GCM encryption for secrets kept in the settings store.

Stored format is ``base64(iv):base64(tag):base64(ciphertext)``.
"""

import base64
import binascii
import os
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from council_admin.app.services.encryption import Encryptor

IV_LENGTH = 16
TAG_LENGTH = 16
KEY_LENGTH = 32


class AesGcmEncryptor(Encryptor):
    def __init__(self, encryption_key: Optional[str], fallback_key: Optional[str] = None):
        key = encryption_key or fallback_key
        if not key or len(key) < KEY_LENGTH:
            raise ValueError("ENCRYPTION_KEY or JWT_SECRET must be at least 32 characters")
        self._aesgcm = AESGCM(key.encode("utf-8")[:KEY_LENGTH])

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_LENGTH)
        sealed = self._aesgcm.encrypt(iv, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return ":".join(
            base64.b64encode(part).decode("ascii") for part in (iv, tag, ciphertext)
        )

    def decrypt(self, ciphertext: str) -> str:
        parts = ciphertext.split(":")
        if len(parts) != 3 or not all(parts[:2]):
            raise ValueError("Invalid encrypted format")

        try:
            iv, tag, body = (base64.b64decode(part, validate=True) for part in parts)
        except binascii.Error:
            raise ValueError("Invalid encrypted format")

        if len(tag) != TAG_LENGTH:
            raise ValueError("Invalid encrypted format")

        try:
            plaintext = self._aesgcm.decrypt(iv, body + tag, None)
        except InvalidTag:
            raise ValueError("Encrypted value failed authentication")
        return plaintext.decode("utf-8")

"""
Cryptographic operations for secure messaging.

This module provides:
- OpenPGP key generation, encryption and decryption (pgpy backend)
- Key pair persistence
- Secure passphrase handling
"""

from secure_messaging.crypto.key_manager import KeyPairManager
from secure_messaging.crypto.pgpy_backend import (
    PgpyBackend,
    PgpyMessage,
    PgpyPrivateKey,
    PgpyPublicKey,
)
from secure_messaging.crypto.protocol import EncryptedMessage, PGPBackend, PrivateKey, PublicKey
from secure_messaging.crypto.secure_bytes import SecureBytes

__all__ = [
    "SecureBytes",
    "KeyPairManager",
    "PGPBackend",
    "PublicKey",
    "PrivateKey",
    "EncryptedMessage",
    "PgpyBackend",
    "PgpyPublicKey",
    "PgpyPrivateKey",
    "PgpyMessage",
]

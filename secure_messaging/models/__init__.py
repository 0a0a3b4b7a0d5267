"""
Domain models for secure messaging.

These are immutable (frozen) dataclasses.
"""

from secure_messaging.models.crypto import DecryptedMessage, KeyPair

__all__ = [
    "KeyPair",
    "DecryptedMessage",
]

"""
PGP backend protocol definition.

This defines the interface for PGP operations, allowing different implementations
(pgpy, a GnuPG bridge, etc.) to be swapped without changing the pipelines.
"""

from typing import Protocol, runtime_checkable

from secure_messaging.crypto.secure_bytes import SecureBytes
from secure_messaging.models.crypto import DecryptedMessage, KeyPair


@runtime_checkable
class PublicKey(Protocol):
    """Protocol for a loaded public key."""

    @property
    def key_id(self) -> str:
        """Get the key ID."""
        ...

    @property
    def fingerprint(self) -> str:
        """Get the key fingerprint."""
        ...


@runtime_checkable
class PrivateKey(PublicKey, Protocol):
    """Protocol for a loaded private key."""

    @property
    def is_protected(self) -> bool:
        """Whether the secret material is passphrase-protected."""
        ...


@runtime_checkable
class EncryptedMessage(Protocol):
    """Protocol for a parsed, still encrypted message."""

    @property
    def recipient_key_ids(self) -> frozenset[str]:
        """Key IDs the session key was encrypted to."""
        ...


@runtime_checkable
class PGPBackend(Protocol):
    """
    Abstract interface for PGP operations.

    Every method raises only secure_messaging exceptions; library errors are
    chained, never leaked.
    """

    def generate_key(self, user_id: str, passphrase: SecureBytes, *, key_size: int) -> KeyPair:
        """
        Generate a passphrase-protected key pair bound to user_id.

        Raises:
            KeyGenerationError: If building, certifying or protecting the key fails.
        """
        ...

    def load_public_key(self, armored_key: str) -> PublicKey:
        """
        Load a public key from ASCII-armored format.

        Raises:
            FormatError: If the key cannot be parsed.
        """
        ...

    def load_private_key(self, armored_key: str) -> PrivateKey:
        """
        Load a private key from ASCII-armored format.

        Raises:
            FormatError: If the key cannot be parsed or is not a private key.
        """
        ...

    def user_ids(self, key: PublicKey) -> list[str]:
        """Identity strings bound to the key, in stored order."""
        ...

    def encrypt_message(self, plaintext: bytes, public_key: PublicKey) -> str:
        """
        Compress and encrypt plaintext to public_key.

        Returns:
            ASCII-armored message.

        Raises:
            EncryptionError: If encryption fails.
        """
        ...

    def parse_message(self, armored_message: str) -> EncryptedMessage:
        """
        Parse an ASCII-armored encrypted message.

        Raises:
            FormatError: If the armor or packets are malformed, or the message
                is not encrypted.
        """
        ...

    def decrypt_message(
        self,
        message: EncryptedMessage,
        private_key: PrivateKey,
        passphrase: SecureBytes,
    ) -> DecryptedMessage:
        """
        Unlock private_key and unwrap message.

        Raises:
            DecryptionError: Wrong passphrase, key mismatch or corrupted payload.
        """
        ...

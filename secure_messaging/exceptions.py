"""
Secure messaging exception hierarchy.

All exceptions inherit from SecureMessagingError for easy catching. Each class
carries an ErrorKind tag; str(error) is the single string shown to callers.
"""

from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    """Classified failure causes."""

    IO = "io"
    FORMAT = "format"
    CRYPTO = "crypto"
    PASSPHRASE_REQUIRED = "passphrase_required"
    EMPTY_CONTENT = "empty_content"


class SecureMessagingError(Exception):
    """Base exception for all secure_messaging errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.CRYPTO

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class KeyStorageError(SecureMessagingError):
    """Reading or writing key material on disk failed."""

    kind = ErrorKind.IO

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message, path=path)
        self.path = path


class FormatError(SecureMessagingError):
    """Key or message could not be parsed."""

    kind = ErrorKind.FORMAT


class CryptoError(SecureMessagingError):
    """Cryptographic operation failed."""

    kind = ErrorKind.CRYPTO


class KeyGenerationError(CryptoError):
    """Failed to build, certify or protect a new key."""


class EncryptionError(CryptoError):
    """Failed to encrypt a message."""


class DecryptionError(CryptoError):
    """
    Failed to unwrap or decompress a message.

    Wrong passphrase, key mismatch and corrupted payload all end up here.
    """


class PassphraseRequiredError(SecureMessagingError):
    """No passphrase was supplied and the session cache is empty."""

    kind = ErrorKind.PASSPHRASE_REQUIRED

    def __init__(self, message: str = "Passphrase required to unlock the private key") -> None:
        super().__init__(message)


class EmptyContentError(SecureMessagingError):
    """Message decrypted but carried no literal data."""

    kind = ErrorKind.EMPTY_CONTENT

    def __init__(self, message: str = "Message content is empty") -> None:
        super().__init__(message)

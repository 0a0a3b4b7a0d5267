"""
Secure messaging core.

Key pair management, OpenPGP message encryption/decryption and a session
passphrase cache for a desktop secure-messaging feature.

Example:
    ```python
    from pathlib import Path

    from secure_messaging import SecureMessagingClient, SecureMessagingConfig

    client = SecureMessagingClient(SecureMessagingConfig(app_data_dir=Path("~/.app").expanduser()))
    client.ensure_keypair("alice@example.com", "passphrase")

    armored = client.encrypt_message("hello", bob_public_key)
    text = client.decrypt_message(incoming, "passphrase")
    ```
"""

from secure_messaging.client import SecureMessagingClient
from secure_messaging.config import SecureMessagingConfig
from secure_messaging.exceptions import (
    CryptoError,
    DecryptionError,
    EmptyContentError,
    EncryptionError,
    ErrorKind,
    FormatError,
    KeyGenerationError,
    KeyStorageError,
    PassphraseRequiredError,
    SecureMessagingError,
)
from secure_messaging.models.crypto import KeyPair

__version__ = "0.1.0"

__all__ = [
    # Main client
    "SecureMessagingClient",
    "SecureMessagingConfig",
    # Models
    "KeyPair",
    # Exceptions
    "SecureMessagingError",
    "ErrorKind",
    "KeyStorageError",
    "FormatError",
    "CryptoError",
    "KeyGenerationError",
    "EncryptionError",
    "DecryptionError",
    "PassphraseRequiredError",
    "EmptyContentError",
]

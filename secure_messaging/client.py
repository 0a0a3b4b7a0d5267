"""
Secure messaging client facade.

This is the entry point for the host application. It wires the key pair
manager, the passphrase cache and the message pipelines together and exposes
the operations the front-end invokes.
"""

from pathlib import Path

import structlog

from secure_messaging.config import SecureMessagingConfig
from secure_messaging.crypto.key_manager import KeyPairManager
from secure_messaging.crypto.pgpy_backend import PgpyBackend
from secure_messaging.crypto.protocol import PGPBackend
from secure_messaging.crypto.secure_bytes import SecureBytes
from secure_messaging.services.identity_service import IdentityService
from secure_messaging.services.message_service import MessageService
from secure_messaging.services.passphrase_cache import PassphraseCache

logger = structlog.get_logger(__name__)


class SecureMessagingClient:
    """
    Client for the secure messaging core.

    Every operation is synchronous and safe to call from several threads. Errors
    are raised as SecureMessagingError subclasses; str(error) is the message to
    show the user. PassphraseRequiredError is the one case that calls for a
    prompt rather than an error dialog.

    Example:
        ```python
        client = SecureMessagingClient(SecureMessagingConfig(app_data_dir=data_dir))
        client.generate_keypair("alice@example.com", "correct horse")

        armored = client.encrypt_message("hello")
        try:
            text = client.decrypt_message(armored)
        except PassphraseRequiredError:
            text = client.decrypt_message(armored, ask_passphrase())
        ```

    Args:
        config: Client configuration.
        pgp_backend: PGP backend. Defaults to PgpyBackend.
        passphrase_cache: Session passphrase cache. One is created from the
            configured TTL if not provided.
    """

    def __init__(
        self,
        config: SecureMessagingConfig,
        *,
        pgp_backend: PGPBackend | None = None,
        passphrase_cache: PassphraseCache | None = None,
    ) -> None:
        self._config = config
        self._pgp = pgp_backend if pgp_backend is not None else PgpyBackend()
        self._passphrase_cache = (
            passphrase_cache
            if passphrase_cache is not None
            else PassphraseCache(ttl=config.passphrase_ttl)
        )
        self._key_manager = KeyPairManager(
            config.app_data_dir,
            self._pgp,
            private_key_filename=config.private_key_filename,
            public_key_filename=config.public_key_filename,
            key_size=config.key_size,
        )
        self._message_service = MessageService(
            self._key_manager,
            self._pgp,
            self._passphrase_cache,
            invalid_text_placeholder=config.invalid_text_placeholder,
        )
        self._identity_service = IdentityService(self._pgp)
        logger.debug("Client initialized", app_data_dir=str(config.app_data_dir))

    @property
    def app_data_dir(self) -> Path:
        """Directory holding the key files."""
        return self._config.app_data_dir

    def generate_keypair(self, user_id: str, passphrase: str) -> None:
        """
        Generate the user's key pair and write it to the data directory.

        Existing key files are overwritten. On any error the pair must be
        considered unusable and generated again.

        Raises:
            KeyGenerationError: If the key cannot be generated.
            KeyStorageError: If a key file cannot be written.
        """
        with SecureBytes.from_string(passphrase) as secret:
            self._key_manager.generate(user_id, secret)

    def ensure_keypair(self, user_id: str, passphrase: str) -> bool:
        """
        Generate the key pair only if no private key is stored yet.

        Returns:
            True if a key pair was generated.
        """
        with SecureBytes.from_string(passphrase) as secret:
            return self._key_manager.ensure(user_id, secret)

    def has_keypair(self) -> bool:
        """Whether both key files exist."""
        return self._key_manager.has_keypair()

    def read_public_key(self) -> str:
        """
        Armored text of the user's stored public key.

        Raises:
            KeyStorageError: If the key file cannot be read.
        """
        return self._key_manager.read_public_key()

    def encrypt_message(self, plaintext: str, public_key: str | None = None) -> str:
        """
        Encrypt a message.

        Args:
            plaintext: Message text.
            public_key: Recipient's armored public key. Defaults to the user's own.

        Returns:
            ASCII-armored encrypted message.
        """
        return self._message_service.encrypt(plaintext, public_key)

    def decrypt_message(self, ciphertext: str, passphrase: str | None = None) -> str:
        """
        Decrypt a message addressed to the user.

        Args:
            ciphertext: ASCII-armored encrypted message.
            passphrase: Private key passphrase; cached when given. Uses the
                cached passphrase when omitted.

        Raises:
            PassphraseRequiredError: No passphrase given and none cached.
        """
        return self._message_service.decrypt(ciphertext, passphrase)

    def identities_of(self, public_key: str) -> list[str]:
        """All identities bound to an armored public key."""
        return self._identity_service.identities_of(public_key)

    def get_email_ids_from_public_key(self, public_key: str) -> str:
        """First identity bound to an armored public key."""
        return self._identity_service.first_identity(public_key)

    def cache_master_password(self, passphrase: str) -> None:
        """Cache the passphrase for the configured TTL."""
        self._passphrase_cache.set(passphrase)

    def is_cache_valid(self) -> bool:
        """Whether a non-expired passphrase is cached."""
        return self._passphrase_cache.is_valid()

    def clear_master_password_cache(self) -> None:
        """Forget the cached passphrase."""
        self._passphrase_cache.clear()

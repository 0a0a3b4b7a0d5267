"""
Message encryption and decryption pipelines.

Encryption: resolve recipient key → compress → hybrid-encrypt → armor.
Decryption: resolve passphrase → load private key → parse armor → unwrap
(and decompress) → extract literal data → decode UTF-8.

Every step is a single attempt; the first failure is raised to the caller.
"""

import structlog

from secure_messaging.config import INVALID_TEXT_PLACEHOLDER
from secure_messaging.crypto.key_manager import KeyPairManager
from secure_messaging.crypto.protocol import PGPBackend, PublicKey
from secure_messaging.crypto.secure_bytes import SecureBytes
from secure_messaging.exceptions import (
    DecryptionError,
    EmptyContentError,
    PassphraseRequiredError,
)
from secure_messaging.services.passphrase_cache import PassphraseCache

logger = structlog.get_logger(__name__)


class MessageService:
    """
    Encrypts outgoing and decrypts incoming text messages.

    The passphrase cache is consulted when decrypt() gets no passphrase, and
    refreshed whenever one is supplied explicitly.
    """

    def __init__(
        self,
        key_manager: KeyPairManager,
        pgp_backend: PGPBackend,
        passphrase_cache: PassphraseCache,
        *,
        invalid_text_placeholder: str = INVALID_TEXT_PLACEHOLDER,
    ) -> None:
        """
        Args:
            key_manager: Source of the stored key pair.
            pgp_backend: PGP backend for crypto operations.
            passphrase_cache: Session passphrase cache.
            invalid_text_placeholder: Returned when decrypted bytes are not UTF-8.
        """
        self._key_manager = key_manager
        self._pgp = pgp_backend
        self._passphrase_cache = passphrase_cache
        self._invalid_text_placeholder = invalid_text_placeholder

    def encrypt(self, plaintext: str, recipient_public_key: str | None = None) -> str:
        """
        Encrypt plaintext to a recipient.

        Args:
            plaintext: Message text.
            recipient_public_key: Armored public key. Defaults to the stored one.

        Returns:
            ASCII-armored encrypted message.

        Raises:
            KeyStorageError: If the stored public key cannot be read.
            FormatError: If the public key is malformed.
            EncryptionError: If encryption fails.
        """
        public_key = self._resolve_public_key(recipient_public_key)
        armored = self._pgp.encrypt_message(plaintext.encode("utf-8"), public_key)
        logger.debug("Message encrypted", recipient=public_key.key_id)
        return armored

    def decrypt(self, ciphertext: str, passphrase: str | None = None) -> str:
        """
        Decrypt a message with the stored private key.

        Args:
            ciphertext: ASCII-armored encrypted message.
            passphrase: Private key passphrase. If given it is also cached;
                if omitted the cached one is used.

        Returns:
            The message text, or the invalid-text placeholder when the content
            is not valid UTF-8.

        Raises:
            PassphraseRequiredError: No passphrase supplied and none cached.
            KeyStorageError: If the private key cannot be read.
            FormatError: If the key or message is malformed.
            DecryptionError: Wrong passphrase, key mismatch or corrupted payload.
            EmptyContentError: The message carried no literal data.
        """
        with self._resolve_passphrase(passphrase) as secret:
            private_key = self._key_manager.load_private_key()
            message = self._pgp.parse_message(ciphertext)
            logger.debug("Message parsed", recipients=sorted(message.recipient_key_ids))

            try:
                decrypted = self._pgp.decrypt_message(message, private_key, secret)
            except DecryptionError:
                logger.warning("Failed to decrypt message", key_id=private_key.key_id)
                raise

        if decrypted.content is None:
            raise EmptyContentError()

        logger.debug(
            "Message decrypted",
            compressed=decrypted.is_compressed,
            filename=decrypted.filename,
        )
        return self._decode_text(decrypted.content)

    def _resolve_public_key(self, recipient_public_key: str | None) -> PublicKey:
        if recipient_public_key is None:
            return self._key_manager.load_public_key()
        return self._pgp.load_public_key(recipient_public_key)

    def _resolve_passphrase(self, passphrase: str | None) -> SecureBytes:
        if passphrase is not None:
            secret = SecureBytes.from_string(passphrase)
            self._passphrase_cache.set(secret)
            return secret

        cached = self._passphrase_cache.get()
        if cached is None:
            raise PassphraseRequiredError()
        return cached

    def _decode_text(self, content: bytes) -> str:
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Decrypted content is not valid UTF-8", size=len(content))
            return self._invalid_text_placeholder

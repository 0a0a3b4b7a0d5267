"""
Key pair lifecycle for the messaging identity.

Generates the passphrase-protected key pair once per identity, writes both
armored halves to the application data directory and loads them back for
the encryption and decryption pipelines.
"""

import os
from pathlib import Path

import structlog

from secure_messaging.crypto.pgpy_backend import PgpyBackend
from secure_messaging.crypto.protocol import PGPBackend, PrivateKey, PublicKey
from secure_messaging.crypto.secure_bytes import SecureBytes
from secure_messaging.exceptions import FormatError, KeyStorageError
from secure_messaging.models.crypto import KeyPair

logger = structlog.get_logger(__name__)

_PRIVATE_KEY_MODE = 0o600


class KeyPairManager:
    """
    Manages the on-disk key pair.

    Writes are not atomic: the private key is written first, then the public
    key. Any error from generate() means the pair is unusable and generation
    must be retried from scratch. Existing key files are overwritten.
    """

    def __init__(
        self,
        key_dir: Path,
        pgp_backend: PGPBackend | None = None,
        *,
        private_key_filename: str = "private_key.asc",
        public_key_filename: str = "public_key.asc",
        key_size: int = 2048,
    ) -> None:
        """
        Args:
            key_dir: Directory holding the key files.
            pgp_backend: PGP backend for crypto operations. Defaults to PgpyBackend.
            private_key_filename: File name of the armored private key.
            public_key_filename: File name of the armored public key.
            key_size: RSA modulus size in bits for generated keys.
        """
        self._pgp = pgp_backend if pgp_backend is not None else PgpyBackend()
        self._key_dir = Path(key_dir)
        self._private_key_path = self._key_dir / private_key_filename
        self._public_key_path = self._key_dir / public_key_filename
        self._key_size = key_size

    @property
    def private_key_path(self) -> Path:
        return self._private_key_path

    @property
    def public_key_path(self) -> Path:
        return self._public_key_path

    def generate(self, user_id: str, passphrase: SecureBytes) -> KeyPair:
        """
        Generate a key pair bound to user_id and persist it.

        Args:
            user_id: Identity string, e.g. an email address.
            passphrase: Passphrase protecting the private key.

        Returns:
            The generated KeyPair.

        Raises:
            KeyGenerationError: If the key cannot be built, certified or protected.
            KeyStorageError: If either key file cannot be written.
        """
        if self.has_keypair():
            logger.info("Overwriting existing key pair", key_dir=str(self._key_dir))

        logger.info("Generating key pair", key_size=self._key_size)
        key_pair = self._pgp.generate_key(user_id, passphrase, key_size=self._key_size)

        self._ensure_key_dir()
        self._write(self._private_key_path, key_pair.private_key, mode=_PRIVATE_KEY_MODE)
        self._write(self._public_key_path, key_pair.public_key)

        logger.info("Key pair generated", fingerprint=key_pair.fingerprint)
        return key_pair

    def ensure(self, user_id: str, passphrase: SecureBytes) -> bool:
        """
        Generate a key pair unless a private key file already exists.

        Returns:
            True if a new key pair was generated.
        """
        if self._private_key_path.exists():
            logger.debug("Key pair already present", key_dir=str(self._key_dir))
            return False
        self.generate(user_id, passphrase)
        return True

    def has_keypair(self) -> bool:
        """Both key files exist."""
        return self._private_key_path.is_file() and self._public_key_path.is_file()

    def read_public_key(self) -> str:
        """
        Armored text of the stored public key.

        Raises:
            KeyStorageError: If the file cannot be read.
            FormatError: If the file is not ASCII text.
        """
        return self._read(self._public_key_path)

    def load_public_key(self) -> PublicKey:
        """
        Load and parse the stored public key.

        Raises:
            KeyStorageError: If the file cannot be read.
            FormatError: If the key is malformed.
        """
        return self._pgp.load_public_key(self.read_public_key())

    def load_private_key(self) -> PrivateKey:
        """
        Load and parse the stored private key.

        Raises:
            KeyStorageError: If the file cannot be read.
            FormatError: If the key is malformed or not passphrase-protected.
        """
        key = self._pgp.load_private_key(self._read(self._private_key_path))
        if not key.is_protected:
            msg = "Stored private key is not passphrase-protected"
            raise FormatError(msg, path=str(self._private_key_path))
        return key

    def _ensure_key_dir(self) -> None:
        try:
            self._key_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to create key directory: {e.strerror or e}"
            raise KeyStorageError(msg, path=str(self._key_dir)) from e

    @staticmethod
    def _write(path: Path, content: str, *, mode: int | None = None) -> None:
        try:
            path.write_text(content, encoding="ascii")
            if mode is not None:
                os.chmod(path, mode)
        except OSError as e:
            msg = f"Failed to write key file: {e.strerror or e}"
            raise KeyStorageError(msg, path=str(path)) from e

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="ascii")
        except OSError as e:
            msg = f"Failed to read key file: {e.strerror or e}"
            raise KeyStorageError(msg, path=str(path)) from e
        except UnicodeDecodeError as e:
            msg = "Key file is not ASCII-armored"
            raise FormatError(msg, path=str(path)) from e

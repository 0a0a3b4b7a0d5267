"""
Secure messaging configuration.
"""

from dataclasses import dataclass
from pathlib import Path

INVALID_TEXT_PLACEHOLDER = "<invalid UTF-8 content>"
DEFAULT_PASSPHRASE_TTL = 60.0


@dataclass(frozen=True, kw_only=True)
class SecureMessagingConfig:
    """
    Attributes:
        app_data_dir: Application private data directory holding the key files.
        private_key_filename: File name of the armored private key.
        public_key_filename: File name of the armored public key.
        key_size: RSA modulus size in bits for generated keys.
        passphrase_ttl: Seconds a cached passphrase stays valid.
        invalid_text_placeholder: Returned instead of text when a decrypted
            payload is not valid UTF-8.
    """

    app_data_dir: Path
    private_key_filename: str = "private_key.asc"
    public_key_filename: str = "public_key.asc"
    key_size: int = 2048
    passphrase_ttl: float = DEFAULT_PASSPHRASE_TTL
    invalid_text_placeholder: str = INVALID_TEXT_PLACEHOLDER

    def __post_init__(self) -> None:
        if not isinstance(self.app_data_dir, Path):
            object.__setattr__(self, "app_data_dir", Path(self.app_data_dir))
        if self.key_size < 1024:
            msg = "key_size must be at least 1024 bits"
            raise ValueError(msg)
        if self.passphrase_ttl <= 0:
            msg = "passphrase_ttl must be positive"
            raise ValueError(msg)
        if not self.private_key_filename or not self.public_key_filename:
            msg = "key file names must not be empty"
            raise ValueError(msg)
        if self.private_key_filename == self.public_key_filename:
            msg = "private and public key file names must differ"
            raise ValueError(msg)

    @property
    def private_key_path(self) -> Path:
        return self.app_data_dir / self.private_key_filename

    @property
    def public_key_path(self) -> Path:
        return self.app_data_dir / self.public_key_filename

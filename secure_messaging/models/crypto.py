"""
Cryptographic domain models.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class KeyPair:
    """
    A freshly generated OpenPGP identity.

    Attributes:
        user_id: Identity string bound to the key.
        fingerprint: Primary key fingerprint.
        public_key: ASCII-armored public key.
        private_key: ASCII-armored private key, passphrase-protected.
    """

    user_id: str
    fingerprint: str
    public_key: str
    private_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if "PUBLIC KEY BLOCK" not in self.public_key:
            msg = "public_key must be an armored public key block"
            raise ValueError(msg)
        if "PRIVATE KEY BLOCK" not in self.private_key:
            msg = "private_key must be an armored private key block"
            raise ValueError(msg)


@dataclass(frozen=True, kw_only=True)
class DecryptedMessage:
    """
    Result of unwrapping an encrypted envelope.

    Attributes:
        content: Literal data bytes, or None if the envelope carried no literal block.
        is_compressed: Whether the payload was compressed.
        filename: File name stored in the literal packet, if any.
    """

    content: bytes | None
    is_compressed: bool = False
    filename: str = ""

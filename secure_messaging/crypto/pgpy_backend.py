"""
PGP backend implementation using pgpy library.

Keys are RSA encrypt-or-sign primaries with a single self-certified user id.
Messages are literal data, ZLIB-compressed, encrypted with AES-256 under a
session key wrapped to the recipient (PKESK + SEIPD).
"""

import warnings
from dataclasses import dataclass

import pgpy
from pgpy.constants import (
    CompressionAlgorithm,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)

from secure_messaging.crypto.secure_bytes import SecureBytes
from secure_messaging.exceptions import (
    DecryptionError,
    EncryptionError,
    FormatError,
    KeyGenerationError,
)
from secure_messaging.models.crypto import DecryptedMessage, KeyPair

_KEY_USAGE = {KeyFlags.Sign, KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage}
_PREFERRED_HASHES = [HashAlgorithm.SHA256, HashAlgorithm.SHA512]
_PREFERRED_CIPHERS = [SymmetricKeyAlgorithm.AES256, SymmetricKeyAlgorithm.AES128]
_PREFERRED_COMPRESSION = [
    CompressionAlgorithm.ZLIB,
    CompressionAlgorithm.ZIP,
    CompressionAlgorithm.Uncompressed,
]
_MESSAGE_CIPHER = SymmetricKeyAlgorithm.AES256
_MESSAGE_COMPRESSION = CompressionAlgorithm.ZLIB


@dataclass
class PgpyPublicKey:
    """Wrapper around pgpy.PGPKey to implement PublicKey protocol."""

    _key: pgpy.PGPKey

    @property
    def key_id(self) -> str:
        return str(self._key.fingerprint.keyid)

    @property
    def fingerprint(self) -> str:
        return str(self._key.fingerprint)

    @property
    def pgpy_key(self) -> pgpy.PGPKey:
        return self._key


@dataclass
class PgpyPrivateKey(PgpyPublicKey):
    """Wrapper around pgpy.PGPKey to implement PrivateKey protocol."""

    @property
    def is_protected(self) -> bool:
        return bool(self._key.is_protected)


@dataclass
class PgpyMessage:
    """Wrapper around an encrypted pgpy.PGPMessage."""

    _message: pgpy.PGPMessage

    @property
    def recipient_key_ids(self) -> frozenset[str]:
        return frozenset(str(key_id) for key_id in self._message.encrypters)

    @property
    def pgpy_message(self) -> pgpy.PGPMessage:
        return self._message


class PgpyBackend:
    """
    PGP backend implementation using pgpy.

    Example:
        backend = PgpyBackend()
        key_pair = backend.generate_key("alice@example.com", passphrase, key_size=2048)
        public_key = backend.load_public_key(key_pair.public_key)
        armored = backend.encrypt_message(b"hello", public_key)
    """

    def generate_key(self, user_id: str, passphrase: SecureBytes, *, key_size: int) -> KeyPair:
        """
        Generate a passphrase-protected RSA key pair bound to user_id.

        The user id is self-certified with the key flags and algorithm
        preferences used for messaging, then the secret material is protected
        with AES-256 under an iterated S2K. Protection is verified by
        unlocking once before the armored halves are returned.

        Args:
            user_id: Identity string, e.g. an email address.
            passphrase: Passphrase protecting the secret material.
            key_size: RSA modulus size in bits.

        Returns:
            KeyPair with both armored halves.

        Raises:
            KeyGenerationError: If any step fails.
        """
        if not user_id:
            msg = "User id must not be empty"
            raise KeyGenerationError(msg)
        if not passphrase:
            msg = "Passphrase must not be empty"
            raise KeyGenerationError(msg)

        try:
            key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, key_size)
            uid = pgpy.PGPUID.new(user_id)
            key.add_uid(
                uid,
                usage=_KEY_USAGE,
                hashes=_PREFERRED_HASHES,
                ciphers=_PREFERRED_CIPHERS,
                compression=_PREFERRED_COMPRESSION,
            )
            with passphrase.borrow() as secret:
                key.protect(secret, SymmetricKeyAlgorithm.AES256, HashAlgorithm.SHA256)
                with key.unlock(secret):
                    pass
            return KeyPair(
                user_id=user_id,
                fingerprint=str(key.fingerprint),
                public_key=str(key.pubkey),
                private_key=str(key),
            )
        except Exception as e:
            msg = f"Failed to generate key pair: {e}"
            raise KeyGenerationError(msg) from e

    @staticmethod
    def load_public_key(armored_key: str) -> PgpyPublicKey:
        """
        Load a public key from ASCII-armored format.

        An armored private key is accepted; its public half is used.

        Raises:
            FormatError: If the key cannot be parsed.
        """
        key = PgpyBackend._parse_key(armored_key, "public")
        if not key.is_public:
            key = key.pubkey
        return PgpyPublicKey(_key=key)

    @staticmethod
    def load_private_key(armored_key: str) -> PgpyPrivateKey:
        """
        Load a private key from ASCII-armored format.

        Raises:
            FormatError: If the key cannot be parsed or is a public key.
        """
        key = PgpyBackend._parse_key(armored_key, "private")
        if key.is_public:
            msg = "Expected a private key, got a public key"
            raise FormatError(msg)
        return PgpyPrivateKey(_key=key)

    def user_ids(self, key: PgpyPublicKey) -> list[str]:
        """Identity strings bound to the key, in stored order."""
        return [self._format_user_id(uid) for uid in key.pgpy_key.userids]

    @staticmethod
    def encrypt_message(plaintext: bytes, public_key: PgpyPublicKey) -> str:
        """
        Compress and encrypt plaintext to public_key.

        Raises:
            EncryptionError: If encryption fails.
        """
        try:
            message = pgpy.PGPMessage.new(
                plaintext, format="b", compression=_MESSAGE_COMPRESSION
            )
            encrypted = public_key.pgpy_key.encrypt(message, cipher=_MESSAGE_CIPHER)
            return str(encrypted)
        except Exception as e:
            msg = f"Failed to encrypt message: {e}"
            raise EncryptionError(msg) from e

    @staticmethod
    def parse_message(armored_message: str) -> PgpyMessage:
        """
        Parse an ASCII-armored encrypted message.

        pgpy only warns on a bad armor checksum and tolerates rewritten packet
        lengths, so both are checked here: the checksum warning is turned into
        an error and the parsed packets must serialize back to the exact
        dearmored bytes.

        Raises:
            FormatError: If the message is malformed, altered or not encrypted.
        """
        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                body = bytes(pgpy.PGPMessage.ascii_unarmor(armored_message)["body"])
                message = pgpy.PGPMessage.from_blob(armored_message)
        except Exception as e:
            msg = f"Failed to parse encrypted message: {e}"
            raise FormatError(msg) from e

        if any("crc24" in str(warning.message) for warning in caught):
            msg = "Armor checksum mismatch"
            raise FormatError(msg)
        if not message.is_encrypted:
            msg = "Message is not encrypted"
            raise FormatError(msg)

        try:
            reserialized = bytes(message)
        except Exception as e:
            msg = f"Failed to parse encrypted message: {e}"
            raise FormatError(msg) from e
        if reserialized != body:
            msg = "Message packets do not match their encoding"
            raise FormatError(msg)
        return PgpyMessage(_message=message)

    def decrypt_message(
        self,
        message: PgpyMessage,
        private_key: PgpyPrivateKey,
        passphrase: SecureBytes,
    ) -> DecryptedMessage:
        """
        Unlock private_key and unwrap message.

        Decompression happens while the decrypted packets are parsed, so a
        corrupt compressed block surfaces here as well.

        Raises:
            DecryptionError: Wrong passphrase, key mismatch or corrupted payload.
                The cause is deliberately not reported.
        """
        key = private_key.pgpy_key
        try:
            with passphrase.borrow() as secret, key.unlock(secret):
                decrypted = key.decrypt(message.pgpy_message)
        except Exception as e:
            msg = "Failed to decrypt message (check passphrase and key)"
            raise DecryptionError(msg) from e

        return DecryptedMessage(
            content=self._literal_content(decrypted),
            is_compressed=bool(decrypted.is_compressed),
            filename=decrypted.filename or "",
        )

    @staticmethod
    def _parse_key(armored_key: str, kind: str) -> pgpy.PGPKey:
        try:
            key, _ = pgpy.PGPKey.from_blob(armored_key)
            # from_blob returns an empty key for input without key packets
            fingerprint = key.fingerprint
        except Exception as e:
            msg = f"Failed to load {kind} key: {e}"
            raise FormatError(msg) from e
        if not fingerprint:
            msg = f"Failed to load {kind} key: no key material found"
            raise FormatError(msg)
        return key

    @staticmethod
    def _literal_content(decrypted: pgpy.PGPMessage) -> bytes | None:
        try:
            if decrypted.type != "literal":
                return None
        except NotImplementedError:
            # pgpy has no type for a message without any data packet
            return None
        try:
            content = decrypted.message
        except UnicodeDecodeError as e:
            # text-mode literal that is not valid UTF-8
            return bytes(e.object)
        if content is None:
            return None
        return PgpyBackend._normalize_decrypted_content(content)

    @staticmethod
    def _normalize_decrypted_content(content: bytes | str | bytearray) -> bytes:
        if isinstance(content, (bytes, bytearray)):
            return bytes(content)
        return content.encode("utf-8")

    @staticmethod
    def _format_user_id(uid: pgpy.PGPUID) -> str:
        parts = [uid.name or ""]
        if uid.comment:
            parts.append(f"({uid.comment})")
        if uid.email:
            parts.append(f"<{uid.email}>")
        return " ".join(part for part in parts if part)

import pytest

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


def test_secure_messaging_error_str_without_context() -> None:
    error = SecureMessagingError("Something failed")

    assert str(error) == "Something failed"


def test_secure_messaging_error_str_with_context() -> None:
    error = SecureMessagingError("Failed", key_id="ABCD", attempt=1)

    assert "Failed" in str(error)
    assert "key_id='ABCD'" in str(error)
    assert "attempt=1" in str(error)


def test_key_storage_error_carries_path() -> None:
    error = KeyStorageError("Failed to read key file", path="/data/private_key.asc")

    assert error.path == "/data/private_key.asc"
    assert "private_key.asc" in str(error)


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (KeyStorageError("io"), ErrorKind.IO),
        (FormatError("format"), ErrorKind.FORMAT),
        (CryptoError("crypto"), ErrorKind.CRYPTO),
        (KeyGenerationError("keygen"), ErrorKind.CRYPTO),
        (EncryptionError("encrypt"), ErrorKind.CRYPTO),
        (DecryptionError("decrypt"), ErrorKind.CRYPTO),
        (PassphraseRequiredError(), ErrorKind.PASSPHRASE_REQUIRED),
        (EmptyContentError(), ErrorKind.EMPTY_CONTENT),
    ],
)
def test_error_kind_tags(error: SecureMessagingError, kind: ErrorKind) -> None:
    assert error.kind == kind
    assert isinstance(error, SecureMessagingError)


def test_passphrase_required_is_not_a_crypto_error() -> None:
    assert not isinstance(PassphraseRequiredError(), CryptoError)


def test_crypto_subclasses_share_crypto_error_base() -> None:
    for cls in (KeyGenerationError, EncryptionError, DecryptionError):
        assert issubclass(cls, CryptoError)


def test_default_messages_render_as_single_line() -> None:
    assert str(PassphraseRequiredError()) == "Passphrase required to unlock the private key"
    assert str(EmptyContentError()) == "Message content is empty"
    assert "\n" not in str(PassphraseRequiredError())

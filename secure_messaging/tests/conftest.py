from collections.abc import Callable
from pathlib import Path

import pytest

from secure_messaging.crypto.pgpy_backend import PgpyBackend
from secure_messaging.crypto.secure_bytes import SecureBytes
from secure_messaging.models.crypto import KeyPair

PASSPHRASE = "correct horse battery staple"
USER_ID = "alice@example.com"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def passphrase() -> str:
    return PASSPHRASE


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="session")
def backend() -> PgpyBackend:
    return PgpyBackend()


@pytest.fixture(scope="session")
def key_pair(backend: PgpyBackend) -> KeyPair:
    return backend.generate_key(USER_ID, SecureBytes.from_string(PASSPHRASE), key_size=2048)


@pytest.fixture(scope="session")
def other_key_pair(backend: PgpyBackend) -> KeyPair:
    return backend.generate_key(
        "bob@example.com", SecureBytes.from_string("another passphrase"), key_size=2048
    )


@pytest.fixture
def write_key_pair(tmp_path: Path) -> Callable[[KeyPair], Path]:
    def _write(pair: KeyPair) -> Path:
        key_dir = tmp_path / "app_data"
        key_dir.mkdir(exist_ok=True)
        (key_dir / "private_key.asc").write_text(pair.private_key, encoding="ascii")
        (key_dir / "public_key.asc").write_text(pair.public_key, encoding="ascii")
        return key_dir

    return _write


@pytest.fixture
def key_dir(write_key_pair: Callable[[KeyPair], Path], key_pair: KeyPair) -> Path:
    return write_key_pair(key_pair)

"""
Session cache for the master passphrase.

Holds one passphrase for a short time so repeated decrypts in a session do
not prompt the user again. One instance per running application, shared by
every caller.
"""

import time
from collections.abc import Callable

import structlog

from secure_messaging.config import DEFAULT_PASSPHRASE_TTL
from secure_messaging.core.cache import ExpiringSlot
from secure_messaging.crypto.secure_bytes import SecureBytes

logger = structlog.get_logger(__name__)


class PassphraseCache:
    """
    Time-bounded store of a single passphrase.

    The cache owns its buffer: set() takes a private copy and get() hands out a
    fresh copy the caller is expected to clear. Replaced, cleared and expired
    buffers are zeroed.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_PASSPHRASE_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            ttl: Seconds a cached passphrase stays valid.
            clock: Monotonic time source.
        """
        self._slot: ExpiringSlot[SecureBytes] = ExpiringSlot(
            ttl, clock=clock, on_evict=SecureBytes.clear
        )

    @property
    def ttl(self) -> float:
        return self._slot.ttl

    def set(self, passphrase: SecureBytes | str) -> None:
        """Cache passphrase, replacing any previous one."""
        if isinstance(passphrase, str):
            buffer = SecureBytes.from_string(passphrase)
        else:
            buffer = passphrase.copy()
        self._slot.set(buffer)
        logger.debug("Passphrase cached", ttl=self.ttl)

    def get(self) -> SecureBytes | None:
        """
        Get a copy of the cached passphrase.

        Returns:
            A new SecureBytes, or None if nothing is cached or the entry expired.
            An expired entry is removed.
        """
        return self._slot.get(copy=SecureBytes.copy)

    def is_valid(self) -> bool:
        """Whether a passphrase is cached and not expired."""
        passphrase = self.get()
        if passphrase is None:
            return False
        passphrase.clear()
        return True

    def clear(self) -> None:
        """Forget the cached passphrase."""
        self._slot.clear()
        logger.debug("Passphrase cache cleared")

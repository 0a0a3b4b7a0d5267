"""Zeroable in-memory container for passphrases."""

import ctypes
import hmac
import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Self


def _secure_zero(data: bytearray) -> None:
    if len(data) == 0:
        return
    try:
        address = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
        ctypes.memset(address, 0, len(data))
    except (TypeError, ValueError) as exc:
        warnings.warn(f"ctypes.memset failed, zeroing byte by byte: {exc}", RuntimeWarning)
        for i in range(len(data)):
            data[i] = 0


class SecureBytes:
    """
    Passphrase buffer that is zeroed on clear(), on context exit and on collection.

    The buffer is a private copy; callers keep ownership of what they passed in.
    Use borrow() to hand the passphrase to a library call for its duration only.
    """

    __slots__ = ("_data", "_cleared")

    def __init__(self, data: bytes | bytearray) -> None:
        self._data = bytearray(data)
        self._cleared = False

    @classmethod
    def from_string(cls, s: str, encoding: str = "utf-8") -> Self:
        """Create from string. Zeros the intermediate bytearray."""
        encoded = bytearray(s, encoding)
        try:
            return cls(encoded)
        finally:
            _secure_zero(encoded)

    def __del__(self) -> None:
        self.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    def clear(self) -> None:
        """Zero memory. Idempotent."""
        if self._cleared:
            return
        _secure_zero(self._data)
        self._cleared = True

    def copy(self) -> "SecureBytes":
        """Independent buffer with the same content."""
        self._check_cleared()
        return SecureBytes(self._data)

    def decode(self, encoding: str = "utf-8") -> str:
        """Warning: returned string is not securely managed."""
        self._check_cleared()
        return self._data.decode(encoding)

    @contextmanager
    def borrow(self, encoding: str = "utf-8") -> Iterator[str]:
        """Yield the passphrase as text for the duration of one operation."""
        yield self.decode(encoding)

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return not self._cleared and len(self._data) > 0

    def __bytes__(self) -> bytes:
        """Warning: creates an insecure copy."""
        self._check_cleared()
        return bytes(self._data)

    def __repr__(self) -> str:
        if self._cleared:
            return "SecureBytes(<cleared>)"
        return f"SecureBytes(<{len(self._data)} bytes>)"

    def __eq__(self, other: object) -> bool:
        """Constant-time comparison."""
        if isinstance(other, SecureBytes):
            if self._cleared or other._cleared:
                return False
            return hmac.compare_digest(self._data, other._data)
        if isinstance(other, (bytes, bytearray)):
            if self._cleared:
                return False
            return hmac.compare_digest(self._data, other)
        return NotImplemented

    def __hash__(self) -> int:
        raise TypeError("SecureBytes is not hashable")

    def _check_cleared(self) -> None:
        if self._cleared:
            raise RuntimeError("SecureBytes has been cleared")

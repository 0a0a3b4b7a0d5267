from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from secure_messaging.core.cache import CacheEntry, ExpiringSlot


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_get_returns_value_within_ttl() -> None:
    clock = _Clock()
    slot = ExpiringSlot[str](10.0, clock=clock)

    slot.set("value")
    clock.now = 9.99

    assert slot.get() == "value"


def test_get_returns_none_when_empty() -> None:
    assert ExpiringSlot[str](10.0).get() is None


def test_expired_value_is_cleared_on_read() -> None:
    clock = _Clock()
    on_evict = Mock()
    slot = ExpiringSlot[str](10.0, clock=clock, on_evict=on_evict)

    slot.set("value")
    clock.now = 10.0

    assert slot.get() is None
    on_evict.assert_called_once_with("value")

    clock.now = 0.0  # even if time went backwards the entry is gone
    assert slot.get() is None


def test_set_replaces_previous_value() -> None:
    on_evict = Mock()
    slot = ExpiringSlot[str](10.0, on_evict=on_evict)

    slot.set("first")
    slot.set("second")

    assert slot.get() == "second"
    on_evict.assert_called_once_with("first")


def test_set_refreshes_timestamp() -> None:
    clock = _Clock()
    slot = ExpiringSlot[str](10.0, clock=clock)

    slot.set("first")
    clock.now = 8.0
    slot.set("second")
    clock.now = 15.0

    assert slot.get() == "second"


def test_clear_empties_slot() -> None:
    on_evict = Mock()
    slot = ExpiringSlot[str](10.0, on_evict=on_evict)

    slot.set("value")
    slot.clear()
    slot.clear()

    assert slot.get() is None
    on_evict.assert_called_once_with("value")


def test_get_applies_copy() -> None:
    slot = ExpiringSlot[list[int]](10.0)
    stored = [1, 2, 3]
    slot.set(stored)

    result = slot.get(copy=list)

    assert result == stored
    assert result is not stored


def test_bool_reflects_validity() -> None:
    clock = _Clock()
    slot = ExpiringSlot[str](5.0, clock=clock)
    assert not slot

    slot.set("value")
    assert slot

    clock.now = 6.0
    assert not slot


def test_non_positive_ttl_is_rejected() -> None:
    with pytest.raises(ValueError, match="ttl must be positive"):
        ExpiringSlot[str](0)


def test_cache_entry_is_frozen() -> None:
    entry = CacheEntry(value="v", captured_at=1.0)

    with pytest.raises(AttributeError):
        entry.value = "other"  # type: ignore[misc]


def test_concurrent_set_and_get_keep_a_single_entry() -> None:
    slot = ExpiringSlot[str](60.0)
    values = [f"value-{i}" for i in range(50)]

    def _worker(value: str) -> str | None:
        slot.set(value)
        return slot.get()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_worker, values))

    assert all(result in values for result in results)
    assert slot.get() in values

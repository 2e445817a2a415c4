"""
Tests for slot parsing and slot binders.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from structured_mapper.core.exceptions import (
    InvalidSlotShapeException,
    SlotPathException,
)
from structured_mapper.mappers.slots import (
    TARGET,
    LazySetter,
    Slot,
    field_binder,
    object_binder,
)
from structured_mapper.schemas.customer_schema import ContactDto, CustomerDto


@pytest.mark.parametrize(
    "descriptor, key",
    [
        ("first", "target.first"),
        ("contact.first", "target.contact.first"),
        ("target.contact.first", "target.contact.first"),
        (" contact.first ", "target.contact.first"),
        ("target", "target"),
    ],
)
def test_parse_canonical_key(descriptor: str, key: str) -> None:
    """Rooted and unrooted descriptors share one canonical key."""
    assert Slot.parse(descriptor).key == key


@pytest.mark.parametrize(
    "descriptor",
    ["", "target.", "contact..first", "items[0]", "first()", "a + b", "class", 42],
)
def test_parse_rejects_computed_expressions(descriptor: object) -> None:
    with pytest.raises(InvalidSlotShapeException):
        Slot.parse(descriptor)  # type: ignore[arg-type]


def test_parse_passes_slots_through() -> None:
    slot = Slot(("contact",))
    assert Slot.parse(slot) is slot


def test_overlaps() -> None:
    root = Slot.parse(TARGET)
    contact = Slot.parse("contact")
    first = Slot.parse("contact.first")
    last = Slot.parse("contact.last")

    assert root.overlaps(first)
    assert contact.overlaps(first)
    assert first.overlaps(contact)
    assert not first.overlaps(last)


def test_field_binder_rejects_whole_object() -> None:
    with pytest.raises(InvalidSlotShapeException) as exc_info:
        field_binder(TARGET)
    assert "for_object()" in exc_info.value.message
    assert exc_info.value.error_code == "INVALID_SLOT_SHAPE"


def test_object_binder_rejects_field_path() -> None:
    with pytest.raises(InvalidSlotShapeException) as exc_info:
        object_binder("contact")
    assert "for_field()" in exc_info.value.message


def test_field_binder_writes_nested_field() -> None:
    binder = field_binder("contact.first")
    dto = CustomerDto()

    result = binder.write(dto, "Mike")

    assert result is dto
    assert dto.contact.first == "Mike"


def test_field_binder_missing_intermediate_raises() -> None:
    binder = field_binder("home_address.street")

    with pytest.raises(SlotPathException) as exc_info:
        binder.write(ContactDto(), "3 Some Lane")
    assert exc_info.value.details["missing"] == "target.home_address"


def test_object_binder_returns_value() -> None:
    replacement = ContactDto(first="Mike")
    assert object_binder().write(ContactDto(), replacement) is replacement


def test_setter_is_compiled_once() -> None:
    binder = field_binder("first")
    assert binder.setter is binder.setter


def test_lazy_setter_concurrent_first_use() -> None:
    """Racing threads all receive the one setter the factory built."""
    calls = 0
    lock = threading.Lock()

    def factory():
        nonlocal calls
        with lock:
            calls += 1
        time.sleep(0.05)
        return lambda target, value: target

    cell = LazySetter(factory)
    barrier = threading.Barrier(8)

    def first_use():
        barrier.wait()
        return cell.get()

    with ThreadPoolExecutor(max_workers=8) as pool:
        setters = list(pool.map(lambda _: first_use(), range(8)))

    assert calls == 1
    assert cell.compiled
    assert all(s is setters[0] for s in setters)

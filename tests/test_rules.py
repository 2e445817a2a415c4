"""
Tests for Rule normalization.
"""

import functools

import pytest

from structured_mapper.core.exceptions import AsynchronousRuleDeclaredException
from structured_mapper.mappers.rules import Rule, RuleKind, is_async_callable
from structured_mapper.schemas.customer_schema import ContactDto


async def _lookup(source: object, suffix: str = "") -> str:
    return f"Mike{suffix}"


class _AsyncLookup:
    async def __call__(self, source: object) -> str:
        return "Mike"


class _NameHolder:
    """Built from a source; only its instances are awaitable callables."""

    def __init__(self, source: object) -> None:
        self.source = source

    async def __call__(self) -> str:
        return "Mike"


def test_is_async_callable() -> None:
    assert is_async_callable(_lookup)
    assert is_async_callable(functools.partial(_lookup, suffix="y"))
    assert is_async_callable(_AsyncLookup())
    assert not is_async_callable(lambda s: s)
    assert not is_async_callable(str.upper)
    assert not is_async_callable(_AsyncLookup)
    assert not is_async_callable(_NameHolder)
    assert not is_async_callable(functools.partial(_NameHolder))


def test_class_compute_is_sync() -> None:
    rule = Rule.for_field("first", _NameHolder)
    assert not rule.is_async

    target = rule.apply_sync("source", ContactDto())
    assert isinstance(target.first, _NameHolder)
    assert target.first.source == "source"


def test_kinds() -> None:
    assert Rule.for_field("first", "Mike").kind is RuleKind.FIELD
    assert Rule.for_object("target", ContactDto()).kind is RuleKind.WHOLE_OBJECT


def test_literal_is_sync() -> None:
    rule = Rule.for_field("first", "Mike")
    assert not rule.is_async
    assert rule.compute(object()) == "Mike"


def test_callable_is_never_a_literal() -> None:
    rule = Rule.for_field("first", str)
    assert rule.compute(5) == "5"


def test_awaitable_literal_is_async() -> None:
    coro = _lookup(None)
    rule = Rule.for_field("first", coro)
    assert rule.is_async
    coro.close()


@pytest.mark.asyncio
async def test_apply_sync_function() -> None:
    rule = Rule.for_field("first", lambda s: s.upper())
    target = ContactDto()

    assert await rule.apply("mike", target) is target
    assert target.first == "MIKE"


@pytest.mark.asyncio
async def test_apply_awaits_coroutine_returned_by_sync_function() -> None:
    rule = Rule.for_field("first", lambda s: _lookup(s, suffix="y"))
    target = ContactDto()

    await rule.apply(None, target)

    assert not rule.is_async
    assert target.first == "Mikey"


@pytest.mark.asyncio
async def test_apply_propagates_failure_unchanged() -> None:
    error = LookupError("country service down")

    async def failing(source: object) -> str:
        raise error

    rule = Rule.for_field("first", failing)

    with pytest.raises(LookupError) as exc_info:
        await rule.apply(None, ContactDto())
    assert exc_info.value is error


def test_apply_sync_rejects_awaitable_result() -> None:
    rule = Rule.for_field("first", lambda s: _lookup(s))

    with pytest.raises(AsynchronousRuleDeclaredException):
        rule.apply_sync(None, ContactDto())


def test_rule_is_immutable() -> None:
    rule = Rule.for_field("first", "Mike")
    with pytest.raises(AttributeError):
        rule.is_async = True  # type: ignore[misc]

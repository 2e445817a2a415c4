"""
Mapping rules.

A rule pairs one slot binder with the value that fills it. Whatever form the
value was declared in, a rule exposes it as ``apply(source, target)``
returning an awaitable of the resulting target:

  ==========================  ===========================================
  Declared as                 Evaluated as
  ==========================  ===========================================
  ``lambda src: ...``         called with the source
  ``async def f(src)``        called with the source, then awaited
  plain value                 returned as-is, source ignored
  coroutine / future          awaited once, the result reused afterwards
  ==========================  ===========================================
"""

import asyncio
import enum
import functools
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from structured_mapper.core.exceptions import AsynchronousRuleDeclaredException
from structured_mapper.mappers.slots import SlotBinder, field_binder, object_binder


class RuleKind(str, enum.Enum):
    FIELD = "field"
    WHOLE_OBJECT = "whole_object"


def is_async_callable(func: Any) -> bool:
    """True for coroutine functions, partials of them and async ``__call__``."""
    while isinstance(func, functools.partial):
        func = func.func
    if inspect.iscoroutinefunction(func):
        return True
    if inspect.isclass(func):
        # Calling a class constructs an instance, whatever its __call__ is
        return False
    call = getattr(func, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


class _SharedAwaitable:
    """Awaits a one-shot awaitable once and hands out its result from then on."""

    __slots__ = ("_awaitable", "_future")

    def __init__(self, awaitable: Awaitable[Any]) -> None:
        self._awaitable = awaitable
        self._future: asyncio.Future[Any] | None = None

    def __call__(self, source: Any) -> Awaitable[Any]:
        if self._future is None:
            self._future = asyncio.ensure_future(self._awaitable)
        return self._future


@dataclass(frozen=True)
class Rule:
    """
    One declared mapping from the source to a single target slot.

    Use :meth:`for_field` / :meth:`for_object` rather than the constructor:
    they validate the slot shape and normalize ``compute``.
    """

    kind: RuleKind
    binder: SlotBinder
    compute: Callable[[Any], Any] = field(repr=False)
    is_async: bool = False

    @classmethod
    def for_field(cls, slot: Any, compute: Any) -> "Rule":
        return cls._create(RuleKind.FIELD, field_binder(slot), compute)

    @classmethod
    def for_object(cls, slot: Any, compute: Any) -> "Rule":
        return cls._create(RuleKind.WHOLE_OBJECT, object_binder(slot), compute)

    @classmethod
    def _create(cls, kind: RuleKind, binder: SlotBinder, compute: Any) -> "Rule":
        if inspect.isawaitable(compute):
            return cls(kind, binder, _SharedAwaitable(compute), is_async=True)
        if callable(compute):
            return cls(kind, binder, compute, is_async=is_async_callable(compute))
        return cls(kind, binder, _constant(compute))

    @property
    def slot_key(self) -> str:
        return self.binder.slot.key

    async def apply(self, source: Any, target: Any) -> Any:
        """Compute the value for ``source`` and write it into ``target``."""
        value = self.compute(source)
        if inspect.isawaitable(value):
            value = await value
        return self.binder.write(target, value)

    def apply_sync(self, source: Any, target: Any) -> Any:
        """
        Synchronous counterpart of :meth:`apply`.

        Raises:
            AsynchronousRuleDeclaredException: If ``compute`` hands back an
                awaitable; the synchronous path never waits on one.
        """
        value = self.compute(source)
        if inspect.isawaitable(value):
            discard_awaitable(value)
            raise AsynchronousRuleDeclaredException(slots=[self.slot_key])
        return self.binder.write(target, value)


def discard_awaitable(value: Any) -> None:
    """Close a coroutine that will never be awaited, so it does not warn."""
    close = getattr(value, "close", None)
    if close is not None:
        close()


def _constant(value: Any) -> Callable[[Any], Any]:
    def constant(source: Any) -> Any:
        return value

    return constant

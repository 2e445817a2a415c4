"""
Target slots and the binders that write into them.

A slot names where a computed value lands in the target:

  - a field path such as ``"contact.first"`` (also accepted rooted, as
    ``"target.contact.first"``), or
  - the target itself, written as the identity token ``"target"``.

Binders turn a slot into a setter ``(target, value) -> target``. The setter
is built on first use and cached, so a transform invoked many times pays for
path resolution once per rule.
"""

import keyword
import operator
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from structured_mapper.core.exceptions import (
    InvalidSlotShapeException,
    SlotPathException,
)

TARGET = "target"

Setter = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class Slot:
    """Normalized slot address. An empty ``path`` is the whole target."""

    path: tuple[str, ...] = ()

    @classmethod
    def parse(cls, descriptor: "str | Slot") -> "Slot":
        """
        Normalize a descriptor into a Slot.

        Raises:
            InvalidSlotShapeException: If any segment is not a plain
                attribute name (indexing, calls, operators, blanks).
        """
        if isinstance(descriptor, Slot):
            return descriptor
        if not isinstance(descriptor, str):
            raise InvalidSlotShapeException(
                slot=repr(descriptor),
                expected="a dotted attribute path or 'target'",
            )

        segments = descriptor.strip().split(".")
        if segments[0] == TARGET:
            segments = segments[1:]

        for segment in segments:
            if not segment.isidentifier() or keyword.iskeyword(segment):
                raise InvalidSlotShapeException(
                    slot=descriptor,
                    expected="a dotted attribute path or 'target'",
                    hint="Computed expressions cannot be written to.",
                )
        return cls(tuple(segments))

    @property
    def key(self) -> str:
        """Canonical, comparable form, e.g. ``target.contact.first``."""
        return ".".join((TARGET, *self.path))

    @property
    def is_whole_object(self) -> bool:
        return not self.path

    def overlaps(self, other: "Slot") -> bool:
        """True when one slot's path is a prefix of the other's."""
        shortest = min(len(self.path), len(other.path))
        return self.path[:shortest] == other.path[:shortest]

    def __str__(self) -> str:
        return self.key


class LazySetter:
    """
    Compute-once cell for a compiled setter.

    Safe under concurrent first use: the factory runs exactly once and every
    caller receives the same object.
    """

    __slots__ = ("_factory", "_lock", "_setter")

    def __init__(self, factory: Callable[[], Setter]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._setter: Setter | None = None

    @property
    def compiled(self) -> bool:
        return self._setter is not None

    def get(self) -> Setter:
        setter = self._setter
        if setter is None:
            with self._lock:
                setter = self._setter
                if setter is None:
                    setter = self._setter = self._factory()
        return setter


class SlotBinder:
    """A validated slot plus its lazily compiled setter."""

    __slots__ = ("slot", "_setter")

    def __init__(self, slot: Slot, factory: Callable[[Slot], Setter]) -> None:
        self.slot = slot
        self._setter = LazySetter(lambda: factory(slot))

    @property
    def setter(self) -> Setter:
        return self._setter.get()

    @property
    def compiled(self) -> bool:
        return self._setter.compiled

    def write(self, target: Any, value: Any) -> Any:
        """Write ``value`` and return the resulting target."""
        return self._setter.get()(target, value)

    def __repr__(self) -> str:
        return f"SlotBinder({self.slot.key!r})"


# ─── Shape checks ─────────────────────────────────────────────────────


def field_slot(descriptor: "str | Slot") -> Slot:
    """
    Parse a descriptor that must name a single field path.

    Raises:
        InvalidSlotShapeException: If the descriptor names the whole target
            or is not a plain attribute path.
    """
    slot = Slot.parse(descriptor)
    if slot.is_whole_object:
        raise InvalidSlotShapeException(
            slot=str(descriptor),
            expected="a field path such as 'target.contact.first'",
            hint="To replace the whole target, use for_object() instead.",
        )
    return slot


def object_slot(descriptor: "str | Slot" = TARGET) -> Slot:
    """
    Parse a descriptor that must name the whole target.

    Raises:
        InvalidSlotShapeException: If the descriptor is a field path.
    """
    slot = Slot.parse(descriptor)
    if not slot.is_whole_object:
        raise InvalidSlotShapeException(
            slot=str(descriptor),
            expected=f"the whole target '{TARGET}'",
            hint="To write a single field, use for_field() instead.",
        )
    return slot


# ─── Binder factories ─────────────────────────────────────────────────


def field_binder(descriptor: "str | Slot") -> SlotBinder:
    """Binder for a single field path."""
    return SlotBinder(field_slot(descriptor), _compile_field_setter)


def object_binder(descriptor: "str | Slot" = TARGET) -> SlotBinder:
    """Binder that replaces the whole target."""
    return SlotBinder(object_slot(descriptor), _compile_object_setter)


# ─── Setter compilation ───────────────────────────────────────────────


def _compile_field_setter(slot: Slot) -> Setter:
    *parents, name = slot.path

    if not parents:
        def set_field(target: Any, value: Any) -> Any:
            setattr(target, name, value)
            return target

        return set_field

    steps = [
        (operator.attrgetter(parent), ".".join((TARGET, *parents[:depth])))
        for depth, parent in enumerate(parents, start=1)
    ]

    def set_nested_field(target: Any, value: Any) -> Any:
        parent = target
        for get_step, step_key in steps:
            parent = get_step(parent)
            if parent is None:
                raise SlotPathException(slot=slot.key, missing=step_key)
        setattr(parent, name, value)
        return target

    return set_nested_field


def _compile_object_setter(slot: Slot) -> Setter:
    def replace_target(target: Any, value: Any) -> Any:
        return value

    return replace_target

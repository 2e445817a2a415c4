"""
Fluent builder that compiles mapping rules into a single transform.

Example::

    contact_mapper = (
        MapperBuilder(Customer, ContactDto)
        .for_field("first", lambda c: c.first_name)
        .for_field("phone_number", lambda c: to_international(c.phone_number, 1))
        .for_field("home_address", lambda c: addresses.transform(c.home_address))
        .build()
    )

    customer_mapper = (
        MapperBuilder(Customer, CustomerDto)
        .for_field("customer_id", lambda c: c.customer_number)
        .for_field("contact", contact_mapper)
        .build()
    )

    dto = await customer_mapper(customer)

``build()`` runs every rule of one invocation concurrently, so independent
lookups overlap. ``build_sync()`` is available when no rule is asynchronous.
A built transform is an ordinary function, which is how mappers nest.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from structured_mapper.core.exceptions import (
    AsynchronousRuleDeclaredException,
    DuplicateSlotException,
    MappingConfigurationException,
    NoRulesDefinedException,
)
from structured_mapper.core.logging import get_logger
from structured_mapper.mappers.rules import Rule, RuleKind, discard_awaitable
from structured_mapper.mappers.slots import TARGET, Slot, field_slot, object_slot

logger = get_logger(__name__)

SourceT = TypeVar("SourceT")
TargetT = TypeVar("TargetT")


class MapperBuilder(Generic[SourceT, TargetT]):
    """Collects rules mapping ``source_type`` onto ``target_type``."""

    def __init__(
        self,
        source_type: type[SourceT],
        target_type: type[TargetT],
    ) -> None:
        self.source_type = source_type
        self.target_type = target_type
        self._rules: list[Rule] = []
        self._slots: dict[str, Slot] = {}

    # ── Inspection ────────────────────────────────────────────────────

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def slots(self) -> frozenset[str]:
        """Canonical keys of every claimed slot."""
        return frozenset(self._slots)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return (
            f"MapperBuilder({self.source_type.__name__} -> "
            f"{self.target_type.__name__}, rules={len(self._rules)})"
        )

    # ── Registration ──────────────────────────────────────────────────

    def for_field(self, slot: "str | Slot", compute: Any) -> "MapperBuilder[SourceT, TargetT]":
        """
        Register a rule writing one field of the target.

        Args:
            slot:    Field path, e.g. ``"contact.first"``.
            compute: Function of the source (sync or async), a literal value,
                     or an awaitable of a literal value.

        Raises:
            InvalidSlotShapeException: ``slot`` is not a field path.
            DuplicateSlotException:    ``slot`` overlaps an existing rule.
        """
        return self._register(RuleKind.FIELD, slot, compute)

    def for_object(
        self,
        compute: Any,
        slot: "str | Slot" = TARGET,
    ) -> "MapperBuilder[SourceT, TargetT]":
        """
        Register the rule producing the whole target.

        A builder holding a whole-object rule cannot hold any other rule.

        Raises:
            InvalidSlotShapeException: ``slot`` is a field path.
            DuplicateSlotException:    Another rule is already registered.
        """
        return self._register(RuleKind.WHOLE_OBJECT, slot, compute)

    def _register(
        self,
        kind: RuleKind,
        descriptor: "str | Slot",
        compute: Any,
    ) -> "MapperBuilder[SourceT, TargetT]":
        # Shape and overlap are settled before the rule exists, so a rejected
        # registration leaves the builder untouched.
        try:
            if kind is RuleKind.FIELD:
                slot = field_slot(descriptor)
            else:
                slot = object_slot(descriptor)
            for claimed in self._slots.values():
                if slot.overlaps(claimed):
                    raise DuplicateSlotException(
                        slot=slot.key, claimed_by=claimed.key)
        except MappingConfigurationException:
            if inspect.isawaitable(compute):
                discard_awaitable(compute)
            raise

        self._slots[slot.key] = slot
        if kind is RuleKind.FIELD:
            rule = Rule.for_field(slot, compute)
        else:
            rule = Rule.for_object(slot, compute)
        self._rules.append(rule)

        logger.debug(
            "Mapping rule registered",
            extra={
                "mapper": repr(self),
                "slot": slot.key,
                "kind": rule.kind.value,
                "is_async": rule.is_async,
            },
        )
        return self

    # ── Finalization ──────────────────────────────────────────────────

    def build(self) -> Callable[[SourceT | None], Awaitable[TargetT | None]]:
        """
        Compile the registered rules into an asynchronous transform.

        All rules of one invocation run concurrently. When rules fail, every
        rule is still allowed to settle, then the failure of the earliest
        registered failing rule is raised unchanged. Writes already made to
        the target are not undone.

        Raises:
            NoRulesDefinedException: No rule was registered.
        """
        rules = self._snapshot()
        target_type = self.target_type
        name = repr(self)

        async def transform(source: SourceT | None) -> TargetT | None:
            if source is None:
                return None

            target = target_type()
            results = await asyncio.gather(
                *(rule.apply(source, target) for rule in rules),
                return_exceptions=True,
            )

            for rule, result in zip(rules, results):
                if isinstance(result, BaseException):
                    logger.warning(
                        "Mapping rule failed",
                        extra={
                            "mapper": name,
                            "slot": rule.slot_key,
                            "exception_type": type(result).__name__,
                        },
                    )
                    raise result

            return _result_of(rules, results, target)

        logger.debug("Async mapper built", extra={"mapper": name})
        return transform

    def build_sync(self) -> Callable[[SourceT | None], TargetT | None]:
        """
        Compile the registered rules into a synchronous transform.

        Rules are evaluated one after the other in registration order.

        Raises:
            NoRulesDefinedException:            No rule was registered.
            AsynchronousRuleDeclaredException:  A rule was declared async.
        """
        rules = self._snapshot()
        async_slots = [rule.slot_key for rule in rules if rule.is_async]
        if async_slots:
            raise AsynchronousRuleDeclaredException(slots=async_slots)

        target_type = self.target_type

        def transform(source: SourceT | None) -> TargetT | None:
            if source is None:
                return None

            target = target_type()
            results = [rule.apply_sync(source, target) for rule in rules]
            return _result_of(rules, results, target)

        logger.debug("Sync mapper built", extra={"mapper": repr(self)})
        return transform

    def _snapshot(self) -> tuple[Rule, ...]:
        if not self._rules:
            raise NoRulesDefinedException()
        return tuple(self._rules)


def _result_of(rules: tuple[Rule, ...], results: list[Any], target: Any) -> Any:
    # A whole-object rule is always alone in its builder
    if rules[0].kind is RuleKind.WHOLE_OBJECT:
        return results[0]
    return target

"""
structured-mapper — declarative, concurrent object mapping.

    from structured_mapper import MapperBuilder

    mapper = (
        MapperBuilder(Customer, ContactDto)
        .for_field("first", lambda c: c.first_name)
        .for_field("home_address", lambda c: addresses.transform(c.home_address))
        .build()
    )
    contact = await mapper(customer)
"""

from structured_mapper.core.exceptions import (
    AsynchronousRuleDeclaredException,
    DuplicateSlotException,
    InvalidSlotShapeException,
    MappingConfigurationException,
    NoRulesDefinedException,
    SlotPathException,
)
from structured_mapper.mappers.builder import MapperBuilder
from structured_mapper.mappers.rules import Rule, RuleKind
from structured_mapper.mappers.slots import TARGET, Slot

__all__ = [
    "MapperBuilder",
    "Rule",
    "RuleKind",
    "Slot",
    "TARGET",
    "MappingConfigurationException",
    "InvalidSlotShapeException",
    "DuplicateSlotException",
    "NoRulesDefinedException",
    "AsynchronousRuleDeclaredException",
    "SlotPathException",
]

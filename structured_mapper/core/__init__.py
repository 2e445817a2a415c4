from structured_mapper.core.exceptions import (
    AppException,
    MappingConfigurationException,
    InvalidSlotShapeException,
    DuplicateSlotException,
    NoRulesDefinedException,
    AsynchronousRuleDeclaredException,
    TransformationException,
    SourceAPIException,
    NotFoundException,
)
from structured_mapper.core.logging import setup_logging, get_logger

__all__ = [
    "AppException",
    "MappingConfigurationException",
    "InvalidSlotShapeException",
    "DuplicateSlotException",
    "NoRulesDefinedException",
    "AsynchronousRuleDeclaredException",
    "TransformationException",
    "SourceAPIException",
    "NotFoundException",
    "setup_logging",
    "get_logger",
]

"""Domain layer: record identity, relation registry, commands and the resolver."""

from __future__ import annotations

from .commands import (
    INLINE_LOCALIZE_SYNCHRONIZE,
    LOCALIZE,
    Command,
    CommandBatch,
    InlineSynchronizeCommand,
    LocalizeCommand,
)
from .model import UID_FIELD, Record, RecordKey, RecordSet, Visibility
from .relations import (
    DEFAULT_PARENT_TABLE,
    AdditionalRelation,
    DefaultRelation,
    RelationSchemaRegistry,
)
from .resolver import MAX_DEPTH, FlushedCommand, RelationResolver, ResolutionResult
from .schema import LocalizationSchema, TableLocalization

__all__ = [
    "DEFAULT_PARENT_TABLE",
    "INLINE_LOCALIZE_SYNCHRONIZE",
    "LOCALIZE",
    "MAX_DEPTH",
    "UID_FIELD",
    "AdditionalRelation",
    "Command",
    "CommandBatch",
    "DefaultRelation",
    "FlushedCommand",
    "InlineSynchronizeCommand",
    "LocalizationSchema",
    "LocalizeCommand",
    "Record",
    "RecordKey",
    "RecordSet",
    "RelationResolver",
    "RelationSchemaRegistry",
    "ResolutionResult",
    "TableLocalization",
    "Visibility",
]

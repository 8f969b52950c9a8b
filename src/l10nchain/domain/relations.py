"""Relation schema registry.

A child table participates as the many-side of one-to-many relations in two
tiers:

- one *default* relation whose parent is the designated content table
- any number of *additional* relations with an arbitrary parent table

``parent_field`` always lives on the child table and holds the parent's uid.
``children_field`` lives on the parent table and is the collection field
through which the parent synchronizes its localized children. An additional
relation without a children field is only navigable from the child side.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

DEFAULT_PARENT_TABLE: Final[str] = "tt_content"


@dataclass(frozen=True, slots=True)
class DefaultRelation:
    parent_field: str
    children_field: str


@dataclass(frozen=True, slots=True)
class AdditionalRelation:
    parent_table: str
    parent_field: str
    children_field: str | None = None


def _freeze_default(
    relations: Mapping[str, DefaultRelation],
) -> Mapping[str, DefaultRelation]:
    return MappingProxyType(dict(relations))


def _freeze_additional(
    relations: Mapping[str, tuple[AdditionalRelation, ...] | list[AdditionalRelation]],
) -> Mapping[str, tuple[AdditionalRelation, ...]]:
    return MappingProxyType({table: tuple(entries) for table, entries in relations.items()})


@dataclass(frozen=True, slots=True)
class RelationSchemaRegistry:
    """Immutable lookup of the relations each child table takes part in."""

    default_relations: Mapping[str, DefaultRelation] = field(
        default_factory=dict["str", "DefaultRelation"]
    )
    additional_relations: Mapping[str, tuple[AdditionalRelation, ...]] = field(
        default_factory=dict["str", "tuple[AdditionalRelation, ...]"]
    )
    default_parent_table: str = DEFAULT_PARENT_TABLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_relations", _freeze_default(self.default_relations))
        object.__setattr__(
            self, "additional_relations", _freeze_additional(self.additional_relations)
        )

    def default_relation_for(self, table: str) -> DefaultRelation | None:
        return self.default_relations.get(table)

    def additional_relations_for(self, table: str) -> tuple[AdditionalRelation, ...]:
        return self.additional_relations.get(table, ())

    def has_relations(self, table: str) -> bool:
        return table in self.default_relations or bool(self.additional_relations_for(table))

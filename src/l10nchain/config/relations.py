"""Load the relation schema and table localization settings from TOML.

The file is validated with pydantic and turned into the immutable domain
objects the resolver is constructed with. Example::

    default_parent_table = "tt_content"

    [tables.tt_content]
    language_field = "sys_language_uid"
    translation_pointer_field = "l10n_parent"

    [relations.tx_news_item]
    parent_field = "tt_content"
    children_field = "tx_news_items"

    [[additional_relations.tx_news_item]]
    parent_table = "tx_news_category"
    parent_field = "category"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from l10nchain.domain.relations import (
    DEFAULT_PARENT_TABLE,
    AdditionalRelation,
    DefaultRelation,
    RelationSchemaRegistry,
)
from l10nchain.domain.resolver import MAX_DEPTH
from l10nchain.domain.schema import LocalizationSchema, TableLocalization

from .env import require_env_var
from .errors import ConfigurationError

CONFIG_ENV_VAR: Final[str] = "L10NCHAIN_CONFIG"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ConfigBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TableModel(ConfigBaseModel):
    language_field: str | None = None
    translation_pointer_field: str | None = None
    deleted_field: str | None = None
    workspace_field: str | None = None

    _normalize_fields = field_validator(
        "language_field",
        "translation_pointer_field",
        "deleted_field",
        "workspace_field",
        mode="before",
    )(_blank_to_none)


class DefaultRelationModel(ConfigBaseModel):
    parent_field: str = Field(min_length=1)
    children_field: str = ""


class AdditionalRelationModel(ConfigBaseModel):
    parent_table: str = Field(min_length=1)
    parent_field: str = Field(min_length=1)
    children_field: str | None = None


class RelationConfigModel(ConfigBaseModel):
    default_parent_table: str = Field(default=DEFAULT_PARENT_TABLE, min_length=1)
    max_depth: int = Field(default=MAX_DEPTH, gt=0)
    tables: dict[str, TableModel] = Field(default_factory=dict)
    relations: dict[str, DefaultRelationModel] = Field(default_factory=dict)
    additional_relations: dict[str, list[AdditionalRelationModel]] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Everything a resolver is configured with, built once per process."""

    registry: RelationSchemaRegistry = field(default_factory=RelationSchemaRegistry)
    schema: LocalizationSchema = field(default_factory=LocalizationSchema)
    max_depth: int = MAX_DEPTH


def parse_resolver_config(document: dict[str, object]) -> ResolverConfig:
    """Validate an already decoded configuration document."""

    try:
        model = RelationConfigModel.model_validate(document)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid relation configuration: {exc}") from exc

    registry = RelationSchemaRegistry(
        default_relations={
            table: DefaultRelation(
                parent_field=relation.parent_field,
                children_field=relation.children_field,
            )
            for table, relation in model.relations.items()
        },
        additional_relations={
            table: tuple(
                AdditionalRelation(
                    parent_table=relation.parent_table,
                    parent_field=relation.parent_field,
                    children_field=relation.children_field,
                )
                for relation in relations
            )
            for table, relations in model.additional_relations.items()
        },
        default_parent_table=model.default_parent_table,
    )
    schema = LocalizationSchema(
        tables={
            table: TableLocalization(
                language_field=settings.language_field,
                translation_pointer_field=settings.translation_pointer_field,
                deleted_field=settings.deleted_field,
                workspace_field=settings.workspace_field,
            )
            for table, settings in model.tables.items()
        }
    )
    return ResolverConfig(registry=registry, schema=schema, max_depth=model.max_depth)


def load_resolver_config(path: Path) -> ResolverConfig:
    """Read and validate the TOML file at ``path``."""

    try:
        with path.open("rb") as config_file:
            document = tomllib.load(config_file)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Relation configuration not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Relation configuration is not valid TOML: {path}") from exc
    return parse_resolver_config(document)


def get_resolver_config(*, path: Path | None = None) -> ResolverConfig:
    """Load the configuration from ``path`` or the ``L10NCHAIN_CONFIG`` variable."""

    resolved = path or Path(require_env_var(CONFIG_ENV_VAR))
    return load_resolver_config(resolved.expanduser())


__all__ = [
    "CONFIG_ENV_VAR",
    "ResolverConfig",
    "get_resolver_config",
    "load_resolver_config",
    "parse_resolver_config",
]

"""Resolve the parent chain a record needs before it can be localized.

Localizing a child on its own leaves orphaned or duplicated translations when
the child is only reachable through a parent that has no translation yet. The
resolver walks the configured relations upwards and produces:

- a ``CommandBatch`` of deferred commands for the caller to execute
- the set of records that become localized implicitly, through a parent's
  inline synchronization, without an entry of their own
- the commands it already had to execute (``flushed``) because a parent can
  only carry one inline synchronization at a time

The walk is bounded twice: each ``(table, uid)`` pair is examined once per
result, and a counter incremented on every recursive entry stops the walk at
``MAX_DEPTH``. The counter never survives a call, and the visited set lives
on the result; a resolver instance only holds immutable configuration and
collaborators.

Collaborator failures propagate unchanged. Flushed commands stay committed
in that case and the pending batch is lost with the exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .commands import CommandBatch, InlineSynchronizeCommand, LocalizeCommand
from .model import RecordKey, RecordSet, as_positive_id, record_uid

if TYPE_CHECKING:
    from .commands import Command
    from .model import Record
    from .ports import CommandExecutor, LocalizationOracle, RecordStore, SchemaIntrospection
    from .relations import RelationSchemaRegistry

MAX_DEPTH: Final[int] = 100

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FlushedCommand:
    """A command executed during resolution instead of being returned."""

    key: RecordKey
    command: Command


@dataclass(slots=True)
class ResolutionResult:
    """Outcome of one top-level resolution.

    ``batch`` is deferred work for the caller. ``flushed`` lists what was
    already executed, in execution order; none of it is left in ``batch``.
    ``visited`` holds every record examined while building this result.
    """

    batch: CommandBatch = field(default_factory=CommandBatch)
    implicit: RecordSet = field(default_factory=RecordSet)
    flushed: list[FlushedCommand] = field(default_factory=list["FlushedCommand"])
    visited: RecordSet = field(default_factory=RecordSet, repr=False)

    def will_be_localized(self, key: RecordKey) -> bool:
        return key in self.implicit or self.batch.localization(key) is not None


@dataclass(slots=True)
class RelationResolver:
    """Compute the localization commands for a record and its required parents."""

    registry: RelationSchemaRegistry
    schema: SchemaIntrospection
    localizations: LocalizationOracle
    records: RecordStore
    executor: CommandExecutor
    max_depth: int = MAX_DEPTH

    def resolve(
        self,
        record: Record,
        target_language: int,
        table: str,
        *,
        result: ResolutionResult | None = None,
    ) -> ResolutionResult:
        """Resolve ``record`` of ``table`` for ``target_language``.

        Pass the ``result`` of an earlier call to keep extending it, so siblings
        resolved one after another share one inline synchronization per parent
        and an ancestor they share is examined only once. The depth counter
        starts fresh on every call.
        """

        if target_language < 0:
            raise ValueError(f"Target language must be non-negative, got {target_language}")

        walk = _Walk(resolver=self, language=target_language, result=result or ResolutionResult())
        walk.visit(record, table)
        log.debug(
            "Resolved %s#%s: commands=%s, implicit=%s, flushed=%s, depth=%s",
            table,
            record_uid(record),
            len(walk.result.batch),
            len(walk.result.implicit),
            len(walk.result.flushed),
            walk.depth,
        )
        return walk.result


@dataclass(slots=True)
class _Walk:
    """Per-call state of one resolution: depth counter and the result it extends."""

    resolver: RelationResolver
    language: int
    depth: int = 0
    result: ResolutionResult = field(default_factory=ResolutionResult)

    def visit(self, element: Record, table: str) -> None:
        self.depth += 1
        if self.depth >= self.resolver.max_depth:
            log.debug("Depth ceiling %s reached at table %s", self.resolver.max_depth, table)
            return

        uid = record_uid(element)
        if uid is None:
            log.debug("Skipping %s record without uid", table)
            return

        key = RecordKey(table, uid)
        visited = self.result.visited
        if key in visited:
            return
        visited.add(key)

        schema = self.resolver.schema
        if schema.translation_pointer_field(table) is None or schema.language_field(table) is None:
            log.debug("Table %s is not localizable, skipping %s", table, key)
            return

        registry = self.resolver.registry
        claimed = False

        default_relation = registry.default_relation_for(table)
        if default_relation is not None:
            claimed = self.evaluate_parent_side(
                element,
                uid,
                parent_table=registry.default_parent_table,
                parent_field=default_relation.parent_field,
                children_field=default_relation.children_field,
            )

        for relation in registry.additional_relations_for(table):
            if self.evaluate_parent_side(
                element,
                uid,
                parent_table=relation.parent_table,
                parent_field=relation.parent_field,
                children_field=relation.children_field,
            ):
                claimed = True

        if claimed:
            self.result.implicit.add(key)
            return

        replaced = self.result.batch.put(key, LocalizeCommand(self.language))
        if replaced is not None and replaced != LocalizeCommand(self.language):
            log.warning("Localize command for %s replaced pending %r", key, replaced)

    def evaluate_parent_side(
        self,
        child: Record,
        child_uid: int,
        *,
        parent_table: str,
        parent_field: str,
        children_field: str | None,
    ) -> bool:
        """Honour one relation of ``child``; return whether the parent side claims it."""

        parent_uid = as_positive_id(child.get(parent_field))
        if parent_uid is None:
            return False

        localized_parent = self.resolver.localizations.find_localization(
            parent_table, parent_uid, self.language
        )
        localized_uid = record_uid(localized_parent) if localized_parent is not None else None
        if localized_uid is not None:
            if children_field is None:
                return False
            self._synchronize_child(
                RecordKey(parent_table, localized_uid), children_field, child_uid
            )
            return True

        parent = self.resolver.records.fetch(parent_table, parent_uid)
        if parent is None:
            log.debug("Parent %s#%s does not exist", parent_table, parent_uid)
            return False

        self.visit(parent, parent_table)
        return True

    def _synchronize_child(self, target: RecordKey, children_field: str, child_uid: int) -> None:
        batch = self.result.batch
        pending = batch.synchronization(target)
        if pending is not None and pending.field == children_field:
            pending.append(child_uid)
            return

        if pending is not None:
            self._flush(target)

        batch.put(
            target,
            InlineSynchronizeCommand(field=children_field, language=self.language, ids=[child_uid]),
        )

    def _flush(self, key: RecordKey) -> None:
        command = self.result.batch.pop(key, InlineSynchronizeCommand)
        if command is None:
            return
        log.info("Flushing pending inline synchronization for %s before replacing it", key)
        self.resolver.executor.execute(CommandBatch.single(key, command))
        self.result.flushed.append(FlushedCommand(key=key, command=command))

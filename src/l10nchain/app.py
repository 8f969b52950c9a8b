"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from l10nchain.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLocalizationUnitOfWork,
    is_started,
    startup,
)
from l10nchain.domain.model import RecordKey
from l10nchain.domain.ports.unit_of_work import LocalizationUnitOfWork
from l10nchain.domain.resolver import RelationResolver, ResolutionResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from l10nchain.config.relations import ResolverConfig
    from l10nchain.domain.model import Visibility
    from l10nchain.domain.ports import CommandExecutor

UnitOfWorkFactory = Callable[[], LocalizationUnitOfWork]


log = getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a record to localize does not exist or is not visible."""

    def __init__(self, key: RecordKey) -> None:
        self.key = key
        super().__init__(f"Record {key} not found")


def localize_records_and_parents(
    table: str,
    uids: Sequence[int],
    language: int,
    *,
    config: ResolverConfig,
    executor: CommandExecutor,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    visibility: Visibility | None = None,
    execute: bool = True,
) -> ResolutionResult:
    """Resolve ``table`` records ``uids`` and their parents for ``language``.

    All records share one batch, so siblings below the same localized parent
    end up in one inline synchronization. Commands flushed during resolution
    reach ``executor`` immediately; the remaining batch is executed once all
    records are resolved, unless ``execute`` is false, in which case it is
    only returned.
    """

    effective_uow = unit_of_work_factory
    if effective_uow is None:
        if not is_started():
            startup()
        effective_uow = partial(
            SqlAlchemyLocalizationUnitOfWork, config.schema, visibility=visibility
        )

    log.info("Resolving %s record(s) of %s for language %s", len(uids), table, language)

    result = ResolutionResult()
    with effective_uow() as uow:
        resolver = RelationResolver(
            registry=config.registry,
            schema=config.schema,
            localizations=uow.repositories.localizations,
            records=uow.repositories.records,
            executor=executor,
            max_depth=config.max_depth,
        )
        for uid in uids:
            record = uow.repositories.records.fetch(table, uid)
            if record is None:
                raise RecordNotFoundError(RecordKey(table, uid))
            resolver.resolve(record, language, table, result=result)

    if execute and len(result.batch):
        executor.execute(result.batch)

    log.info(
        "Finished %s: commands=%s, implicit=%s, flushed=%s, executed=%s",
        table,
        len(result.batch),
        len(result.implicit),
        len(result.flushed),
        execute,
    )
    return result


def localize_record_and_parents(
    table: str,
    uid: int,
    language: int,
    *,
    config: ResolverConfig,
    executor: CommandExecutor,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    visibility: Visibility | None = None,
    execute: bool = True,
) -> ResolutionResult:
    """Resolve a single record; see ``localize_records_and_parents``."""

    return localize_records_and_parents(
        table,
        (uid,),
        language,
        config=config,
        executor=executor,
        unit_of_work_factory=unit_of_work_factory,
        visibility=visibility,
        execute=execute,
    )

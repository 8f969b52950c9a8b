"""Record store and localization oracle backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import or_, select

from l10nchain.domain.model import Visibility

from .tables import ReflectedTables, column, uid_column

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select, Table
    from sqlalchemy.orm import Session

    from l10nchain.domain.model import Record
    from l10nchain.domain.schema import LocalizationSchema


class SqlAlchemyTableRepository:
    """Shared helpers for repositories reading reflected tables."""

    def __init__(
        self,
        session: Session,
        schema: LocalizationSchema,
        *,
        tables: ReflectedTables | None = None,
        visibility: Visibility | None = None,
    ) -> None:
        self.session = session
        self.schema = schema
        self.tables = tables or ReflectedTables()
        self.visibility = visibility or Visibility()

    def _table(self, name: str) -> Table:
        return self.tables.table(name, self.session.connection())

    def _visibility_clauses(self, name: str, table: Table) -> list[ColumnElement[bool]]:
        settings = self.schema.table(name)
        clauses: list[ColumnElement[bool]] = []
        if settings.deleted_field and not self.visibility.include_deleted:
            deleted = column(table, settings.deleted_field)
            clauses.append(or_(deleted.is_(None), deleted == 0))
        if settings.workspace_field:
            workspace = column(table, settings.workspace_field)
            clauses.append(
                or_(
                    workspace.is_(None),
                    workspace.in_(sorted({0, self.visibility.workspace})),
                )
            )
        return clauses

    def _first(self, stmt: Select[tuple[object, ...]]) -> Record | None:
        row = self.session.execute(stmt).mappings().first()
        if row is None:
            return None
        return dict(row)


class SqlAlchemyRecordStore(SqlAlchemyTableRepository):
    def fetch(self, table: str, uid: int) -> Record | None:
        reflected = self._table(table)
        stmt = (
            select(reflected)
            .where(uid_column(reflected) == uid)
            .where(*self._visibility_clauses(table, reflected))
            .limit(1)
        )
        return self._first(stmt)


class SqlAlchemyLocalizationOracle(SqlAlchemyTableRepository):
    def find_localization(self, table: str, uid: int, language: int) -> Record | None:
        """Return the translation of ``table#uid`` with the lowest uid, if any."""

        pointer_field = self.schema.translation_pointer_field(table)
        language_field = self.schema.language_field(table)
        if pointer_field is None or language_field is None:
            return None

        reflected = self._table(table)
        stmt = (
            select(reflected)
            .where(column(reflected, pointer_field) == uid)
            .where(column(reflected, language_field) == language)
            .where(*self._visibility_clauses(table, reflected))
            .order_by(uid_column(reflected).asc())
            .limit(1)
        )
        return self._first(stmt)


if TYPE_CHECKING:
    from l10nchain.domain.ports import LocalizationOracle, RecordStore
    from l10nchain.domain.schema import LocalizationSchema as _Schema

    _session_stub = cast("Session", object())
    _store_check: RecordStore = SqlAlchemyRecordStore(_session_stub, _Schema())
    _oracle_check: LocalizationOracle = SqlAlchemyLocalizationOracle(_session_stub, _Schema())

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from l10nchain.adapters.memory import InMemoryRecordStore, RecordingCommandExecutor
from l10nchain.adapters.sqlalchemy.unit_of_work import shutdown, startup
from tests.support.records import make_schema

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


def _content_tables(metadata: MetaData) -> None:
    Table(
        "tt_content",
        metadata,
        Column("uid", Integer, primary_key=True),
        Column("sys_language_uid", Integer, nullable=False, default=0),
        Column("l10n_parent", Integer, nullable=False, default=0),
        Column("deleted", Integer, nullable=False, default=0),
        Column("t3ver_wsid", Integer, nullable=False, default=0),
        Column("header", String, nullable=True),
    )
    Table(
        "tx_item",
        metadata,
        Column("uid", Integer, primary_key=True),
        Column("sys_language_uid", Integer, nullable=False, default=0),
        Column("l10n_parent", Integer, nullable=False, default=0),
        Column("deleted", Integer, nullable=False, default=0),
        Column("t3ver_wsid", Integer, nullable=False, default=0),
        Column("tt_content", Integer, nullable=False, default=0),
        Column("title", String, nullable=True),
    )


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    metadata = MetaData()
    _content_tables(metadata)
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def started_adapter(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(schema=make_schema())


@pytest.fixture
def executor() -> RecordingCommandExecutor:
    return RecordingCommandExecutor()

from __future__ import annotations

import pytest

from l10nchain.adapters.memory import InMemoryRecordStore, RecordingCommandExecutor
from l10nchain.domain.commands import CommandBatch, InlineSynchronizeCommand, LocalizeCommand
from l10nchain.domain.model import RecordKey, Visibility
from tests.support.records import add_translation, make_schema


def test_fetch_returns_copy_of_row(store: InMemoryRecordStore) -> None:
    store.add("pages", uid=1, title="Home")

    row = store.fetch("pages", 1)
    assert row == {"uid": 1, "title": "Home"}
    assert store.fetch("pages", 2) is None


def test_add_requires_uid(store: InMemoryRecordStore) -> None:
    with pytest.raises(ValueError, match="uid"):
        store.add("pages", title="No id")


def test_find_localization_prefers_lowest_uid(store: InMemoryRecordStore) -> None:
    store.add("tt_content", uid=10)
    add_translation(store, "tt_content", uid=40, source=10, language=1)
    add_translation(store, "tt_content", uid=20, source=10, language=1)
    add_translation(store, "tt_content", uid=15, source=10, language=2)

    localization = store.find_localization("tt_content", 10, 1)

    assert localization is not None
    assert localization["uid"] == 20


def test_find_localization_respects_visibility() -> None:
    store = InMemoryRecordStore(schema=make_schema(), visibility=Visibility(workspace=2))
    store.add("tt_content", uid=10)
    add_translation(store, "tt_content", uid=11, source=10, language=1, deleted=1)
    add_translation(store, "tt_content", uid=12, source=10, language=1, t3ver_wsid=5)
    add_translation(store, "tt_content", uid=13, source=10, language=1, t3ver_wsid=2)

    localization = store.find_localization("tt_content", 10, 1)

    assert localization is not None
    assert localization["uid"] == 13


def test_find_localization_on_unlocalizable_table_is_none() -> None:
    store = InMemoryRecordStore()
    store.add("pages", uid=1)
    store.add("pages", uid=2, l10n_parent=1, sys_language_uid=1)

    assert store.find_localization("pages", 1, 1) is None


def test_recording_executor_snapshots_batches() -> None:
    executor = RecordingCommandExecutor()
    key = RecordKey("tt_content", 11)
    batch = CommandBatch.single(key, InlineSynchronizeCommand("items", 1, [3]))

    executor.execute(batch)
    command = batch.synchronization(key)
    assert isinstance(command, InlineSynchronizeCommand)
    command.append(4)
    batch.put(RecordKey("pages", 1), LocalizeCommand(1))

    assert executor.command_maps() == [
        {
            "tt_content": {
                11: {
                    "inlineLocalizeSynchronize": {
                        "field": "items",
                        "language": 1,
                        "action": "localize",
                        "ids": [3],
                    }
                }
            }
        }
    ]

# backend/tests/test_notice_repository.py

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from app.notices.config import NoticeStoreSettings
from app.notices.errors import StorageError
from app.notices.repository import InMemoryNoticeRepository, MongoNoticeRepository
from app.notices.schemas import Notice

DEADLINE = datetime(2026, 10, 21, 15, 0)


# ---- InMemoryNoticeRepository -----------------------------------------


def test_in_memory_list_all_on_empty_store_returns_empty_list() -> None:
    repository = InMemoryNoticeRepository()

    assert repository.list_all() == []


def test_in_memory_save_assigns_sequential_ids() -> None:
    repository = InMemoryNoticeRepository()

    first = repository.save(Notice(subject="a", deadline=DEADLINE))
    second = repository.save(Notice(subject="b", deadline=DEADLINE))

    assert first.id == "notices/1"
    assert second.id == "notices/2"


def test_in_memory_round_trips_subject_and_deadline_in_insertion_order() -> None:
    repository = InMemoryNoticeRepository()
    aware = datetime(2026, 11, 1, 9, 0, tzinfo=timezone(timedelta(hours=9)))

    repository.save(Notice(subject="Test Subject", deadline=DEADLINE))
    repository.save(Notice(subject="Test Subject", deadline=aware))

    notices = repository.list_all()

    assert [n.subject for n in notices] == ["Test Subject", "Test Subject"]
    assert [n.deadline for n in notices] == [DEADLINE, aware]


def test_in_memory_returns_copies() -> None:
    repository = InMemoryNoticeRepository()
    repository.save(Notice(subject="original", deadline=DEADLINE))

    listed = repository.list_all()
    listed[0].subject = "changed"

    assert repository.list_all()[0].subject == "original"


def test_in_memory_save_with_existing_id_replaces_in_place() -> None:
    repository = InMemoryNoticeRepository()
    first = repository.save(Notice(subject="a", deadline=DEADLINE))
    repository.save(Notice(subject="b", deadline=DEADLINE))

    repository.save(first.model_copy(update={"subject": "a2"}))

    assert [(n.id, n.subject) for n in repository.list_all()] == [
        ("notices/1", "a2"),
        ("notices/2", "b"),
    ]


# ---- MongoNoticeRepository --------------------------------------------


def _mongo_repository():
    """
    MagicMock の MongoClient を使ったリポジトリを返す。

    client[db][collection] はキーに関わらず同じ MagicMock になる。
    """
    client = MagicMock()
    repository = MongoNoticeRepository(client, database="notices", collection="notices")
    collection = client.__getitem__.return_value.__getitem__.return_value
    session = client.start_session.return_value.__enter__.return_value
    return repository, client, collection, session


def test_mongo_save_inserts_document_inside_session() -> None:
    repository, client, collection, session = _mongo_repository()
    inserted_id = ObjectId()
    collection.insert_one.return_value.inserted_id = inserted_id

    saved = repository.save(Notice(subject="Test Subject", deadline=DEADLINE))

    collection.insert_one.assert_called_once_with(
        {"subject": "Test Subject", "deadline": "2026-10-21T15:00:00"},
        session=session,
    )
    client.start_session.return_value.__exit__.assert_called_once()
    assert saved.id == str(inserted_id)
    assert saved.subject == "Test Subject"
    assert saved.deadline == DEADLINE


def test_mongo_save_never_persists_days_left() -> None:
    repository, _, collection, _ = _mongo_repository()
    collection.insert_one.return_value.inserted_id = ObjectId()

    repository.save(Notice(subject="s", deadline=DEADLINE))

    document = collection.insert_one.call_args.args[0]
    assert set(document) == {"subject", "deadline"}


def test_mongo_save_with_existing_id_upserts() -> None:
    repository, _, collection, session = _mongo_repository()
    existing_id = ObjectId()

    saved = repository.save(
        Notice(id=str(existing_id), subject="s", deadline=DEADLINE)
    )

    collection.replace_one.assert_called_once_with(
        {"_id": existing_id},
        {"subject": "s", "deadline": "2026-10-21T15:00:00"},
        upsert=True,
        session=session,
    )
    collection.insert_one.assert_not_called()
    assert saved.id == str(existing_id)


def test_mongo_list_all_converts_documents() -> None:
    repository, client, collection, session = _mongo_repository()
    first_id, second_id = ObjectId(), ObjectId()
    collection.find.return_value = [
        {"_id": first_id, "subject": "a", "deadline": "2026-10-21T15:00:00"},
        {"_id": second_id, "subject": "b", "deadline": "2026-10-22T08:00:00+09:00"},
    ]

    notices = repository.list_all()

    collection.find.assert_called_once_with({}, session=session)
    client.start_session.return_value.__exit__.assert_called_once()
    assert [n.id for n in notices] == [str(first_id), str(second_id)]
    assert notices[0].deadline == DEADLINE
    assert notices[1].deadline == datetime(
        2026, 10, 22, 8, 0, tzinfo=timezone(timedelta(hours=9))
    )


def test_mongo_list_all_on_empty_collection_returns_empty_list() -> None:
    repository, _, collection, _ = _mongo_repository()
    collection.find.return_value = []

    assert repository.list_all() == []


def test_mongo_save_wraps_driver_errors() -> None:
    repository, _, collection, _ = _mongo_repository()
    collection.insert_one.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(StorageError) as excinfo:
        repository.save(Notice(subject="s", deadline=DEADLINE))

    assert isinstance(excinfo.value.__cause__, ServerSelectionTimeoutError)


def test_mongo_list_all_wraps_session_errors() -> None:
    repository, client, _, _ = _mongo_repository()
    client.start_session.side_effect = AutoReconnect("connection lost")

    with pytest.raises(StorageError):
        repository.list_all()


def test_mongo_list_all_rejects_malformed_documents() -> None:
    repository, _, collection, _ = _mongo_repository()
    collection.find.return_value = [{"_id": ObjectId(), "subject": "no deadline"}]

    with pytest.raises(StorageError):
        repository.list_all()


def test_mongo_from_settings_uses_configured_names(monkeypatch) -> None:
    created = {}

    def fake_client(uri, **kwargs):
        created["uri"] = uri
        created["kwargs"] = kwargs
        return MagicMock()

    monkeypatch.setattr("app.notices.repository.MongoClient", fake_client)

    settings = NoticeStoreSettings(
        backend="mongodb",
        mongodb_uri="mongodb://db.example:27017",
        database="kata",
        collection="notices",
        timeout_ms=1500,
    )
    repository = MongoNoticeRepository.from_settings(settings)

    assert isinstance(repository, MongoNoticeRepository)
    assert created["uri"] == "mongodb://db.example:27017"
    assert created["kwargs"] == {"serverSelectionTimeoutMS": 1500}

"""
sqlite-backed storage: the key/value table and the contacts table.
"""

import pytest

from core.database import Database
from core.errors import StoreUnavailableError
from core.key_value_store import SqliteKeyValueStore
from core.models.contact import Contact, RiskRating
from core.models.time_range import TimeRange
from core.services.contact_service import ContactService
from core.services.rating_service import RatingService
from core.services.time_range_service import TimeRangeService


class TestSqliteKeyValueStore:
    def test_get_missing(self, db):
        assert SqliteKeyValueStore(db).get("timeRanges") is None

    def test_set_then_overwrite(self, db):
        store = SqliteKeyValueStore(db)
        store.set("k", b"one")
        store.set("k", b"two")
        assert store.get("k") == b"two"

    def test_shared_between_connections(self, tmp_path):
        path = tmp_path / "shared.db"
        writer = Database(path)
        TimeRangeService(SqliteKeyValueStore(writer)).save([TimeRange(0, 60, name="Early")])
        RatingService(SqliteKeyValueStore(writer)).set_rating("+1", 2)
        writer.close()

        reader = Database(path)
        assert TimeRangeService(SqliteKeyValueStore(reader)).load() == [TimeRange(0, 60, name="Early")]
        assert RatingService(SqliteKeyValueStore(reader)).get_rating("+1") == RiskRating.HIGH_RISK
        reader.close()

    def test_unopenable_database(self, tmp_path):
        with pytest.raises(StoreUnavailableError):
            Database(tmp_path / "missing-dir" / "app.db")

    def test_closed_connection_reads_fail_open(self, tmp_path):
        db = Database(tmp_path / "closed.db")
        store = SqliteKeyValueStore(db)
        db.close()

        with pytest.raises(StoreUnavailableError):
            store.get("timeRanges")
        assert TimeRangeService(store).load() == []
        assert RatingService(store).get_rating("+1") is None


class TestContactService:
    def test_add_and_get(self, db):
        service = ContactService(db)
        service.add_contact(Contact("+1", "Alex", photo=b"\x89PNG"))
        assert service.get_contact("+1") == Contact("+1", "Alex", photo=b"\x89PNG")
        assert service.get_contact("+2") is None

    def test_add_existing_updates(self, db):
        service = ContactService(db)
        service.add_contact(Contact("+1", "Alex"))
        service.add_contact(Contact("+1", "Alex (work)"))
        assert [c.display_name for c in service.list_contacts()] == ["Alex (work)"]

    def test_sorted_case_insensitive(self, db):
        service = ContactService(db)
        for ident, name in (("+1", "sam"), ("+2", "Alex"), ("+3", "bea")):
            service.add_contact(Contact(ident, name))
        assert [c.display_name for c in service.list_contacts()] == ["Alex", "bea", "sam"]

    def test_search(self, db):
        service = ContactService(db)
        service.add_contact(Contact("+1", "Jordan Lee"))
        service.add_contact(Contact("+2", "Sam"))
        assert [c.identifier for c in service.search("lee")] == ["+1"]
        assert len(service.search("  ")) == 2

    def test_delete(self, db):
        service = ContactService(db)
        service.add_contact(Contact("+1", "Sam"))
        service.delete_contact("+1")
        assert service.list_contacts() == []

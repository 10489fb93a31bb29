"""
The "contacts" document: one rating per identifier, last write wins.
"""

import json

import pytest

from conftest import FlakyStore
from core.errors import StoreUnavailableError
from core.key_value_store import InMemoryKeyValueStore
from core.models.contact import ContactRating, RiskRating
from core.services.rating_service import CONTACTS_KEY, RatingService


class TestRatings:
    def test_never_rated_is_none(self, rating_service):
        assert rating_service.get_rating("+1") is None

    def test_set_and_get(self, rating_service):
        rating_service.set_rating("+1", 2)
        assert rating_service.get_rating("+1") == RiskRating.HIGH_RISK

    def test_last_write_wins(self, rating_service, store):
        rating_service.set_rating("+1", 2)
        rating_service.set_rating("+1", 1)
        assert rating_service.get_rating("+1") == RiskRating.CAUTION

        doc = json.loads(store.get(CONTACTS_KEY))
        assert doc == [{"identifier": "+1", "rating": 1}]

    def test_clear_stores_zero(self, rating_service):
        rating_service.set_rating("+1", 2)
        rating_service.clear_rating("+1")
        assert rating_service.get_rating("+1") == RiskRating.NONE

    def test_identifiers_are_opaque(self, rating_service):
        rating_service.set_rating("+1 555 0100", 1)
        rating_service.set_rating("+15550100", 2)
        assert rating_service.ratings_by_identifier() == {
            "+1 555 0100": RiskRating.CAUTION,
            "+15550100": RiskRating.HIGH_RISK,
        }

    @pytest.mark.parametrize("bad", [3, -1, True, "2"])
    def test_invalid_rating_rejected(self, rating_service, bad):
        with pytest.raises(ValueError):
            rating_service.set_rating("+1", bad)
        assert rating_service.get_rating("+1") is None

    @pytest.mark.parametrize("payload", [
        b"[{]",
        b'{"identifier": "+1"}',
        pytest.param(b"[" * 200000, id="deeply-nested"),
    ])
    def test_corrupt_document_fails_open(self, payload):
        service = RatingService(InMemoryKeyValueStore({CONTACTS_KEY: payload}))
        assert service.all_ratings() == []
        assert service.get_rating("+1") is None

    def test_corrupt_document_is_replaced_on_write(self):
        store = InMemoryKeyValueStore({CONTACTS_KEY: b"[" * 200000})
        service = RatingService(store)
        service.set_rating("+1", 1)
        assert service.ratings_by_identifier() == {"+1": RiskRating.CAUTION}

    def test_unreadable_store_keeps_other_ratings(self):
        store = FlakyStore()
        service = RatingService(store)
        service.set_rating("+1", 2)
        service.set_rating("+2", 1)

        store.fail_reads = True
        assert service.get_rating("+1") is None
        with pytest.raises(StoreUnavailableError):
            service.set_rating("+3", 2)
        with pytest.raises(StoreUnavailableError):
            service.clear_rating("+1")

        store.fail_reads = False
        assert service.ratings_by_identifier() == {
            "+1": RiskRating.HIGH_RISK,
            "+2": RiskRating.CAUTION,
        }


class TestContactRating:
    def test_round_trip_dict(self):
        entry = ContactRating("abc", 2)
        assert ContactRating.from_dict(entry.to_dict()) == entry

    def test_identifier_must_be_text(self):
        with pytest.raises(TypeError):
            ContactRating.from_dict({"identifier": 5, "rating": 1})

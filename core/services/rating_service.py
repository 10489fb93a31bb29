# core/services/rating_service.py

from __future__ import annotations

import json
from typing import Dict, List, Optional

from core.errors import StoreUnavailableError
from core.i_key_value_store import IKeyValueStore
from core.logging_config import get_logger
from core.models.contact import ContactRating, RiskRating

logger = get_logger("store.ratings")

CONTACTS_KEY = "contacts"

# json.loads raises RecursionError on very deeply nested input
DECODE_ERRORS = (ValueError, KeyError, TypeError, RecursionError)


def decode_ratings(data: bytes) -> List[ContactRating]:
    """
    Strict decode of the "contacts" document.
    Raises any of DECODE_ERRORS.
    """
    items = json.loads(data.decode("utf-8"))
    if not isinstance(items, list):
        raise TypeError("contacts document must be a JSON array")
    return [ContactRating.from_dict(item) for item in items]


class RatingService:
    """
    Per-contact risk ratings, stored as the "contacts" JSON array.
    One entry per identifier; the last write wins.
    """

    def __init__(self, store: Optional[IKeyValueStore]):
        self.store = store

    def all_ratings(self) -> List[ContactRating]:
        if self.store is None:
            return []

        try:
            return self._read()
        except StoreUnavailableError as e:
            logger.warning("Ratings unreadable (%s); treating as none", e)
            return []

    def get_rating(self, contact_id: str) -> Optional[RiskRating]:
        """Stored rating, or None if this contact was never rated."""
        for entry in self.all_ratings():
            if entry.identifier == contact_id:
                return entry.rating
        return None

    def set_rating(self, contact_id: str, rating: int) -> None:
        if self.store is None:
            raise StoreUnavailableError("No store available to save ratings")

        new_entry = ContactRating(identifier=contact_id, rating=rating)

        # StoreUnavailableError propagates so other ratings are not overwritten
        ratings = self._read()
        for i, entry in enumerate(ratings):
            if entry.identifier == contact_id:
                ratings[i] = new_entry
                break
        else:
            ratings.append(new_entry)

        self._save_all(ratings)
        logger.info("Rated %s as %s", contact_id, new_entry.rating.name)

    def clear_rating(self, contact_id: str) -> None:
        self.set_rating(contact_id, RiskRating.NONE)

    def ratings_by_identifier(self) -> Dict[str, RiskRating]:
        return {entry.identifier: entry.rating for entry in self.all_ratings()}

    def _read(self) -> List[ContactRating]:
        """
        Stored ratings; an undecodable document counts as empty.
        Raises StoreUnavailableError when the store cannot be read.
        """
        data = self.store.get(CONTACTS_KEY)
        if data is None:
            return []

        try:
            return decode_ratings(data)
        except DECODE_ERRORS as e:
            logger.warning("Failed to decode contact ratings: %s", e)
            return []

    def _save_all(self, ratings: List[ContactRating]) -> None:
        payload = json.dumps([r.to_dict() for r in ratings]).encode("utf-8")
        self.store.set(CONTACTS_KEY, payload)

# core/models/contact.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class RiskRating(IntEnum):
    """
    Per-contact flag chosen on the rating screen.
    NONE doubles as "cleared" and "never rated".
    """
    NONE = 0
    CAUTION = 1
    HIGH_RISK = 2


@dataclass
class ContactRating:
    identifier: str
    rating: int = RiskRating.NONE

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValueError(f"rating must be an integer, got {self.rating!r}")
        try:
            self.rating = RiskRating(self.rating)
        except ValueError:
            raise ValueError(f"rating must be 0, 1 or 2, got {self.rating}") from None

    def to_dict(self) -> Dict[str, Any]:
        return {"identifier": self.identifier, "rating": int(self.rating)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContactRating":
        identifier = data["identifier"]
        if not isinstance(identifier, str):
            raise TypeError("identifier must be a string")
        return cls(identifier=identifier, rating=data["rating"])


class Contact:
    """An address-book entry shown on the rating screen."""

    def __init__(self, identifier: str, display_name: str, photo: Optional[bytes] = None):
        self.identifier = identifier      # phone number or conversation id
        self.display_name = display_name
        self.photo = photo                # raw image bytes, optional

    def __eq__(self, other):
        if not isinstance(other, Contact):
            return NotImplemented
        return (self.identifier, self.display_name, self.photo) == (
            other.identifier, other.display_name, other.photo,
        )

    def __repr__(self):
        return f"<Contact {self.display_name!r} id={self.identifier}>"

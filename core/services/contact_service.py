# core/services/contact_service.py

from typing import List, Optional

from core.database import Database
from core.models.contact import Contact


class ContactService:
    """Access to the `contacts` table (the address book behind the rating screen)."""

    def __init__(self, db: Database):
        self.db = db
        self.conn = db.get_connection()

    # ---------------------------------------------------
    # Add / update contact
    # ---------------------------------------------------
    def add_contact(self, contact: Contact) -> None:
        cur = self.conn.cursor()
        cur.execute(
            """
            INSERT INTO contacts (identifier, display_name, photo)
            VALUES (?, ?, ?)
            ON CONFLICT(identifier) DO UPDATE SET
                display_name = excluded.display_name,
                photo = excluded.photo
            """,
            (contact.identifier, contact.display_name, contact.photo),
        )
        self.conn.commit()

    def get_contact(self, identifier: str) -> Optional[Contact]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM contacts WHERE identifier = ?", (identifier,))
        row = cur.fetchone()
        if row is None:
            return None
        return self._row_to_contact(row)

    def delete_contact(self, identifier: str) -> None:
        cur = self.conn.cursor()
        cur.execute("DELETE FROM contacts WHERE identifier = ?", (identifier,))
        self.conn.commit()

    # ---------------------------------------------------
    # Listing
    # ---------------------------------------------------
    def list_contacts(self) -> List[Contact]:
        """All contacts, sorted case-insensitively by name."""
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM contacts")
        contacts = [self._row_to_contact(row) for row in cur.fetchall()]
        return sorted(contacts, key=lambda c: c.display_name.lower())

    def search(self, text: str) -> List[Contact]:
        """Case-insensitive name filter; empty text returns everyone."""
        contacts = self.list_contacts()
        needle = (text or "").strip().lower()
        if not needle:
            return contacts
        return [c for c in contacts if needle in c.display_name.lower()]

    @staticmethod
    def _row_to_contact(row) -> Contact:
        photo = row["photo"]
        return Contact(
            identifier=row["identifier"],
            display_name=row["display_name"],
            photo=bytes(photo) if photo is not None else None,
        )

# core/database.py
import os
import sqlite3

from core.errors import StoreUnavailableError
from core.logging_config import get_logger

logger = get_logger("store")


class Database:
    def __init__(self, db_path=None):
        if db_path is None:
            # Project root = parent directory of "core"
            base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            db_path = os.path.join(base_dir, "nodrunktext.db")
        self.db_path = str(db_path)

        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row
            self._create_tables()
        except sqlite3.Error as e:
            logger.error("Could not open database %s: %s", self.db_path, e)
            raise StoreUnavailableError(f"Cannot open store at {self.db_path}: {e}") from e

    def get_connection(self):
        return self.conn

    def close(self):
        self.conn.close()

    def _create_tables(self):
        cur = self.conn.cursor()

        # Shared key/value documents ("timeRanges", "contacts")
        cur.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value BLOB NOT NULL
            )
        """)

        # Address book used to populate the rating screen
        cur.execute("""
            CREATE TABLE IF NOT EXISTS contacts (
                identifier TEXT PRIMARY KEY,
                display_name TEXT NOT NULL,
                photo BLOB
            )
        """)

        self.conn.commit()

from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """
    Shared string-keyed store. Values are raw bytes (JSON documents in
    practice). Both the settings window and the send guard read and write
    through the same instance; last write wins.

    Implementations:
      - SqliteKeyValueStore
      - InMemoryKeyValueStore
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the stored value, or None if the key was never set."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Insert or replace the value under `key`."""
        raise NotImplementedError

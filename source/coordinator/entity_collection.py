"""In-memory copy of one table as last loaded from storage."""

import enum
from typing import List, Optional

from utilities.exceptions import StorageError
from utilities.logger import Logger

# Set up logger
logger = Logger.get_logger(__name__)


class LoadState(enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


class EntityCollection:
    """
    Owns the records of one entity between reloads.

    The item list is only ever replaced as a whole by a successful load. A
    failed load keeps the previous items and remembers the error.
    """

    def __init__(self, name: str, repository):
        self.name = name
        self.repository = repository
        self.items: List = []
        self.state = LoadState.UNLOADED
        self.error: Optional[StorageError] = None

    def load(self) -> bool:
        """Replace the items with a fresh read of the table."""
        self.state = LoadState.LOADING
        logger.debug(f"Loading {self.name}")
        try:
            items = self.repository.get_all()
        except StorageError as e:
            self.state = LoadState.LOAD_FAILED
            self.error = e
            logger.error(f"Loading {self.name} failed: {e}")
            return False

        self.items = items
        self.state = LoadState.LOADED
        self.error = None
        logger.info(f"Loaded {len(items)} {self.name}")
        return True

    def find(self, record_id):
        """Return the loaded record with the given key, or None."""
        for record in self.items:
            if self.repository.record_key(record) == record_id:
                return record
        return None

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

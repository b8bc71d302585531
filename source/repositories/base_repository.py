"""Shared storage access for the per-entity repositories."""

from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from utilities.config import get_db_url
from utilities.exceptions import (
    ConstraintViolation,
    RecordNotFound,
    ReferentialIntegrityViolation,
    StorageUnavailable,
)
from utilities.logger import Logger
from utilities.tools import create_db_engine

# Set up logger
logger = Logger.get_logger(__name__)


class BaseRepository:
    """
    Owns every storage operation for one table.

    Each public call opens its own session, performs a single operation and
    releases the session before returning, on success and on error alike.
    Driver errors are translated into the application's storage errors here
    and nowhere else.
    """

    model = None
    table_name = ""
    key_attribute = ""
    auto_key = False

    def __init__(self, db_url: str = None):
        self.db_url = db_url or get_db_url()
        self.engine = create_db_engine(self.db_url)

    def to_record(self, row):
        raise NotImplementedError

    def to_model(self, record):
        raise NotImplementedError

    def record_key(self, record):
        return getattr(record, self.key_attribute)

    @property
    def key_column(self):
        return getattr(self.model, self.key_attribute)

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with Session(self.engine) as session:
                yield session
        except IntegrityError as e:
            logger.error(f"{action} on '{self.table_name}' rejected: {e.orig}")
            if action == "delete":
                raise ReferentialIntegrityViolation(
                    f"Row in '{self.table_name}' is still referenced: {e.orig}"
                ) from e
            raise ConstraintViolation(
                f"Constraint violated on '{self.table_name}': {e.orig}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"{action} on '{self.table_name}' failed: {e}")
            raise StorageUnavailable(str(e)) from e

    def get_all(self) -> List:
        """Return every row of the table ordered by primary key."""
        with self._session("get_all") as session:
            try:
                rows = session.scalars(select(self.model).order_by(self.key_column)).all()
                return [self.to_record(row) for row in rows]
            except (LookupError, ValueError) as e:
                # a stored value the record types cannot represent
                logger.error(f"get_all on '{self.table_name}' read a bad row: {e}")
                raise StorageUnavailable(
                    f"Unreadable row in '{self.table_name}': {e}"
                ) from e

    def add(self, record):
        """Insert a record; auto-keyed records get the generated key back."""
        row = self.to_model(record)
        with self._session("add") as session:
            session.add(row)
            session.commit()
            if self.auto_key:
                setattr(record, self.key_attribute, getattr(row, self.key_attribute))
        logger.info(f"Inserted into '{self.table_name}': {record}")
        return record

    def update(self, record) -> None:
        """Replace every column of the row with the record's primary key."""
        key = self.record_key(record)
        with self._session("update") as session:
            row = session.get(self.model, key)
            if row is None:
                raise RecordNotFound(self.table_name, key)
            replacement = self.to_model(record)
            for column in self.model.__mapper__.column_attrs:
                if column.key == self.key_attribute:
                    continue
                setattr(row, column.key, getattr(replacement, column.key))
            session.commit()
        logger.info(f"Updated '{self.table_name}' id {key}: {record}")

    def delete(self, record_id) -> None:
        """Delete the row with the given primary key, if any."""
        with self._session("delete") as session:
            session.execute(delete(self.model).where(self.key_column == record_id))
            session.commit()
        logger.info(f"Deleted from '{self.table_name}' id {record_id}")

    def exists(self, record_id) -> bool:
        return self._has_value(self.key_column, record_id)

    def _has_value(self, column, value) -> bool:
        """Check whether at least one row has the given value in the column."""
        with self._session("exists") as session:
            found = session.scalar(select(column).where(column == value).limit(1))
            return found is not None

"""Engine creation with SQLite foreign key enforcement, database wait and schema setup."""

import time
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from utilities.models import Base
from utilities.logger import Logger

logger = Logger.get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_url: str) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement."""
    engine = create_engine(db_url)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def wait_for_database(engine: Engine, max_retries: int, delay: int) -> bool:
    """Wait for the database to be available."""
    for i in range(max_retries):
        try:
            with engine.connect():
                logger.info("Successfully connected to the database")
                return True
        except SQLAlchemyError:
            logger.info(
                f"Waiting for the database to be available... ({i+1}/{max_retries})"
            )
            time.sleep(delay)
    return False


def setup_database(engine: Engine) -> None:
    """Create the product, shop, courier and orders tables if missing."""
    Base.metadata.create_all(engine)
    logger.info(f"Schema ready: {', '.join(Base.metadata.tables)}")

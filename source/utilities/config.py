"""Configuration loaded from the environment and an optional .env file."""

import os
from dotenv import load_dotenv

# Load environment
load_dotenv(".env")

DEFAULT_DATA_DIR = "data"


def get_db_url() -> str:
    """Return the database connection URL.

    DB_URL takes precedence; otherwise the URL is assembled from the
    POSTGRES_* variables.
    """
    db_url = os.getenv("DB_URL")
    if db_url:
        return db_url

    # Database connection parameters
    db_user = os.getenv("POSTGRES_USER", "postgres")
    db_password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db_host = os.getenv("POSTGRES_HOST", "localhost")
    db_port = os.getenv("POSTGRES_PORT", "5432")
    db_name = os.getenv("POSTGRES_DB", "postgres")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def get_data_dir() -> str:
    """Return the directory holding CSV seed files."""
    return os.getenv("DATA_DIR", DEFAULT_DATA_DIR)

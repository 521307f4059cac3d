"""Database connection settings, passed explicitly to the SQL store."""

import os
from dataclasses import dataclass

DEFAULT_DATABASE_URL = "sqlite:///contacts.db"


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection descriptor for the contacts database.
    url is any SQLAlchemy URL, e.g. postgresql+psycopg2://user:pw@host/db.
    """

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    pool_pre_ping: bool = True

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        url = os.environ.get("CONTACTBOOK_DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL
        echo = os.environ.get("CONTACTBOOK_DATABASE_ECHO", "false").strip().lower() in {
            "1",
            "true",
            "yes",
        }
        return cls(url=url, echo=echo)

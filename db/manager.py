"""SQLite connections for the Centavo database file."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir


class DatabaseManager:
    """Opens connections to the database file named by the config.

    Attributes:
        db_path: Location of the SQLite file.
        migrations_dir: Directory holding the SQL migrations for this file.
    """

    def __init__(self, config: Config):
        self.db_path = config.db_path
        self.migrations_dir = get_migrations_dir()

    def exists(self) -> bool:
        """Whether the database file was created yet."""
        return self.db_path.exists()

    @contextmanager
    def connect(self):
        """Open a connection, creating the data directory on first use.

        Yields:
            sqlite3.Connection: Closed when the block exits.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

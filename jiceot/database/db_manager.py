import logging
import os
import sqlite3

from jiceot.utils.constants import DB_FILE, DUE_SOON_DAYS

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._migrate_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _migrate_schema(self, conn: sqlite3.Connection):
        """Idempotent ALTER TABLE for columns added after initial release."""
        cols = {row[1] for row in conn.execute("PRAGMA table_info(obligation_types)").fetchall()}
        if "start_year" not in cols:
            logger.info("Adding schedule start columns to obligation_types")
            conn.execute("ALTER TABLE obligation_types ADD COLUMN start_year INTEGER")
            conn.execute("ALTER TABLE obligation_types ADD COLUMN start_month INTEGER")

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS obligation_types (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                kind          TEXT    NOT NULL CHECK(kind IN ('bill','expense')),
                name          TEXT    NOT NULL,
                icon          TEXT    NOT NULL DEFAULT '',
                color         TEXT    NOT NULL DEFAULT '',
                cycle_months  INTEGER NOT NULL DEFAULT 0 CHECK(cycle_months >= 0),
                anchor_day    INTEGER NOT NULL DEFAULT 0 CHECK(anchor_day BETWEEN 0 AND 31),
                fixed_amount  TEXT    NOT NULL DEFAULT '',
                stopped       INTEGER NOT NULL DEFAULT 0,
                start_year    INTEGER,
                start_month   INTEGER CHECK(start_month IS NULL OR start_month BETWEEN 1 AND 12),
                created_at    TEXT    NOT NULL DEFAULT (datetime('now')),
                updated_at    TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS completions (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                type_id     INTEGER NOT NULL REFERENCES obligation_types(id) ON DELETE CASCADE,
                year        INTEGER NOT NULL,
                month       INTEGER NOT NULL CHECK(month BETWEEN 1 AND 12),
                amount      TEXT    NOT NULL,
                note        TEXT    NOT NULL DEFAULT '',
                created_at  TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE INDEX IF NOT EXISTS idx_obligation_types_kind ON obligation_types(kind);
            CREATE INDEX IF NOT EXISTS idx_completions_period    ON completions(type_id, year, month);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("currency_symbol", "$"),
            ("due_soon_days", str(DUE_SOON_DAYS)),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    def get_int_setting(self, key: str, default: int) -> int:
        """Integer setting; falls back to default when unset or malformed."""
        raw = self.get_setting(key, "")
        try:
            return int(raw)
        except ValueError:
            if raw:
                logger.warning("Ignoring malformed setting %s=%r", key, raw)
            return default

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens and initializes the DB, in db_folder when given."""
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        logger.info("Opening database at %s", path)
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None

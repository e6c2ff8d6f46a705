"""
SQLite archive of completed downloads, keyed by source url.
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from portal_fetcher.utils.log import log


@dataclass(frozen=True)
class DownloadedFileRecord:
    """A binary that was fetched and written to local storage."""

    source_url: str
    local_path: str
    downloaded_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_url": self.source_url,
            "local_path": self.local_path,
            "downloaded_at": self.downloaded_at.isoformat(),
        }


def _row_to_record(row: tuple) -> DownloadedFileRecord:
    return DownloadedFileRecord(
        source_url=row[0],
        local_path=row[1],
        downloaded_at=datetime.fromisoformat(row[2]),
    )


class DownloadArchive:
    """
    Stores one row per downloaded file.  ``file_url`` is UNIQUE, so the
    database, not the caller, rejects a second record for the same url.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._initialize_db()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=30)

    def _initialize_db(self) -> None:
        """Create the database file and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS downloaded_files (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    file_url TEXT NOT NULL UNIQUE,
                    local_path TEXT NOT NULL,
                    downloaded_at TIMESTAMP NOT NULL
                );
                """
            )
        log.debug("Archive database ready at %s", self.db_path)

    def find_by_source_url(self, url: str) -> DownloadedFileRecord | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT file_url, local_path, downloaded_at "
                "FROM downloaded_files WHERE file_url = ?",
                (url,),
            ).fetchone()
        return _row_to_record(row) if row else None

    def save(self, record: DownloadedFileRecord, replace: bool = False) -> None:
        """Insert *record*.

        Raises ``sqlite3.IntegrityError`` if the url is already archived,
        unless *replace* is set.
        """
        verb = "INSERT OR REPLACE" if replace else "INSERT"
        with self._get_connection() as conn:
            conn.execute(
                f"{verb} INTO downloaded_files "  # noqa: S608
                "(file_url, local_path, downloaded_at) VALUES (?, ?, ?)",
                (record.source_url, record.local_path,
                 record.downloaded_at.isoformat()),
            )

    def find_all(self) -> list[DownloadedFileRecord]:
        """Return every archived record, oldest first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT file_url, local_path, downloaded_at "
                "FROM downloaded_files ORDER BY id"
            ).fetchall()
        return [_row_to_record(r) for r in rows]

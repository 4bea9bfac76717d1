# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Read-only foundation catalog sources.

The catalog is filled by import jobs elsewhere; matching only reads it.
Two sources are supported:
    - FileCatalog: a JSON or CSV export of catalog rows.
    - CatalogDatabase: a local SQLite copy of the catalog.

Any failure to read a source is raised as CatalogUnavailableError.
"""

import csv
import json
import logging
import os
import sqlite3
import threading
from typing import Any, Dict, Iterable, List, Optional

from makemeup.shade_matching.errors import CatalogUnavailableError
from makemeup.shade_matching.models import CatalogEntry

logger = logging.getLogger(__name__)


def load_catalog_file(path: str) -> List[CatalogEntry]:
    """Load catalog entries from a JSON or CSV export.

    JSON files hold either a list of rows or an object with an "entries"
    list. CSV files need a header row with the catalog column names.

    Args:
        path: Path to a .json or .csv file.

    Returns:
        List of CatalogEntry, including entries without a hex.

    Raises:
        CatalogUnavailableError: If the file cannot be read or parsed.
    """
    ext = os.path.splitext(path)[1].lower()
    try:
        if ext == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                data = data.get('entries', [])
            if not isinstance(data, list):
                raise ValueError("expected a list of catalog rows")
            rows = data
        elif ext == '.csv':
            with open(path, 'r', encoding='utf-8', newline='') as f:
                rows = list(csv.DictReader(f))
        else:
            raise ValueError(f"unsupported catalog format '{ext}'")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load catalog {path}: {e}")
        raise CatalogUnavailableError(f"Catalog unavailable: {e}") from e

    entries = [CatalogEntry.from_row(row) for row in rows if isinstance(row, dict)]
    logger.debug(f"Loaded {len(entries)} catalog rows from {path}")
    return entries


class FileCatalog:
    """Catalog backed by a JSON or CSV export, loaded once."""

    def __init__(self, path: str):
        self.path = path
        self._entries: Optional[List[CatalogEntry]] = None
        self._lock = threading.Lock()

    def get_entries(self, limit: Optional[int] = None) -> List[CatalogEntry]:
        """Entries with a hex, up to `limit` (None or 0 = all)."""
        with self._lock:
            if self._entries is None:
                self._entries = [e for e in load_catalog_file(self.path) if e.hex]
            entries = self._entries
        return entries[:limit] if limit else list(entries)


class CatalogDatabase:
    """SQLite copy of the foundation catalog.

    Thread-safety: Uses RLock to serialize all database operations.
    """

    def __init__(self, db_path: str):
        """Open the database and create the schema if needed.

        Args:
            db_path: Path to the SQLite database file.

        Raises:
            CatalogUnavailableError: If the database cannot be opened.
        """
        self.db_path = db_path
        self._lock = threading.RLock()
        try:
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            self._create_schema()
        except sqlite3.Error as e:
            logger.error(f"Failed to open catalog database {db_path}: {e}")
            raise CatalogUnavailableError(f"Catalog unavailable: {e}") from e

    def _create_schema(self):
        """Create database tables if they don't exist."""
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS shades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    brand TEXT NOT NULL,
                    product TEXT NOT NULL,
                    shade_name TEXT NOT NULL DEFAULT '',
                    specific TEXT NOT NULL DEFAULT '',
                    hex TEXT,
                    url TEXT,
                    image TEXT,
                    UNIQUE(brand, product, shade_name, specific)
                )
            ''')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_shades_brand ON shades(brand)')
            self.conn.commit()

    def close(self):
        """Close the database connection.

        Idempotent: safe to call multiple times.
        """
        with self._lock:
            if self.conn:
                self.conn.close()
                self.conn = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def add_entries(self, entries: Iterable[CatalogEntry]):
        """Insert or update catalog entries in a single transaction.

        Args:
            entries: CatalogEntry objects to store.
        """
        rows = [
            (
                e.brand, e.product, e.shade_name or '', e.specific or '',
                e.hex, e.url, e.image,
            )
            for e in entries
        ]
        if not rows:
            return

        with self._lock:
            cursor = self.conn.cursor()
            cursor.executemany('''
                INSERT INTO shades (
                    brand, product, shade_name, specific, hex, url, image
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(brand, product, shade_name, specific) DO UPDATE SET
                    hex = excluded.hex,
                    url = excluded.url,
                    image = excluded.image
            ''', rows)
            self.conn.commit()

    def get_entries(self, limit: Optional[int] = None) -> List[CatalogEntry]:
        """Read entries that have a hex.

        Args:
            limit: Maximum number of rows. None or 0 = all.

        Returns:
            List of CatalogEntry in insertion order.

        Raises:
            CatalogUnavailableError: If the query fails.
        """
        query = "SELECT * FROM shades WHERE hex IS NOT NULL AND hex != '' ORDER BY id"
        params: tuple = ()
        if limit:
            query += ' LIMIT ?'
            params = (int(limit),)

        with self._lock:
            try:
                cursor = self.conn.cursor()
                cursor.execute(query, params)
                rows = cursor.fetchall()
            except (sqlite3.Error, AttributeError) as e:
                logger.error(f"Catalog query failed: {e}")
                raise CatalogUnavailableError(f"Catalog unavailable: {e}") from e

        return [self._row_to_entry(row) for row in rows]

    def get_brands(self) -> List[str]:
        """Distinct brand names, sorted."""
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute('SELECT DISTINCT brand FROM shades ORDER BY brand')
            return [row['brand'] for row in cursor.fetchall()]

    def count(self) -> int:
        """Total number of stored shades, with or without a hex."""
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM shades')
            return cursor.fetchone()[0]

    def clear(self):
        """Delete every stored shade."""
        with self._lock:
            self.conn.execute('DELETE FROM shades')
            self.conn.commit()

    def _row_to_entry(self, row: sqlite3.Row) -> CatalogEntry:
        return CatalogEntry(
            brand=row['brand'],
            product=row['product'],
            shade_name=row['shade_name'],
            hex=row['hex'],
            url=row['url'],
            image=row['image'],
            specific=row['specific'] or None,
        )


def open_catalog_source(path: str):
    """Open the catalog source matching a path's extension.

    Args:
        path: .json/.csv export or .db/.sqlite/.sqlite3 database.

    Returns:
        FileCatalog or CatalogDatabase.

    Raises:
        CatalogUnavailableError: If the path does not exist or the format
            is unknown.
    """
    if not os.path.exists(path):
        raise CatalogUnavailableError(f"Catalog unavailable: {path} not found")

    ext = os.path.splitext(path)[1].lower()
    if ext in ('.json', '.csv'):
        return FileCatalog(path)
    if ext in ('.db', '.sqlite', '.sqlite3'):
        return CatalogDatabase(path)
    raise CatalogUnavailableError(f"Catalog unavailable: unsupported format '{ext}'")


def rows_to_entries(rows: Iterable[Dict[str, Any]]) -> List[CatalogEntry]:
    """Convert upstream rows to CatalogEntry objects."""
    return [CatalogEntry.from_row(row) for row in rows]

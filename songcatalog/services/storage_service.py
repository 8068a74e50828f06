import asyncio
import logging
from contextlib import contextmanager
from typing import List, Optional

import asyncpg

from songcatalog.core.errors import NotFoundError, PersistenceError
from songcatalog.core.query import QueryBuilder
from songcatalog.core.verses import DEFAULT_LIMIT, DEFAULT_OFFSET, parse_or_default
from songcatalog.schemas.models import SongRecord, SongSummary

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS songs (
    id SERIAL PRIMARY KEY,
    group_name TEXT NOT NULL,
    song_name TEXT NOT NULL,
    release_date TEXT NOT NULL DEFAULT '',
    text TEXT NOT NULL DEFAULT '',
    link TEXT NOT NULL DEFAULT '',
    album_cover_url TEXT NOT NULL DEFAULT '',
    UNIQUE (group_name, song_name)
)
"""

# Conflicts only ever rewrite the enrichment columns; the natural key stays as first written.
UPSERT = """
INSERT INTO songs (group_name, song_name, release_date, text, link, album_cover_url)
VALUES ($1, $2, $3, $4, $5, $6)
ON CONFLICT (group_name, song_name) DO UPDATE SET
    release_date = EXCLUDED.release_date,
    text = EXCLUDED.text,
    link = EXCLUDED.link,
    album_cover_url = EXCLUDED.album_cover_url
RETURNING id
"""

SELECT_SONG = "SELECT id, group_name, song_name, release_date, text, link, album_cover_url FROM songs WHERE id = $1"
SELECT_TEXT = "SELECT text FROM songs WHERE id = $1"
DELETE_SONG = "DELETE FROM songs WHERE id = $1"

# SERIAL ids are int4; LIMIT and OFFSET take int8.
MAX_ID = 2**31 - 1
MAX_BIGINT = 2**63 - 1

STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@contextmanager
def _store_errors(action: str, public_message: str):
    """Re-raise driver, connection and timeout errors as PersistenceError."""
    try:
        yield
    except STORE_ERRORS as e:
        logger.error(f"[store] {action} failed: {type(e).__name__}: {e}")
        raise PersistenceError(f"{action} failed: {e!r}", public_message=public_message) from e


def _valid_id(song_id: int) -> bool:
    return 1 <= song_id <= MAX_ID


def _clamp(value: int) -> int:
    return min(max(value, 0), MAX_BIGINT)


def _to_record(row) -> SongRecord:
    return SongRecord(
        id=row["id"],
        group=row["group_name"],
        song=row["song_name"],
        release_date=row["release_date"],
        text=row["text"],
        link=row["link"],
        album_cover_url=row["album_cover_url"],
    )


class SongStore:
    """
    Persistence for song records on an asyncpg pool.

    The pool is owned by the caller; every statement runs with ``timeout``.
    """

    def __init__(self, pool: asyncpg.Pool, timeout: float = 10.0):
        self.pool = pool
        self.timeout = timeout

    async def ensure_schema(self) -> None:
        with _store_errors("create schema", "Failed to prepare database"):
            await self.pool.execute(SCHEMA, timeout=self.timeout)

    async def upsert(self, record: SongRecord) -> int:
        """
        Insert the record, or refresh the enrichment fields of the existing
        row with the same (group, song).

        Returns:
            The row id, existing or newly assigned.
        """
        with _store_errors(f"upsert {record.group} - {record.song}", "Failed to save song"):
            song_id = await self.pool.fetchval(
                UPSERT,
                record.group, record.song,
                record.release_date, record.text, record.link, record.album_cover_url,
                timeout=self.timeout,
            )
        logger.info(f"Upserted {record.group} - {record.song} as ID {song_id}")
        return song_id

    async def get(self, song_id: int) -> SongRecord:
        if not _valid_id(song_id):
            raise NotFoundError(song_id)
        with _store_errors(f"fetch song {song_id}", "Failed to fetch song"):
            row = await self.pool.fetchrow(SELECT_SONG, song_id, timeout=self.timeout)
        if row is None:
            raise NotFoundError(song_id)
        return _to_record(row)

    async def get_text(self, song_id: int) -> str:
        if not _valid_id(song_id):
            raise NotFoundError(song_id)
        with _store_errors(f"fetch text of song {song_id}", "Failed to fetch song"):
            row = await self.pool.fetchrow(SELECT_TEXT, song_id, timeout=self.timeout)
        if row is None:
            raise NotFoundError(song_id)
        return row["text"]

    async def list(self, group: Optional[str] = None, song: Optional[str] = None,
                   limit: Optional[str] = None, offset: Optional[str] = None) -> List[SongSummary]:
        query = QueryBuilder("SELECT id, group_name, song_name FROM songs")
        if group:
            query.where_contains("group_name", group)
        if song:
            query.where_contains("song_name", song)
        query.order_by("id")
        query.limit(_clamp(parse_or_default(limit, DEFAULT_LIMIT)))
        query.offset(_clamp(parse_or_default(offset, DEFAULT_OFFSET)))
        sql, args = query.build()

        with _store_errors("list songs", "Failed to fetch songs"):
            rows = await self.pool.fetch(sql, *args, timeout=self.timeout)
        return [SongSummary(id=r["id"], group=r["group_name"], song=r["song_name"]) for r in rows]

    async def delete(self, song_id: int) -> None:
        """Delete by id. Deleting an id that does not exist is not an error."""
        if not _valid_id(song_id):
            logger.info(f"Delete song {song_id}: no such id")
            return
        with _store_errors(f"delete song {song_id}", "Failed to delete song"):
            status = await self.pool.execute(DELETE_SONG, song_id, timeout=self.timeout)
        logger.info(f"Delete song {song_id}: {status}")

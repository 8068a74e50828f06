"""
Shared fakes for the catalog tests: a scripted search provider and an
in-memory store that keeps the (group, song) uniqueness rule.
"""
import itertools
from typing import Dict, List, Optional, Tuple

import pytest

from songcatalog.core.config import Settings
from songcatalog.core.errors import NotFoundError, PersistenceError, ProviderError
from songcatalog.main import create_app
from songcatalog.schemas.models import SongRecord, SongSummary
from songcatalog.services.matcher import MatchResolver
from songcatalog.services.providers.base import BaseProvider, Candidate, DateComponents, FullRecord
from songcatalog.services.song_service import SongService


def make_candidate(artist: str = "Muse", title: str = "Supermassive Black Hole", provider_id: str = "1",
                   **overrides) -> Candidate:
    fields = dict(
        provider_id=provider_id,
        artist_name=artist,
        title=title,
        url=f"https://genius.com/{provider_id}-lyrics",
        cover_image_url=f"https://images.genius.com/{provider_id}.jpg",
        release_date_components=DateComponents(year=2006, month=6, day=19),
        release_date_display="June 19, 2006",
        lyrics_state="complete",
    )
    fields.update(overrides)
    return Candidate(**fields)


class FakeProvider(BaseProvider):
    def __init__(self, candidates: Optional[List[Candidate]] = None, lyrics: Optional[Dict[str, str]] = None,
                 search_error: Optional[Exception] = None, fetch_error: Optional[Exception] = None):
        super().__init__(client=None)
        self.candidates = candidates or []
        self.lyrics = lyrics or {}
        self.search_error = search_error
        self.fetch_error = fetch_error
        self.queries: List[str] = []
        self.fetched: List[str] = []

    @property
    def provider_name(self) -> str:
        return "Fake"

    async def search(self, query: str) -> List[Candidate]:
        self.queries.append(query)
        if self.search_error:
            raise self.search_error
        return list(self.candidates)

    async def fetch_full_record(self, provider_id: str) -> FullRecord:
        self.fetched.append(provider_id)
        if self.fetch_error:
            raise self.fetch_error
        if provider_id not in self.lyrics:
            raise ProviderError(f"no lyrics for {provider_id}")
        return FullRecord(provider_id=provider_id, lyrics=self.lyrics[provider_id])


class InMemoryStore:
    """Mirrors SongStore's behaviour without a database."""

    def __init__(self, fail_with: Optional[Exception] = None):
        self.rows: Dict[int, SongRecord] = {}
        self.keys: Dict[Tuple[str, str], int] = {}
        self.ids = itertools.count(1)
        self.fail_with = fail_with
        self.upserts = 0

    def _check(self):
        if self.fail_with:
            raise PersistenceError(f"store down: {self.fail_with!r}")

    async def upsert(self, record: SongRecord) -> int:
        self._check()
        self.upserts += 1
        key = (record.group, record.song)
        song_id = self.keys.get(key)
        if song_id is None:
            song_id = next(self.ids)
            self.keys[key] = song_id
        self.rows[song_id] = record.model_copy(update={"id": song_id})
        return song_id

    async def get(self, song_id: int) -> SongRecord:
        self._check()
        if song_id not in self.rows:
            raise NotFoundError(song_id)
        return self.rows[song_id]

    async def get_text(self, song_id: int) -> str:
        return (await self.get(song_id)).text

    async def list(self, group=None, song=None, limit=None, offset=None) -> List[SongSummary]:
        self._check()
        rows = [r for r in self.rows.values()
                if (not group or group.lower() in r.group.lower())
                and (not song or song.lower() in r.song.lower())]
        return [SongSummary(id=r.id, group=r.group, song=r.song) for r in rows]

    async def delete(self, song_id: int) -> None:
        self._check()
        record = self.rows.pop(song_id, None)
        if record:
            self.keys.pop((record.group, record.song), None)


@pytest.fixture
def candidate_factory():
    return make_candidate


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def provider():
    candidate = make_candidate()
    return FakeProvider([candidate], lyrics={candidate.provider_id: "Oh baby don't you know I suffer\n\nYou set my soul alight"})


@pytest.fixture
def service(provider, store):
    return SongService(provider=provider, store=store, resolver=MatchResolver(), provider_timeout=1.0)


@pytest.fixture
def settings():
    return Settings(log_level="WARNING")


@pytest.fixture
def app(settings, service):
    return create_app(settings=settings, service=service)

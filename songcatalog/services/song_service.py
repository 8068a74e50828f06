import asyncio
import logging
from typing import List, Optional

from songcatalog.core.errors import NoMatchError, ProviderError
from songcatalog.core.verses import paginate, split_verses
from songcatalog.schemas.models import SongRecord, SongSummary
from songcatalog.services.matcher import MatchResolver
from songcatalog.services.normalizer import RecordNormalizer
from songcatalog.services.providers.base import BaseProvider
from songcatalog.services.storage_service import SongStore

logger = logging.getLogger(__name__)


class SongService:
    """
    High-level service for the catalog.
    Coordinators:
    - Search / full record -> via the provider
    - Candidate selection -> via MatchResolver
    - Record shaping -> via RecordNormalizer
    - Persistence -> via SongStore

    Provider failures are surfaced immediately. Nothing is retried here;
    callers that want retries wrap ``add_or_update``.
    """

    def __init__(self, provider: BaseProvider, store: SongStore, resolver: Optional[MatchResolver] = None,
                 provider_timeout: float = 15.0):
        self.provider = provider
        self.store = store
        self.resolver = resolver or MatchResolver()
        self.normalizer = RecordNormalizer()
        self.provider_timeout = provider_timeout

    async def _call_provider(self, coro, what: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.provider_timeout)
        except asyncio.TimeoutError:
            raise ProviderError(f"{self.provider.provider_name} {what} timed out after {self.provider_timeout}s")

    async def enrich(self, group: str, song: str) -> SongRecord:
        """
        Resolve (group, song) against the provider and build the enriched record.

        Raises:
            NoMatchError: no candidate passes the match policy.
            ProviderError: search or full-record fetch failed.
        """
        query = f"{group} {song}"
        candidates = await self._call_provider(self.provider.search(query), f"search for {query!r}")

        candidate = self.resolver.resolve(group, song, candidates)
        if candidate is None:
            raise NoMatchError(group, song, f"No results found for {song} by {group} "
                                            f"({len(candidates)} candidates rejected)")

        try:
            full_record = await self._call_provider(
                self.provider.fetch_full_record(candidate.provider_id),
                f"full record {candidate.provider_id}",
            )
        except ProviderError as e:
            raise ProviderError(f"Enrichment of {group} - {song} failed: {e.detail}") from e

        return self.normalizer.normalize(group, song, candidate, full_record)

    async def add_or_update(self, group: str, song: str) -> int:
        """Enrich and upsert. Returns the persisted id."""
        logger.debug(f"Enriching {group} - {song}")
        record = await self.enrich(group, song)
        return await self.store.upsert(record)

    async def get_song(self, song_id: int) -> SongRecord:
        return await self.store.get(song_id)

    async def list_songs(self, group: Optional[str] = None, song: Optional[str] = None,
                         limit: Optional[str] = None, offset: Optional[str] = None) -> List[SongSummary]:
        return await self.store.list(group=group, song=song, limit=limit, offset=offset)

    async def get_verses(self, song_id: int, limit: Optional[str] = None, offset: Optional[str] = None) -> List[str]:
        verses = split_verses(await self.store.get_text(song_id))
        start, end = paginate(len(verses), limit, offset)
        return verses[start:end]

    async def delete_song(self, song_id: int) -> None:
        await self.store.delete(song_id)

from abc import ABC, abstractmethod
from typing import List, Optional
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class DateComponents:
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None


@dataclass(frozen=True)
class Candidate:
    """One search hit, not yet confirmed as the requested song."""
    provider_id: str
    artist_name: str
    title: str
    url: str = ""
    cover_image_url: str = ""
    release_date_components: Optional[DateComponents] = None
    release_date_display: str = ""
    lyrics_state: str = ""


@dataclass(frozen=True)
class FullRecord:
    provider_id: str
    lyrics: str


class BaseProvider(ABC):
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def search(self, query: str) -> List[Candidate]:
        """Free-text search. Results keep the provider's relevance order."""
        pass

    @abstractmethod
    async def fetch_full_record(self, provider_id: str) -> FullRecord:
        """Fetch the complete record (lyrics body) for one candidate."""
        pass

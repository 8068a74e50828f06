import copy
import logging
from typing import Any, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from songcatalog.core.errors import ProviderError
from songcatalog.services.providers.base import BaseProvider, Candidate, DateComponents, FullRecord

logger = logging.getLogger(__name__)


class GeniusProvider(BaseProvider):
    """
    Genius search and lyrics.

    The public API covers search and song metadata; the lyrics body is only
    published on the song page, so the full-record fetch reads it from there.
    """
    NAME = "Genius"

    def __init__(self, client: httpx.AsyncClient, api_token: str, base_url: str = "https://api.genius.com"):
        super().__init__(client)
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
        }

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings) -> "GeniusProvider":
        settings.require("genius_api_token")
        return cls(client, settings.genius_api_token, settings.genius_api_url)

    @property
    def provider_name(self) -> str:
        return self.NAME

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.get(url, params=params, headers=self.headers)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Genius request timed out: {path} - {e!r}")
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"Genius returned HTTP {e.response.status_code} for {path}")
        except httpx.HTTPError as e:
            raise ProviderError(f"Genius request failed: {path} - {e!r}")
        except ValueError as e:
            raise ProviderError(f"Genius returned a non-JSON body for {path}: {e}")

        if not isinstance(data, dict) or not isinstance(data.get("response"), dict):
            raise ProviderError(f"Unexpected Genius payload for {path}")
        return data["response"]

    async def search(self, query: str) -> List[Candidate]:
        logger.info(f"Searching Genius for: {query}")
        body = await self._get_json("/search", params={"q": query})

        results = []
        for hit in body.get("hits") or []:
            if not isinstance(hit, dict):
                continue
            if hit.get("type", "song") != "song":
                continue
            result = hit.get("result")
            if isinstance(result, dict):
                results.append(self._to_candidate(result))

        logger.info(f"Genius returned {len(results)} candidates")
        return results

    async def fetch_full_record(self, provider_id: str) -> FullRecord:
        body = await self._get_json(f"/songs/{provider_id}", params={"text_format": "plain"})
        song = body.get("song")
        page_url = song.get("url") if isinstance(song, dict) else None
        if not page_url:
            raise ProviderError(f"Genius song {provider_id} has no page URL")

        try:
            response = await self.client.get(page_url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Genius lyrics page timed out: {page_url} - {e!r}")
        except httpx.HTTPError as e:
            raise ProviderError(f"Failed to fetch Genius lyrics page {page_url}: {e!r}")

        lyrics = extract_lyrics(response.text)
        if not lyrics:
            raise ProviderError(f"No lyrics found on Genius page for song {provider_id}")
        return FullRecord(provider_id=str(provider_id), lyrics=lyrics)

    @staticmethod
    def _to_candidate(result: Dict[str, Any]) -> Candidate:
        artist = result.get("primary_artist")
        if not isinstance(artist, dict):
            artist = {}
        components = result.get("release_date_components")
        date_components = None
        if isinstance(components, dict):
            date_components = DateComponents(
                year=components.get("year"),
                month=components.get("month"),
                day=components.get("day"),
            )

        return Candidate(
            provider_id=str(result.get("id", "")),
            artist_name=artist.get("name") or "",
            title=result.get("title") or "",
            url=result.get("url") or "",
            cover_image_url=result.get("song_art_image_url") or "",
            release_date_components=date_components,
            release_date_display=result.get("release_date_for_display") or "",
            lyrics_state=result.get("lyrics_state") or "",
        )


def extract_lyrics(html: str) -> str:
    """
    Pull the lyrics body out of a Genius song page.

    Each lyrics container becomes one block; blocks are joined by a blank
    line so they split back into verses.
    """
    soup = BeautifulSoup(html, "html.parser")
    containers = soup.select('div[data-lyrics-container="true"]')

    parts: List[str] = []
    for container in containers:
        container = copy.copy(container)
        for excluded in container.select('[data-exclude-from-selection="true"]'):
            excluded.decompose()
        for br in container.find_all("br"):
            br.replace_with("\n")

        text = container.get_text(separator="", strip=False)
        text = "\n".join(line.rstrip() for line in text.splitlines())
        if text.strip():
            parts.append(text.strip())

    return "\n\n".join(parts)

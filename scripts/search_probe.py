"""
Runs a provider search and the match policies without touching the database.
Usage: GENIUS_API_TOKEN=... python scripts/search_probe.py "Group" "Song"
"""
import asyncio
import sys
import logging

from songcatalog.core.config import MatchPolicy, Settings
from songcatalog.core.http_client import create_http_client
from songcatalog.services.matcher import MatchResolver
from songcatalog.services.normalizer import format_release_date
from songcatalog.services.providers import ProviderFactory

logging.basicConfig(level=logging.INFO)


async def main(group: str, song: str):
    settings = Settings.from_env()
    async with create_http_client(settings.provider_timeout) as client:
        provider = ProviderFactory.create(settings.search_provider, client, settings)

        print(f"Searching for: {group} - {song}")
        candidates = await provider.search(f"{group} {song}")
        if not candidates:
            print("No results found.")
            return

        print(f"Found {len(candidates)} results.")
        for c in candidates:
            print(f"  [{c.provider_id}] {c.artist_name} - {c.title} | {format_release_date(c) or '-'} | {c.lyrics_state or '-'}")

        for policy in MatchPolicy:
            chosen = MatchResolver(policy).resolve(group, song, candidates)
            print(f"{policy.value}: {chosen.provider_id if chosen else 'no match'}")

        chosen = MatchResolver(settings.match_policy).resolve(group, song, candidates)
        if chosen:
            record = await provider.fetch_full_record(chosen.provider_id)
            print("\n=== Lyrics (Preview) ===")
            print(record.lyrics[:400])


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python scripts/search_probe.py 'Group' 'Song'")
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2]))

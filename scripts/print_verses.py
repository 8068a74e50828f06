"""
Quick script to add a song through a running server and print its verses.
Usage: python scripts/print_verses.py "Group" "Song"
"""
import asyncio
import sys
import os
import httpx

PORT = os.environ.get("PORT", "8080")


async def fetch_and_print(group: str, song: str):
    base = f"http://127.0.0.1:{PORT}"

    print(f"Fetching: {group} - {song}...")

    async with httpx.AsyncClient(timeout=60, trust_env=False) as client:
        resp = await client.post(f"{base}/songs", json={"group": group, "song": song})

        if resp.status_code != 200:
            print(f"Error: HTTP {resp.status_code}")
            print(f"Response: {resp.text[:500]}")
            return

        song_id = resp.json()["id"]
        detail = (await client.get(f"{base}/songs/{song_id}")).json()
        verses = (await client.get(f"{base}/songs/{song_id}/verses", params={"limit": 1000})).json()

    print(f"\n{'='*50}")
    print(f"{group} - {song} ({detail.get('release_date') or 'date unknown'})")
    print(f"{'='*50}\n")

    for verse in verses:
        print(verse)
        print()

    print(f"{'='*50}")
    print(f"Source: {detail.get('link')}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python scripts/print_verses.py 'Group' 'Song'")
        sys.exit(1)

    asyncio.run(fetch_and_print(sys.argv[1], sys.argv[2]))

import httpx
import asyncio
import os

PORT = os.environ.get("PORT", "8080")


async def test_api():
    base = f"http://127.0.0.1:{PORT}"
    payload = {
        "group": "Muse",
        "song": "Supermassive Black Hole"
    }

    print(f"Sending request to {base}/songs with {payload}...")
    try:
        async with httpx.AsyncClient(trust_env=False) as client:
            response = await client.post(f"{base}/songs", json=payload, timeout=30.0)
            print(f"Status Code: {response.status_code}")
            if response.status_code != 200:
                print(f"Error Response: {response.text}")
                return

            song_id = response.json()["id"]
            detail = (await client.get(f"{base}/songs/{song_id}")).json()
            verses = (await client.get(f"{base}/songs/{song_id}/verses", params={"limit": 2})).json()

            if detail.get("text") and detail.get("link"):
                print("\n✅ Verification SUCCESS: Song stored and enriched.")
                print(f"Release date: {detail.get('release_date')}")
                print(f"First verses: {verses}")
            else:
                print("\n❌ Verification FAILED: Stored record is missing enrichment fields.")
    except httpx.HTTPError as e:
        print(f"Request Failed: {e}")


if __name__ == "__main__":
    asyncio.run(test_api())

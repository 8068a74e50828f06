"""
HTTP client factory for outbound provider calls.

One ``httpx.AsyncClient`` is created per application and handed to the
providers, so connections are pooled across requests.
"""

import httpx


def create_http_client(timeout: float = 15.0) -> httpx.AsyncClient:
    """
    Build the pooled client used for provider traffic.

    - HTTP/2 for multiplexing
    - Connection pooling (20 keepalive, 40 max)
    - Custom User-Agent
    """
    limits = httpx.Limits(
        max_keepalive_connections=20,
        max_connections=40
    )
    return httpx.AsyncClient(
        http2=True,  # requires httpx[http2]
        timeout=timeout,
        limits=limits,
        follow_redirects=True,
        headers={
            'User-Agent': 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) SongCatalog/1.0'
        }
    )

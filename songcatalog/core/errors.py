"""
Error taxonomy for the song catalog.

Every error carries a stable ``public_message`` that is safe to put in a
response body, and a ``status_code`` the HTTP layer maps it to. The full
lower-layer detail only goes to the logs.
"""

from typing import Optional


class SongCatalogError(Exception):
    """Base class for catalog errors."""
    status_code = 500
    public_message = "Internal error"

    def __init__(self, detail: str = "", public_message: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message
        if public_message:
            self.public_message = public_message


class ConfigurationError(SongCatalogError):
    """Required setting missing or invalid. Raised at startup only."""
    public_message = "Service misconfigured"


class ValidationError(SongCatalogError):
    status_code = 400
    public_message = "Invalid input"


class NoMatchError(SongCatalogError):
    """The provider returned nothing the match policy accepts."""
    status_code = 404
    public_message = "No results found for the given song and group"

    def __init__(self, group: str, song: str, detail: str = ""):
        super().__init__(detail or f"No acceptable candidate for {song!r} by {group!r}")
        self.group = group
        self.song = song


class ProviderError(SongCatalogError):
    """Search or full-record fetch failed, timed out, or returned garbage."""
    status_code = 502
    public_message = "Upstream lyrics provider failed"


class PersistenceError(SongCatalogError):
    status_code = 500
    public_message = "Failed to save song"


class NotFoundError(SongCatalogError):
    status_code = 404
    public_message = "Song not found"

    def __init__(self, song_id: int, detail: str = ""):
        super().__init__(detail or f"Song with ID {song_id} not found")
        self.song_id = song_id

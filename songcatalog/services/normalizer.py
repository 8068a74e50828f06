import logging
from typing import Optional

from songcatalog.core.errors import ProviderError
from songcatalog.schemas.models import SongRecord
from songcatalog.services.providers.base import Candidate, FullRecord

logger = logging.getLogger(__name__)


def format_release_date(candidate: Candidate) -> str:
    """
    Release date for storage.

    A full year/month/day triple is rendered as ``YYYY-MM-DD``; otherwise the
    provider's display string is passed through untouched; otherwise empty.
    """
    parts = candidate.release_date_components
    if parts and parts.year and parts.month and parts.day:
        return f"{parts.year:04d}-{parts.month:02d}-{parts.day:02d}"
    return candidate.release_date_display or ""


class RecordNormalizer:
    """Maps a selected candidate and its full record onto a SongRecord."""

    @staticmethod
    def normalize(group: str, song: str, candidate: Candidate, full_record: Optional[FullRecord]) -> SongRecord:
        """
        Build the record to persist.

        The lyrics come from the full-record fetch only. A missing fetch, or
        one with an empty body, fails the enrichment instead of storing a
        placeholder.
        """
        if full_record is None:
            raise ProviderError(f"No full record fetched for {song!r} by {group!r} (candidate {candidate.provider_id})")
        if not full_record.lyrics:
            raise ProviderError(f"Empty lyrics for {song!r} by {group!r} (candidate {candidate.provider_id})")

        record = SongRecord(
            group=group,
            song=song,
            release_date=format_release_date(candidate),
            text=full_record.lyrics,
            link=candidate.url,
            album_cover_url=candidate.cover_image_url,
        )
        if not record.is_complete:
            logger.debug(f"Normalized record for {group} - {song} is incomplete")
        return record

import logging
from typing import Optional, Sequence

from songcatalog.core.config import MatchPolicy
from songcatalog.services.normalizer import format_release_date
from songcatalog.services.providers.base import Candidate

logger = logging.getLogger(__name__)


class MatchResolver:
    """
    Picks one candidate out of a provider's ranked search results.

    Candidates are walked in the order the provider returned them and the
    first acceptable one wins, so provider ranking decides between several
    acceptable hits.

    strict: artist name must equal ``group`` exactly (case-sensitive) and the
        release date, lyrics state, URL and cover image must all be present.
    loose: artist contains ``group`` and title contains ``song``,
        case-insensitive, with no completeness requirement.
    """

    def __init__(self, policy: MatchPolicy = MatchPolicy.STRICT):
        self.policy = MatchPolicy(policy)

    def resolve(self, group: str, song: str, candidates: Sequence[Candidate]) -> Optional[Candidate]:
        """Return the first acceptable candidate, or None when nothing qualifies."""
        accept = self._accept_strict if self.policy == MatchPolicy.STRICT else self._accept_loose

        for position, candidate in enumerate(candidates):
            if accept(group, song, candidate):
                logger.info(f"Matched {group} - {song} to {candidate.artist_name} - {candidate.title} "
                            f"(#{position}, id {candidate.provider_id}, policy {self.policy.value})")
                return candidate

        logger.info(f"No {self.policy.value} match among {len(candidates)} candidates for {group} - {song}")
        return None

    @staticmethod
    def _accept_strict(group: str, song: str, candidate: Candidate) -> bool:
        if candidate.artist_name != group:
            return False
        return all([
            format_release_date(candidate),
            candidate.lyrics_state,
            candidate.url,
            candidate.cover_image_url,
        ])

    @staticmethod
    def _accept_loose(group: str, song: str, candidate: Candidate) -> bool:
        return (group.lower() in candidate.artist_name.lower()
                and song.lower() in candidate.title.lower())

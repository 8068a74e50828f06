import pytest

from songcatalog.core.config import MatchPolicy
from songcatalog.services.matcher import MatchResolver
from songcatalog.services.providers.base import DateComponents

from conftest import make_candidate


@pytest.fixture
def strict():
    return MatchResolver(MatchPolicy.STRICT)


def test_empty_candidate_list_is_no_match(strict):
    assert strict.resolve("Muse", "Uprising", []) is None


def test_no_exact_artist_is_no_match(strict):
    candidates = [
        make_candidate(artist="muse", provider_id="1"),
        make_candidate(artist="Muse & Friends", provider_id="2"),
        make_candidate(artist="Muse ", provider_id="3"),
    ]
    assert strict.resolve("Muse", "Supermassive Black Hole", candidates) is None


@pytest.mark.parametrize("position", [0, 1, 2, 3])
def test_single_qualifying_candidate_found_at_any_position(strict, position):
    candidates = [make_candidate(artist="Not Muse", provider_id=str(i)) for i in range(4)]
    candidates[position] = make_candidate(artist="Muse", provider_id="hit")
    assert strict.resolve("Muse", "Supermassive Black Hole", candidates).provider_id == "hit"


def test_first_qualifying_candidate_wins(strict):
    candidates = [
        make_candidate(artist="Other", provider_id="a"),
        make_candidate(provider_id="first"),
        make_candidate(provider_id="second"),
    ]
    assert strict.resolve("Muse", "Supermassive Black Hole", candidates).provider_id == "first"


@pytest.mark.parametrize("missing", [
    {"url": ""},
    {"cover_image_url": ""},
    {"lyrics_state": ""},
    {"release_date_components": None, "release_date_display": ""},
])
def test_incomplete_candidates_are_skipped(strict, missing):
    candidates = [make_candidate(provider_id="incomplete", **missing), make_candidate(provider_id="complete")]
    assert strict.resolve("Muse", "Supermassive Black Hole", candidates).provider_id == "complete"


def test_display_date_alone_is_enough(strict):
    candidate = make_candidate(release_date_components=None, release_date_display="2006")
    assert strict.resolve("Muse", "Supermassive Black Hole", [candidate]) is candidate


def test_partial_components_without_display_is_incomplete(strict):
    candidate = make_candidate(release_date_components=DateComponents(year=2006), release_date_display="")
    assert strict.resolve("Muse", "Supermassive Black Hole", [candidate]) is None


def test_strict_does_not_look_at_title(strict):
    candidate = make_candidate(title="Something Else Entirely")
    assert strict.resolve("Muse", "Supermassive Black Hole", [candidate]) is candidate


def test_loose_matches_substrings_case_insensitively():
    loose = MatchResolver(MatchPolicy.LOOSE)
    candidates = [
        make_candidate(artist="Muse", title="Uprising", provider_id="wrong-title"),
        make_candidate(artist="MUSE feat. Someone", title="Supermassive Black Hole (Live)", provider_id="hit",
                       url="", cover_image_url="", lyrics_state=""),
    ]
    assert loose.resolve("muse", "supermassive black hole", candidates).provider_id == "hit"


def test_loose_with_no_hits():
    loose = MatchResolver("loose")
    assert loose.resolve("Muse", "Uprising", [make_candidate(artist="Blur", title="Song 2")]) is None


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        MatchResolver("fuzzy")

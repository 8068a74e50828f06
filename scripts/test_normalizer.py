import pytest

from songcatalog.core.errors import ProviderError
from songcatalog.services.normalizer import RecordNormalizer, format_release_date
from songcatalog.services.providers.base import DateComponents, FullRecord

from conftest import make_candidate


def test_components_are_zero_padded():
    candidate = make_candidate(release_date_components=DateComponents(2001, 2, 3))
    assert format_release_date(candidate) == "2001-02-03"


def test_display_string_passes_through():
    candidate = make_candidate(release_date_components=None, release_date_display="Spring 1999")
    assert format_release_date(candidate) == "Spring 1999"


def test_incomplete_components_fall_back_to_display():
    candidate = make_candidate(release_date_components=DateComponents(year=1999), release_date_display="1999")
    assert format_release_date(candidate) == "1999"


def test_no_date_is_empty():
    candidate = make_candidate(release_date_components=None, release_date_display="")
    assert format_release_date(candidate) == ""


def test_normalize_maps_fields():
    candidate = make_candidate(provider_id="77")
    record = RecordNormalizer.normalize("Muse", "Supermassive Black Hole", candidate,
                                        FullRecord(provider_id="77", lyrics="verse\n\nchorus"))
    assert record.id is None
    assert record.group == "Muse"
    assert record.song == "Supermassive Black Hole"
    assert record.release_date == "2006-06-19"
    assert record.text == "verse\n\nchorus"
    assert record.link == "https://genius.com/77-lyrics"
    assert record.album_cover_url == "https://images.genius.com/77.jpg"
    assert record.is_complete


def test_normalize_keeps_caller_identity_not_provider_title():
    candidate = make_candidate(title="Supermassive Black Hole (Remastered)")
    record = RecordNormalizer.normalize("Muse", "Supermassive Black Hole", candidate, FullRecord("1", "la"))
    assert record.song == "Supermassive Black Hole"


def test_missing_full_record_fails():
    with pytest.raises(ProviderError):
        RecordNormalizer.normalize("Muse", "Uprising", make_candidate(), None)


def test_empty_lyrics_fail_instead_of_placeholder():
    with pytest.raises(ProviderError):
        RecordNormalizer.normalize("Muse", "Uprising", make_candidate(), FullRecord("1", ""))


def test_record_without_date_is_allowed_but_incomplete():
    candidate = make_candidate(release_date_components=None, release_date_display="")
    record = RecordNormalizer.normalize("Muse", "Uprising", candidate, FullRecord("1", "text"))
    assert record.release_date == ""
    assert not record.is_complete

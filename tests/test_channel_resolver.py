import pytest

from content.domain.channel_analysis_errors import ResolutionError
from content.infrastructure.service.channel_resolver import ChannelResolver
from content.utils.youtube_url import extract_channel_segment, is_channel_id
from fakes import FakeYouTubeClient, make_channel_id


CHANNEL_ID = make_channel_id("a")


def test_is_channel_id():
    assert is_channel_id(CHANNEL_ID)
    assert not is_channel_id("UCshort")
    assert not is_channel_id("@handle")
    assert not is_channel_id(None)


def test_extract_channel_segment_patterns():
    assert extract_channel_segment(f"https://www.youtube.com/channel/{CHANNEL_ID}") == CHANNEL_ID
    assert extract_channel_segment("https://www.youtube.com/@CompetitionWallah") == "CompetitionWallah"
    assert extract_channel_segment("https://youtube.com/c/SomeCustom") == "SomeCustom"
    assert extract_channel_segment("https://youtube.com/user/legacyName") == "legacyName"
    assert extract_channel_segment("CompetitionWallah") is None
    assert extract_channel_segment("") is None


def test_resolve_bare_channel_id_makes_no_calls():
    client = FakeYouTubeClient()

    assert ChannelResolver(client).resolve(CHANNEL_ID) == CHANNEL_ID
    assert client.calls == []


def test_resolve_channel_path_url_makes_no_calls():
    client = FakeYouTubeClient()

    resolved = ChannelResolver(client).resolve(f"https://www.youtube.com/channel/{CHANNEL_ID}")

    assert resolved == CHANNEL_ID
    assert client.calls == []


def test_resolve_handle_searches_once():
    client = FakeYouTubeClient(handles={"VedantuNEET": CHANNEL_ID})

    resolved = ChannelResolver(client).resolve("https://www.youtube.com/@VedantuNEET")

    assert resolved == CHANNEL_ID
    assert client.calls == [("search_channels", "VedantuNEET", 1)]


def test_resolve_plain_name_searches_raw_input():
    client = FakeYouTubeClient(handles={"Vedantu NEET": CHANNEL_ID})

    assert ChannelResolver(client).resolve("Vedantu NEET") == CHANNEL_ID
    assert len(client.calls_of("search_channels")) == 1


def test_resolve_without_search_results_raises():
    client = FakeYouTubeClient()

    with pytest.raises(ResolutionError, match="Could not resolve channel ID from: @missing"):
        ChannelResolver(client).resolve("@missing")


def test_resolve_empty_input_raises_without_calls():
    client = FakeYouTubeClient()

    with pytest.raises(ResolutionError):
        ChannelResolver(client).resolve("   ")
    assert client.calls == []

import asyncio

import pytest

from config.settings import YouTubeSettings
from content.application.usecase.channel_analysis_usecase import ChannelAnalysisUseCase
from content.domain.channel_analysis import AnalysisStatus
from content.domain.channel_analysis_errors import CredentialError
from content.utils import cache_key
from fakes import (
    FIXED_NOW,
    BrokenCache,
    DictCache,
    FakeYouTubeClient,
    api_video,
    fixed_clock,
    make_channel_id,
)


ALPHA = make_channel_id("a")
BETA = make_channel_id("b")
GAMMA = make_channel_id("c")


def build_client() -> FakeYouTubeClient:
    return FakeYouTubeClient(
        channels={
            ALPHA: {"title": "Alpha", "videos": [api_video("a1", 1000), api_video("a2", 3000)]},
            BETA: {"title": "Beta", "videos": [api_video("b1", 10)]},
            GAMMA: {"title": "Gamma", "videos": [api_video("c1", 500)]},
        },
        handles={"Alpha": ALPHA, "Gamma": GAMMA},
        fail_channels={BETA},
    )


def build_usecase(settings, client, cache=None, max_concurrency=3) -> ChannelAnalysisUseCase:
    return ChannelAnalysisUseCase(
        settings=settings,
        client_factory=lambda: client,
        cache=cache,
        max_concurrency=max_concurrency,
        clock=fixed_clock,
    )


def test_analyze_all_keeps_input_order_and_isolates_failures(youtube_settings):
    client = build_client()
    usecase = build_usecase(youtube_settings, client)
    urls = ["https://www.youtube.com/@Alpha", f"https://www.youtube.com/channel/{BETA}", "https://www.youtube.com/@Gamma"]

    response = asyncio.run(usecase.analyze_all(urls, 7, request_id="req-1"))

    assert response.request_id == "req-1"
    assert response.status == AnalysisStatus.COMPLETED
    assert [c.channel_url for c in response.channels] == urls

    alpha, beta, gamma = response.channels
    assert alpha.succeeded and gamma.succeeded
    assert alpha.channel_id == ALPHA
    assert alpha.channel_name == "Alpha"
    assert alpha.analytics.total_views == 4000
    assert alpha.channel_metrics.subscriber_count == 1000

    assert not beta.succeeded
    assert beta.channel_id == BETA
    assert beta.channel_name == f"Error: {urls[1]}"
    assert beta.analytics is None and beta.channel_metrics is None
    assert beta.videos == []
    assert beta.error

    assert response.metadata.total_videos == 3
    assert response.metadata.total_views == 4500
    assert response.metadata.individual_channel_count == 3
    assert response.metadata.time_window == 7
    assert response.metadata.processed_at == FIXED_NOW
    assert response.metadata.from_cache is False


def test_channel_without_recent_uploads_gets_empty_analytics(youtube_settings):
    client = FakeYouTubeClient(channels={ALPHA: {"title": "Alpha", "videos": []}})
    usecase = build_usecase(youtube_settings, client)

    response = asyncio.run(usecase.analyze_all([ALPHA], 3))

    channel, = response.channels
    assert channel.succeeded
    assert channel.analytics.upload_frequency == "No uploads in time period"
    assert client.calls_of("list_videos") == []


def test_request_id_is_generated_when_missing(youtube_settings):
    usecase = build_usecase(youtube_settings, build_client())

    response = asyncio.run(usecase.analyze_all([ALPHA], 7))

    assert response.request_id.startswith("channel_analysis_")


@pytest.mark.parametrize("api_key", ["", "not-a-youtube-key"])
def test_invalid_credential_fails_whole_batch_without_calls(api_key):
    client = build_client()
    usecase = build_usecase(YouTubeSettings(api_key=api_key, request_timeout_seconds=1), client)

    with pytest.raises(CredentialError):
        asyncio.run(usecase.analyze_all([ALPHA, GAMMA], 7))
    assert client.calls == []


@pytest.mark.parametrize("time_window", [0, 31, True, "7"])
def test_invalid_time_window_is_rejected(youtube_settings, time_window):
    client = build_client()
    usecase = build_usecase(youtube_settings, client)

    with pytest.raises(ValueError, match="time window|Time window"):
        asyncio.run(usecase.analyze_all([ALPHA], time_window))
    assert client.calls == []


def test_analyze_channel_never_raises(youtube_settings):
    usecase = build_usecase(youtube_settings, FakeYouTubeClient())

    result = usecase.analyze_channel("https://www.youtube.com/@nobody", 7)

    assert not result.succeeded
    assert "Could not resolve channel ID" in result.error
    assert result.channel_id == ""


def test_max_concurrency_must_be_positive(youtube_settings):
    with pytest.raises(ValueError):
        build_usecase(youtube_settings, build_client(), max_concurrency=0)


def test_analysis_cache_hit_is_reordered_and_flagged(youtube_settings):
    client = build_client()
    cache = DictCache()
    usecase = build_usecase(youtube_settings, client, cache=cache)

    first = asyncio.run(usecase.analyze_all([ALPHA, GAMMA], 7))
    calls_after_first = len(client.calls)
    second = asyncio.run(usecase.analyze_all([GAMMA, ALPHA], 7, request_id="again"))

    assert len(client.calls) == calls_after_first
    assert first.metadata.from_cache is False
    assert second.metadata.from_cache is True
    assert second.request_id == "again"
    assert [c.channel_id for c in second.channels] == [GAMMA, ALPHA]
    assert second.channels[1].analytics.total_views == 4000

    analysis_key = cache_key.analysis_key([ALPHA, GAMMA], 7, FIXED_NOW.date())
    assert cache.ttls[analysis_key] == cache_key.ANALYSIS_TTL_SECONDS
    assert cache.ttls[cache_key.channel_info_key(ALPHA)] == cache_key.CHANNEL_INFO_TTL_SECONDS


def test_channel_info_cache_skips_resolution(youtube_settings):
    client = build_client()
    cache = DictCache()
    usecase = build_usecase(youtube_settings, client, cache=cache)

    usecase.analyze_channel("https://www.youtube.com/@Alpha", 7)
    client.calls.clear()
    result = usecase.analyze_channel("https://www.youtube.com/@Alpha", 7)

    assert result.succeeded
    assert client.calls == []


def test_cache_faults_are_ignored(youtube_settings):
    client = build_client()
    usecase = build_usecase(youtube_settings, client, cache=BrokenCache())

    response = asyncio.run(usecase.analyze_all([ALPHA], 7))

    assert response.channels[0].succeeded
    assert response.metadata.from_cache is False


def test_build_comparison(youtube_settings):
    usecase = build_usecase(youtube_settings, build_client())
    response = asyncio.run(usecase.analyze_all([ALPHA, BETA, GAMMA], 7, request_id="cmp"))

    comparison = usecase.build_comparison(response, metric="views")

    assert comparison["requestId"] == "cmp"
    assert [d["channelId"] for d in comparison["datasets"]] == [ALPHA, GAMMA]
    assert [d["rank"] for d in comparison["datasets"]] == [1, 2]
    assert len(comparison["labels"]) == 8
    assert comparison["distribution"]["benchmarks"]["avgViews"] == (2000 + 500) / 2


def test_malformed_analysis_cache_entry_is_recomputed(youtube_settings):
    client = build_client()
    cache = DictCache()
    cache.store[cache_key.analysis_key([ALPHA], 7, FIXED_NOW.date())] = {"status": "completed"}
    usecase = build_usecase(youtube_settings, client, cache=cache)

    response = asyncio.run(usecase.analyze_all([ALPHA], 7))

    assert response.metadata.from_cache is False
    assert response.channels[0].succeeded
    assert client.calls_of("list_channels")


@pytest.mark.parametrize(
    "key_builder, payload",
    [
        (lambda: cache_key.channel_info_key(ALPHA), {"channelName": "Alpha"}),
        (lambda: cache_key.video_list_key(ALPHA, 7, FIXED_NOW.date()), {"a1": True}),
        (lambda: cache_key.video_details_key(["a1", "a2"]), [{"title": "no id"}]),
    ],
)
def test_malformed_stage_cache_entry_falls_back_to_upstream(youtube_settings, key_builder, payload):
    client = build_client()
    cache = DictCache()
    cache.store[key_builder()] = payload
    usecase = build_usecase(youtube_settings, client, cache=cache)

    result = usecase.analyze_channel(ALPHA, 7)

    assert result.succeeded
    assert result.channel_name == "Alpha"
    assert result.analytics.total_views == 4000

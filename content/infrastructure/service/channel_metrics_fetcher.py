import logging

from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.channel_analysis import ChannelMetrics, ChannelProfile, parse_timestamp
from content.domain.channel_analysis_errors import MetricsFetchError
from content.infrastructure.client.youtube_client import YouTubeApiError


logger = logging.getLogger(__name__)


class ChannelMetricsFetcher:
    """channels.list 로 채널 이름과 누적 통계를 가져온다."""

    def __init__(self, client: YouTubeDataPort):
        self.client = client

    def fetch_channel_profile(self, channel_id: str) -> ChannelProfile:
        try:
            response = self.client.list_channels(channel_id)
        except YouTubeApiError as exc:
            raise MetricsFetchError(f"Failed to get channel info: {exc}") from exc

        if not response.items:
            raise MetricsFetchError(f"Channel not found: {channel_id}")

        channel = response.items[0]
        snippet = channel.snippet
        stats = channel.statistics

        metrics = ChannelMetrics(
            subscriber_count=stats.subscriberCount if stats is not None else 0,
            total_channel_views=stats.viewCount if stats is not None else 0,
            total_channel_video_count=stats.videoCount if stats is not None else 0,
            created_at=parse_timestamp(snippet.publishedAt) if snippet is not None else None,
            country=snippet.country if snippet is not None else None,
            custom_url=snippet.customUrl if snippet is not None else None,
        )

        title = snippet.title if snippet is not None else ""
        logger.info(f"Channel info: {title} ({channel.id})")
        return ChannelProfile(
            channel_id=channel.id,
            title=title,
            metrics=metrics,
        )

    def fetch_channel_metrics(self, channel_id: str) -> ChannelMetrics:
        return self.fetch_channel_profile(channel_id).metrics

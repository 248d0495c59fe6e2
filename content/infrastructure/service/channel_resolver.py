import logging

from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.channel_analysis_errors import ResolutionError
from content.infrastructure.client.youtube_client import YouTubeApiError
from content.utils.youtube_url import extract_channel_segment, is_channel_id


logger = logging.getLogger(__name__)


class ChannelResolver:
    """채널 URL/핸들 문자열을 정규 채널 ID(UC + 22자)로 변환한다."""

    def __init__(self, client: YouTubeDataPort):
        self.client = client

    def resolve(self, channel_url: str) -> str:
        raw = (channel_url or "").strip()
        if not raw:
            raise ResolutionError("Channel URL is required")

        candidate = extract_channel_segment(raw) or raw
        if is_channel_id(candidate):
            # 한국어 주석: 이미 채널 ID 형식이면 네트워크 호출 없이 그대로 사용한다.
            return candidate

        logger.info(f"Searching for channel with query: {candidate}")
        try:
            response = self.client.search_channels(candidate, max_results=1)
        except YouTubeApiError as exc:
            raise ResolutionError(f"Failed to search for channel '{candidate}': {exc}") from exc

        if not response.items:
            raise ResolutionError(f"Could not resolve channel ID from: {channel_url}")

        channel_id = response.items[0].channel_id
        if not channel_id:
            raise ResolutionError(f"Could not extract channelId from search result for: {channel_url}")

        logger.info(f"Resolved {channel_url} to channel ID {channel_id}")
        return channel_id

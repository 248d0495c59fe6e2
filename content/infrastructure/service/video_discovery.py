import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List

from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.channel_analysis_errors import DiscoveryError
from content.infrastructure.client.youtube_client import YouTubeApiError


logger = logging.getLogger(__name__)

# search.list 한 페이지 최대치. 페이지네이션은 하지 않으므로 기간 내 최신 50개까지만 얻는다.
SEARCH_PAGE_LIMIT = 50


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VideoDiscovery:
    """채널의 최근 N일 업로드 영상 ID 목록을 찾는다."""

    def __init__(self, client: YouTubeDataPort, clock: Callable[[], datetime] = utc_now):
        self.client = client
        self.clock = clock

    def find_videos(self, channel_id: str, time_window_days: int) -> List[str]:
        published_after = self.clock() - timedelta(days=time_window_days)
        try:
            response = self.client.search_videos(
                channel_id,
                published_after=published_after,
                max_results=SEARCH_PAGE_LIMIT,
            )
        except YouTubeApiError as exc:
            raise DiscoveryError(f"Failed to get channel videos for {channel_id}: {exc}") from exc

        video_ids = [item.video_id for item in response.items if item.video_id]
        logger.info(f"Found {len(video_ids)} videos in last {time_window_days} days for {channel_id}")
        return video_ids

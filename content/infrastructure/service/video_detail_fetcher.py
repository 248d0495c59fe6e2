import logging
from datetime import datetime
from typing import Callable, List, Sequence

from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.channel_analysis import VideoRecord, parse_timestamp
from content.domain.channel_analysis_errors import DetailFetchError
from content.domain.youtube_resource import VideoResource
from content.infrastructure.client.youtube_client import YouTubeApiError
from content.infrastructure.service.video_discovery import utc_now


logger = logging.getLogger(__name__)

# videos.list 요청당 id 최대 개수
VIDEO_BATCH_SIZE = 50


def default_thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


class VideoDetailFetcher:
    """영상 ID 목록의 상세 정보를 50개 단위 배치로 순차 조회한다."""

    def __init__(self, client: YouTubeDataPort, clock: Callable[[], datetime] = utc_now):
        self.client = client
        self.clock = clock

    def fetch_details(self, video_ids: Sequence[str]) -> List[VideoRecord]:
        if not video_ids:
            return []

        videos: List[VideoRecord] = []
        for start in range(0, len(video_ids), VIDEO_BATCH_SIZE):
            chunk = list(video_ids[start:start + VIDEO_BATCH_SIZE])
            logger.info(f"Fetching details for {len(chunk)} videos")
            try:
                response = self.client.list_videos(chunk)
            except YouTubeApiError as exc:
                # 한국어 주석: 배치 하나라도 실패하면 부분 결과를 버리고 전체를 실패 처리한다.
                raise DetailFetchError(f"Failed to get video details: {exc}") from exc
            videos.extend(self._to_record(item) for item in response.items)

        logger.info(f"Retrieved details for {len(videos)} videos")
        return videos

    def _to_record(self, item: VideoResource) -> VideoRecord:
        snippet = item.snippet
        statistics = item.statistics
        content_details = item.contentDetails

        thumbnail_url = None
        if snippet is not None and snippet.thumbnails is not None:
            thumbnail_url = snippet.thumbnails.best_url()

        published_at = parse_timestamp(snippet.publishedAt) if snippet is not None else None

        return VideoRecord(
            video_id=item.id,
            title=(snippet.title if snippet is not None else None) or "Untitled Video",
            description=(snippet.description if snippet is not None else None) or "",
            thumbnail_url=thumbnail_url or default_thumbnail_url(item.id),
            published_at=published_at or self.clock(),
            view_count=statistics.viewCount if statistics is not None else 0,
            like_count=statistics.likeCount if statistics is not None else 0,
            comment_count=statistics.commentCount if statistics is not None else 0,
            duration=(content_details.duration if content_details is not None else None) or "PT0S",
        )

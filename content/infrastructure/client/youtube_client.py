import logging
from datetime import datetime, timezone
from typing import List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config.settings import YouTubeSettings
from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.youtube_resource import ChannelListResponse, SearchListResponse, VideoListResponse


logger = logging.getLogger(__name__)


class YouTubeApiError(Exception):
    """YouTube API 전송/상태 오류"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class YouTubeClient(YouTubeDataPort):
    """
    google-api-python-client 기반 YouTube Data API v3 어댑터.

    httplib2.Http 객체는 스레드 안전하지 않으므로 채널 분석 1건마다 새 클라이언트를 만든다.
    모든 요청은 settings.request_timeout_seconds 소켓 타임아웃을 가진다.
    """

    platform = "youtube"

    def __init__(self, settings: YouTubeSettings):
        self.settings = settings
        http = httplib2.Http(timeout=settings.request_timeout_seconds)
        self.service = build(
            "youtube",
            "v3",
            developerKey=settings.api_key,
            http=http,
            cache_discovery=False,
        )

    def search_channels(self, query: str, max_results: int = 1) -> SearchListResponse:
        request = self.service.search().list(
            part="snippet",
            q=query,
            type="channel",
            maxResults=max_results,
        )
        return SearchListResponse.model_validate(self._execute(request, "Channel search"))

    def search_videos(
        self,
        channel_id: str,
        published_after: datetime,
        max_results: int = 50,
    ) -> SearchListResponse:
        request = self.service.search().list(
            part="snippet",
            channelId=channel_id,
            type="video",
            publishedAfter=self._format_rfc3339(published_after),
            order="date",
            maxResults=max_results,
        )
        return SearchListResponse.model_validate(self._execute(request, "Video search"))

    def list_videos(self, video_ids: List[str]) -> VideoListResponse:
        request = self.service.videos().list(
            part="snippet,statistics,contentDetails",
            id=",".join(video_ids),
        )
        return VideoListResponse.model_validate(self._execute(request, "Video details"))

    def list_channels(self, channel_id: str) -> ChannelListResponse:
        request = self.service.channels().list(part="snippet,statistics", id=channel_id)
        return ChannelListResponse.model_validate(self._execute(request, "Channel info"))

    @staticmethod
    def _execute(request, operation: str) -> dict:
        try:
            return request.execute()
        except HttpError as exc:
            status = exc.resp.status if exc.resp is not None else None
            logger.warning(f"{operation} request failed with status {status}: {exc.reason}")
            raise YouTubeApiError(f"{operation} failed: {exc.reason}", status=status) from exc
        except (httplib2.HttpLib2Error, OSError) as exc:
            # socket.timeout(TimeoutError)도 OSError 하위 클래스다.
            logger.warning(f"{operation} transport failure: {exc}")
            raise YouTubeApiError(f"{operation} failed: {exc}") from exc

    @staticmethod
    def _format_rfc3339(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

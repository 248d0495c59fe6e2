from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from content.domain.youtube_resource import ChannelListResponse, SearchListResponse, VideoListResponse


class YouTubeDataPort(ABC):
    """채널 분석에 필요한 YouTube Data API 호출 4종"""

    @abstractmethod
    def search_channels(self, query: str, max_results: int = 1) -> SearchListResponse:
        pass

    @abstractmethod
    def search_videos(
        self,
        channel_id: str,
        published_after: datetime,
        max_results: int = 50,
    ) -> SearchListResponse:
        pass

    @abstractmethod
    def list_videos(self, video_ids: List[str]) -> VideoListResponse:
        pass

    @abstractmethod
    def list_channels(self, channel_id: str) -> ChannelListResponse:
        pass

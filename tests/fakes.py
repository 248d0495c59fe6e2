import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from content.application.port.analysis_cache_port import AnalysisCachePort
from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.channel_analysis import VideoRecord
from content.domain.youtube_resource import ChannelListResponse, SearchListResponse, VideoListResponse
from content.infrastructure.client.youtube_client import YouTubeApiError


FIXED_NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)
VALID_API_KEY = "AIzaSyTestKey0000000000000000000000000"


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_channel_id(seed: str) -> str:
    # UC + 22자
    return "UC" + (seed * 22)[:22]


def make_video(
    video_id: str,
    views: int,
    published_at: datetime = FIXED_NOW,
    likes: int = 0,
    comments: int = 0,
    title: str = "Video",
    duration: str = "PT1M",
) -> VideoRecord:
    return VideoRecord(
        video_id=video_id,
        title=title,
        description="",
        thumbnail_url=f"https://example.com/{video_id}.jpg",
        published_at=published_at,
        view_count=views,
        like_count=likes,
        comment_count=comments,
        duration=duration,
    )


class FakeYouTubeClient(YouTubeDataPort):
    """
    메모리 기반 YouTube Data API 대역.

    channels: channel_id -> {"title", "videos": [video dict ...]}
    handles: 검색어 -> channel_id
    fail_channels: 해당 channel_id 관련 호출은 YouTubeApiError
    """

    def __init__(
        self,
        channels: Optional[Dict[str, dict]] = None,
        handles: Optional[Dict[str, str]] = None,
        fail_channels: Optional[set] = None,
        fail_video_batch: Optional[int] = None,
    ):
        self.channels = channels or {}
        self.handles = handles or {}
        self.fail_channels = fail_channels or set()
        self.fail_video_batch = fail_video_batch
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call) -> None:
        with self._lock:
            self.calls.append(call)

    def calls_of(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def search_channels(self, query: str, max_results: int = 1) -> SearchListResponse:
        self._record("search_channels", query, max_results)
        channel_id = self.handles.get(query)
        if channel_id is None:
            return SearchListResponse(items=[])
        return SearchListResponse.model_validate(
            {"items": [{"id": {"kind": "youtube#channel", "channelId": channel_id},
                        "snippet": {"channelId": channel_id, "title": query}}]}
        )

    def search_videos(self, channel_id: str, published_after: datetime, max_results: int = 50) -> SearchListResponse:
        self._record("search_videos", channel_id, published_after, max_results)
        if channel_id in self.fail_channels:
            raise YouTubeApiError("quotaExceeded", status=403)
        videos = self.channels.get(channel_id, {}).get("videos", [])
        return SearchListResponse.model_validate(
            {"items": [{"id": {"kind": "youtube#video", "videoId": v["id"]}} for v in videos][:max_results]}
        )

    def list_videos(self, video_ids: List[str]) -> VideoListResponse:
        self._record("list_videos", list(video_ids))
        if self.fail_video_batch is not None and len(self.calls_of("list_videos")) == self.fail_video_batch:
            raise YouTubeApiError("backendError", status=500)
        by_id = {}
        for channel in self.channels.values():
            for video in channel.get("videos", []):
                by_id[video["id"]] = video
        items = [by_id.get(video_id, {"id": video_id}) for video_id in video_ids]
        return VideoListResponse.model_validate({"items": items})

    def list_channels(self, channel_id: str) -> ChannelListResponse:
        self._record("list_channels", channel_id)
        if channel_id in self.fail_channels:
            raise YouTubeApiError("channelNotFound", status=404)
        channel = self.channels.get(channel_id)
        if channel is None:
            return ChannelListResponse(items=[])
        return ChannelListResponse.model_validate(
            {
                "items": [
                    {
                        "id": channel_id,
                        "snippet": {"title": channel["title"], "publishedAt": "2020-01-01T00:00:00Z"},
                        "statistics": {
                            "subscriberCount": str(channel.get("subscribers", 1000)),
                            "viewCount": "500000",
                            "videoCount": str(len(channel.get("videos", []))),
                        },
                    }
                ]
            }
        )


def api_video(video_id: str, views: int, published_at: str = "2024-05-14T10:00:00Z", title: str = "Video") -> dict:
    return {
        "id": video_id,
        "snippet": {
            "title": title,
            "description": "desc",
            "publishedAt": published_at,
            "thumbnails": {"high": {"url": f"https://i.ytimg.com/vi/{video_id}/hq.jpg"}},
        },
        "statistics": {"viewCount": str(views), "likeCount": "10", "commentCount": "2"},
        "contentDetails": {"duration": "PT3M20S"},
    }


class DictCache(AnalysisCachePort):
    def __init__(self):
        self.store: Dict[str, object] = {}
        self.ttls: Dict[str, int] = {}

    def get(self, key):
        return self.store.get(key)

    def put(self, key, value, ttl_seconds):
        self.store[key] = value
        self.ttls[key] = ttl_seconds


class BrokenCache(AnalysisCachePort):
    def get(self, key):
        raise RuntimeError("cache down")

    def put(self, key, value, ttl_seconds):
        raise RuntimeError("cache down")

"""
YouTube Data API v3 응답 모델.

API가 돌려주는 느슨한 JSON을 호출별 pydantic 모델로 고정한다.
없을 수 있는 필드는 모두 Optional/기본값으로 선언하고, 통계 값(문자열로 도착)은
pydantic의 lax 변환으로 정수가 된다.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Thumbnail(BaseModel):
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class Thumbnails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    maxres: Optional[Thumbnail] = None
    high: Optional[Thumbnail] = None
    medium: Optional[Thumbnail] = None
    standard: Optional[Thumbnail] = None
    default_: Optional[Thumbnail] = Field(default=None, alias="default")

    def best_url(self) -> Optional[str]:
        # 화질 우선순위: maxres → high → medium → standard → default
        for thumbnail in (self.maxres, self.high, self.medium, self.standard, self.default_):
            if thumbnail is not None and thumbnail.url:
                return thumbnail.url
        return None


class SearchResultId(BaseModel):
    kind: Optional[str] = None
    videoId: Optional[str] = None
    channelId: Optional[str] = None


class SearchSnippet(BaseModel):
    channelId: Optional[str] = None
    title: str = ""
    description: str = ""
    publishedAt: Optional[str] = None
    thumbnails: Optional[Thumbnails] = None


class SearchResult(BaseModel):
    id: Union[SearchResultId, str, None] = None
    snippet: Optional[SearchSnippet] = None

    @property
    def video_id(self) -> Optional[str]:
        if isinstance(self.id, SearchResultId):
            return self.id.videoId
        return None

    @property
    def channel_id(self) -> Optional[str]:
        # 한국어 주석: search 결과는 snippet.channelId / id.channelId 로, channels.list는 id 문자열로 내려온다.
        if self.snippet is not None and self.snippet.channelId:
            return self.snippet.channelId
        if isinstance(self.id, SearchResultId):
            return self.id.channelId
        if isinstance(self.id, str) and self.id:
            return self.id
        return None


class SearchListResponse(BaseModel):
    items: List[SearchResult] = Field(default_factory=list)
    nextPageToken: Optional[str] = None


class VideoSnippet(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    publishedAt: Optional[str] = None
    channelId: Optional[str] = None
    thumbnails: Optional[Thumbnails] = None


class VideoStatistics(BaseModel):
    viewCount: int = 0
    likeCount: int = 0
    commentCount: int = 0


class VideoContentDetails(BaseModel):
    duration: Optional[str] = None


class VideoResource(BaseModel):
    id: str
    snippet: Optional[VideoSnippet] = None
    statistics: Optional[VideoStatistics] = None
    contentDetails: Optional[VideoContentDetails] = None


class VideoListResponse(BaseModel):
    items: List[VideoResource] = Field(default_factory=list)


class ChannelSnippet(BaseModel):
    title: str = ""
    description: Optional[str] = None
    customUrl: Optional[str] = None
    publishedAt: Optional[str] = None
    country: Optional[str] = None
    thumbnails: Optional[Thumbnails] = None


class ChannelStatistics(BaseModel):
    subscriberCount: int = 0
    viewCount: int = 0
    videoCount: int = 0
    hiddenSubscriberCount: bool = False


class ChannelResource(BaseModel):
    id: str
    snippet: Optional[ChannelSnippet] = None
    statistics: Optional[ChannelStatistics] = None


class ChannelListResponse(BaseModel):
    items: List[ChannelResource] = Field(default_factory=list)

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class GrowthTrend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class AnalysisStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO 8601 문자열(끝의 Z 포함)을 UTC 기준 datetime으로 변환한다."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


@dataclass(frozen=True)
class VideoRecord:
    """영상 한 건의 메타데이터 스냅샷"""
    video_id: str
    title: str
    description: str
    thumbnail_url: str
    published_at: datetime
    view_count: int
    like_count: int = 0
    comment_count: int = 0
    duration: str = "PT0S"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "thumbnail": self.thumbnail_url,
            "publishedAt": format_timestamp(self.published_at),
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoRecord":
        return cls(
            video_id=data["videoId"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            thumbnail_url=data.get("thumbnail") or "",
            published_at=parse_timestamp(data["publishedAt"]),
            view_count=int(data.get("viewCount") or 0),
            like_count=int(data.get("likeCount") or 0),
            comment_count=int(data.get("commentCount") or 0),
            duration=data.get("duration") or "PT0S",
        )


@dataclass(frozen=True)
class ChannelMetrics:
    """조회 시점의 채널 누적 통계"""
    subscriber_count: int
    total_channel_views: int
    total_channel_video_count: int
    created_at: Optional[datetime] = None
    country: Optional[str] = None
    custom_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subscriberCount": self.subscriber_count,
            "totalChannelViews": self.total_channel_views,
            "videoCount": self.total_channel_video_count,
            "channelCreatedDate": format_timestamp(self.created_at),
            "country": self.country,
            "customUrl": self.custom_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelMetrics":
        return cls(
            subscriber_count=int(data.get("subscriberCount") or 0),
            total_channel_views=int(data.get("totalChannelViews") or 0),
            total_channel_video_count=int(data.get("videoCount") or 0),
            created_at=parse_timestamp(data.get("channelCreatedDate")),
            country=data.get("country"),
            custom_url=data.get("customUrl"),
        )


@dataclass(frozen=True)
class ChannelProfile:
    """channels.list 응답에서 얻은 채널 이름 + 통계"""
    channel_id: str
    title: str
    metrics: ChannelMetrics


@dataclass
class ContentCategoryStat:
    category: str
    count: int
    avg_views: int

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "count": self.count, "avgViews": self.avg_views}


@dataclass
class ChannelAnalytics:
    """영상 목록 + 채널 통계로부터 매번 새로 계산되는 파생 지표"""
    total_videos: int
    total_views: int
    average_views: int
    total_likes: int
    total_comments: int
    engagement_rate: float
    most_popular_video: Optional[VideoRecord]
    least_popular_video: Optional[VideoRecord]
    upload_frequency: str
    average_duration_seconds: int
    growth_trend: GrowthTrend
    performance_score: int
    top_performing_days: List[str] = field(default_factory=list)
    content_categories: List[ContentCategoryStat] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalVideos": self.total_videos,
            "totalViews": self.total_views,
            "averageViews": self.average_views,
            "totalLikes": self.total_likes,
            "totalComments": self.total_comments,
            "engagementRate": self.engagement_rate,
            "mostPopularVideo": self.most_popular_video.to_dict() if self.most_popular_video else None,
            "leastPopularVideo": self.least_popular_video.to_dict() if self.least_popular_video else None,
            "uploadFrequency": self.upload_frequency,
            "averageDuration": self.average_duration_seconds,
            "viewsGrowthTrend": self.growth_trend.value,
            "performanceScore": self.performance_score,
            "topPerformingDays": list(self.top_performing_days),
            "contentCategories": [c.to_dict() for c in self.content_categories],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelAnalytics":
        most = data.get("mostPopularVideo")
        least = data.get("leastPopularVideo")
        return cls(
            total_videos=int(data.get("totalVideos") or 0),
            total_views=int(data.get("totalViews") or 0),
            average_views=int(data.get("averageViews") or 0),
            total_likes=int(data.get("totalLikes") or 0),
            total_comments=int(data.get("totalComments") or 0),
            engagement_rate=float(data.get("engagementRate") or 0),
            most_popular_video=VideoRecord.from_dict(most) if most else None,
            least_popular_video=VideoRecord.from_dict(least) if least else None,
            upload_frequency=data.get("uploadFrequency") or "",
            average_duration_seconds=int(data.get("averageDuration") or 0),
            growth_trend=GrowthTrend(data.get("viewsGrowthTrend") or GrowthTrend.STABLE.value),
            performance_score=int(data.get("performanceScore") or 0),
            top_performing_days=list(data.get("topPerformingDays") or []),
            content_categories=[
                ContentCategoryStat(
                    category=c["category"],
                    count=int(c.get("count") or 0),
                    avg_views=int(c.get("avgViews") or 0),
                )
                for c in data.get("contentCategories") or []
            ],
        )


@dataclass
class ChannelAnalysisResult:
    """
    채널 하나의 분석 결과.

    성공 결과는 analytics/channel_metrics를, 실패 결과는 error만 가진다.
    두 형태는 상호 배타적이다.
    """
    channel_id: str
    channel_name: str
    channel_url: str
    videos: List[VideoRecord] = field(default_factory=list)
    analytics: Optional[ChannelAnalytics] = None
    channel_metrics: Optional[ChannelMetrics] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.error is not None:
            if self.analytics is not None or self.channel_metrics is not None:
                raise ValueError("failed channel result cannot carry analytics or channel metrics")
        elif self.analytics is None or self.channel_metrics is None:
            raise ValueError("successful channel result requires analytics and channel metrics")

    @classmethod
    def success(
        cls,
        channel_id: str,
        channel_name: str,
        channel_url: str,
        videos: List[VideoRecord],
        analytics: ChannelAnalytics,
        channel_metrics: ChannelMetrics,
    ) -> "ChannelAnalysisResult":
        return cls(
            channel_id=channel_id,
            channel_name=channel_name,
            channel_url=channel_url,
            videos=list(videos),
            analytics=analytics,
            channel_metrics=channel_metrics,
        )

    @classmethod
    def failure(cls, channel_url: str, error: str, channel_id: str = "") -> "ChannelAnalysisResult":
        return cls(
            channel_id=channel_id,
            channel_name=f"Error: {channel_url}",
            channel_url=channel_url,
            videos=[],
            error=error,
        )

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "channelId": self.channel_id,
            "channelName": self.channel_name,
            "channelUrl": self.channel_url,
            "videos": [v.to_dict() for v in self.videos],
        }
        if self.error is not None:
            payload["error"] = self.error
        else:
            payload["analytics"] = self.analytics.to_dict()
            payload["channelMetrics"] = self.channel_metrics.to_dict()
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelAnalysisResult":
        analytics = data.get("analytics")
        metrics = data.get("channelMetrics")
        return cls(
            channel_id=data.get("channelId") or "",
            channel_name=data.get("channelName") or "",
            channel_url=data.get("channelUrl") or "",
            videos=[VideoRecord.from_dict(v) for v in data.get("videos") or []],
            analytics=ChannelAnalytics.from_dict(analytics) if analytics else None,
            channel_metrics=ChannelMetrics.from_dict(metrics) if metrics else None,
            error=data.get("error"),
        )


@dataclass
class AnalysisMetadata:
    total_videos: int
    total_views: int
    processed_at: datetime
    time_window: int
    individual_channel_count: int
    from_cache: bool = False
    analysis_type: str = "channel_comprehensive"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalVideos": self.total_videos,
            "totalViews": self.total_views,
            "processedAt": format_timestamp(self.processed_at),
            "timeWindow": self.time_window,
            "individualChannelCount": self.individual_channel_count,
            "fromCache": self.from_cache,
            "analysisType": self.analysis_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisMetadata":
        return cls(
            total_videos=int(data.get("totalVideos") or 0),
            total_views=int(data.get("totalViews") or 0),
            processed_at=parse_timestamp(data.get("processedAt")),
            time_window=int(data.get("timeWindow") or 0),
            individual_channel_count=int(data.get("individualChannelCount") or 0),
            from_cache=bool(data.get("fromCache", False)),
            analysis_type=data.get("analysisType") or "channel_comprehensive",
        )


@dataclass
class AnalysisResponse:
    """요청 한 번에 대해 한 번만 만들어지는 최종 분석 응답"""
    request_id: str
    status: AnalysisStatus
    channels: List[ChannelAnalysisResult]
    metadata: AnalysisMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requestId": self.request_id,
            "status": self.status.value,
            "channels": [c.to_dict() for c in self.channels],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResponse":
        return cls(
            request_id=data["requestId"],
            status=AnalysisStatus(data.get("status") or AnalysisStatus.COMPLETED.value),
            channels=[ChannelAnalysisResult.from_dict(c) for c in data.get("channels") or []],
            metadata=AnalysisMetadata.from_dict(data.get("metadata") or {}),
        )

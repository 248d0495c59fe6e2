import math
import re
from typing import Dict, List, Optional, Sequence

from content.domain.channel_analysis import (
    ChannelAnalytics,
    ChannelMetrics,
    ContentCategoryStat,
    GrowthTrend,
    VideoRecord,
)


WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# 제목 키워드 기반 분류. 위에서부터 먼저 일치하는 카테고리가 이긴다.
CONTENT_CATEGORY_KEYWORDS = (
    ("Tutorial", ("tutorial", "how to")),
    ("Review", ("review", "unboxing")),
    ("Entertainment", ("funny", "comedy")),
    ("Educational", ("learn", "course")),
)
DEFAULT_CATEGORY = "Other"

GROWTH_UP_RATIO = 1.2
GROWTH_DOWN_RATIO = 0.8

_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def parse_duration_seconds(duration: Optional[str]) -> int:
    """YouTube API duration(PT1H2M3S)을 초 단위로 변환한다. 형식이 다르면 0."""
    if not duration:
        return 0
    match = _DURATION_PATTERN.match(duration)
    if not match:
        return 0
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def empty_analytics() -> ChannelAnalytics:
    """기간 내 업로드가 없을 때의 고정 분석 결과"""
    return ChannelAnalytics(
        total_videos=0,
        total_views=0,
        average_views=0,
        total_likes=0,
        total_comments=0,
        engagement_rate=0.0,
        most_popular_video=None,
        least_popular_video=None,
        upload_frequency="No uploads in time period",
        average_duration_seconds=0,
        growth_trend=GrowthTrend.STABLE,
        performance_score=0,
        top_performing_days=[],
        content_categories=[],
    )


def compute_analytics(
    videos: Sequence[VideoRecord],
    channel_metrics: Optional[ChannelMetrics] = None,
) -> ChannelAnalytics:
    """
    영상 목록으로부터 채널 분석 지표를 계산한다.

    I/O 없이 입력만으로 결정되는 순수 함수이며 예외를 던지지 않는다.
    channel_metrics는 현재 계산에 사용하지 않지만 호출 계약상 함께 받는다.
    """
    if not videos:
        return empty_analytics()

    total_videos = len(videos)
    total_views = sum(v.view_count for v in videos)
    total_likes = sum(v.like_count for v in videos)
    total_comments = sum(v.comment_count for v in videos)
    average_views = int(round_half_up(total_views / total_videos))

    engagement_rate = 0.0
    if total_views > 0:
        engagement_rate = (total_likes + total_comments) / total_views * 100
    engagement_rate = round_half_up(engagement_rate, 2)

    most_popular = videos[0]
    least_popular = videos[0]
    for video in videos[1:]:
        if video.view_count > most_popular.view_count:
            most_popular = video
        if video.view_count < least_popular.view_count:
            least_popular = video

    total_duration = sum(parse_duration_seconds(v.duration) for v in videos)
    average_duration = int(round_half_up(total_duration / total_videos))

    growth_trend = classify_growth_trend(videos)
    performance_score = calculate_performance_score(
        average_views=average_views,
        engagement_rate=engagement_rate,
        total_videos=total_videos,
        growth_trend=growth_trend,
    )

    return ChannelAnalytics(
        total_videos=total_videos,
        total_views=total_views,
        average_views=average_views,
        total_likes=total_likes,
        total_comments=total_comments,
        engagement_rate=engagement_rate,
        most_popular_video=most_popular,
        least_popular_video=least_popular,
        upload_frequency=f"{total_videos} videos in period",
        average_duration_seconds=average_duration,
        growth_trend=growth_trend,
        performance_score=performance_score,
        top_performing_days=top_performing_weekdays(videos),
        content_categories=categorize_content(videos),
    )


def classify_growth_trend(videos: Sequence[VideoRecord]) -> GrowthTrend:
    # 한국어 주석: 게시일 오름차순으로 정렬한 뒤 앞/뒤 절반의 평균 조회수를 비교한다.
    ordered = sorted(videos, key=lambda v: v.published_at)
    middle = len(ordered) // 2
    first_half = ordered[:middle]
    second_half = ordered[middle:]

    first_avg = sum(v.view_count for v in first_half) / max(len(first_half), 1)
    second_avg = sum(v.view_count for v in second_half) / max(len(second_half), 1)

    if second_avg > first_avg * GROWTH_UP_RATIO:
        return GrowthTrend.UP
    if second_avg < first_avg * GROWTH_DOWN_RATIO:
        return GrowthTrend.DOWN
    return GrowthTrend.STABLE


def calculate_performance_score(
    average_views: float,
    engagement_rate: float,
    total_videos: int,
    growth_trend: GrowthTrend,
) -> int:
    """조회수 30 + 참여율 25 + 업로드 꾸준함 20 + 추세 25 = 최대 100점"""
    view_score = min(average_views / 10000 * 30, 30)
    engagement_score = min(engagement_rate * 20, 25)
    consistency_score = min(total_videos / 10 * 20, 20)
    if growth_trend == GrowthTrend.UP:
        trend_score = 25
    elif growth_trend == GrowthTrend.STABLE:
        trend_score = 15
    else:
        trend_score = 5
    return int(round_half_up(view_score + engagement_score + consistency_score + trend_score))


def top_performing_weekdays(videos: Sequence[VideoRecord], limit: int = 3) -> List[str]:
    day_views: Dict[str, int] = {}
    for video in videos:
        day = WEEKDAY_NAMES[video.published_at.weekday()]
        day_views[day] = day_views.get(day, 0) + video.view_count
    ranked = sorted(day_views.items(), key=lambda item: item[1], reverse=True)
    return [day for day, _ in ranked[:limit]]


def classify_title(title: str) -> str:
    lowered = (title or "").lower()
    for category, keywords in CONTENT_CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def categorize_content(videos: Sequence[VideoRecord]) -> List[ContentCategoryStat]:
    order = [category for category, _ in CONTENT_CATEGORY_KEYWORDS] + [DEFAULT_CATEGORY]
    counts = {category: 0 for category in order}
    views = {category: 0 for category in order}
    for video in videos:
        category = classify_title(video.title)
        counts[category] += 1
        views[category] += video.view_count

    return [
        ContentCategoryStat(
            category=category,
            count=counts[category],
            avg_views=int(round_half_up(views[category] / counts[category])),
        )
        for category in order
        if counts[category] > 0
    ]

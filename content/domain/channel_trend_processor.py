from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from content.domain.channel_analysis import ChannelAnalysisResult, VideoRecord


SUPPORTED_METRICS = ("views", "engagement", "uploads")
GROWTH_WINDOW_DAYS = 7


def _date_range(today: date, time_range: int) -> List[date]:
    start = today - timedelta(days=time_range)
    return [start + timedelta(days=offset) for offset in range(time_range + 1)]


def _video_engagement(video: VideoRecord) -> float:
    if video.view_count <= 0:
        return 0.0
    return (video.like_count + video.comment_count) / video.view_count * 100


def _daily_value(videos: List[VideoRecord], metric: str) -> float:
    if metric == "views":
        return sum(v.view_count for v in videos)
    if metric == "engagement":
        if not videos:
            return 0.0
        return sum(_video_engagement(v) for v in videos) / len(videos)
    return len(videos)


def build_daily_series(
    channels: Sequence[ChannelAnalysisResult],
    metric: str,
    time_range: int,
    today: date,
) -> Dict[str, Any]:
    """
    채널별 일 단위 시계열을 만든다.

    - views: 그날 게시된 영상 조회수 합
    - engagement: 그날 게시된 영상들의 참여율(%) 평균
    - uploads: 그날 게시된 영상 수

    실패한 채널은 시계열에서 제외한다.
    """
    if metric not in SUPPORTED_METRICS:
        raise ValueError(f"Unsupported metric: {metric}. Must be one of {', '.join(SUPPORTED_METRICS)}")
    if time_range < 0:
        raise ValueError("time_range cannot be negative")

    days = _date_range(today, time_range)
    labels = [day.strftime("%b %d") for day in days]

    datasets = []
    for channel in channels:
        if not channel.succeeded:
            continue
        by_day: Dict[date, List[VideoRecord]] = {}
        for video in channel.videos:
            by_day.setdefault(video.published_at.date(), []).append(video)

        data = [_daily_value(by_day.get(day, []), metric) for day in days]
        datasets.append(
            {
                "channelId": channel.channel_id,
                "label": channel.channel_name,
                "data": data,
                "totalValue": sum(data),
            }
        )

    return {
        "metric": metric,
        "labels": labels,
        "dates": [day.isoformat() for day in days],
        "datasets": datasets,
    }


def build_comparative_growth(
    channels: Sequence[ChannelAnalysisResult],
    metric: str,
    time_range: int,
    today: date,
) -> Dict[str, Any]:
    """일 단위 시계열에 첫 주 대비 마지막 주 성장률(%)과 총합 기준 순위를 붙인다."""
    series = build_daily_series(channels, metric, time_range=time_range, today=today)

    for dataset in series["datasets"]:
        data = dataset["data"]
        first_week_avg = sum(data[:GROWTH_WINDOW_DAYS]) / GROWTH_WINDOW_DAYS
        last_week_avg = sum(data[-GROWTH_WINDOW_DAYS:]) / GROWTH_WINDOW_DAYS
        if first_week_avg > 0:
            dataset["growth"] = (last_week_avg - first_week_avg) / first_week_avg * 100
        else:
            dataset["growth"] = 0.0

    ranked = sorted(series["datasets"], key=lambda d: d["totalValue"], reverse=True)
    for rank, dataset in enumerate(ranked, start=1):
        dataset["rank"] = rank

    return series


def build_performance_distribution(channels: Sequence[ChannelAnalysisResult]) -> Dict[str, Any]:
    points = [
        {
            "x": channel.analytics.average_views,
            "y": channel.analytics.engagement_rate,
            "channelName": channel.channel_name,
            "channelId": channel.channel_id,
        }
        for channel in channels
        if channel.succeeded
    ]
    if points:
        benchmarks = {
            "avgViews": sum(p["x"] for p in points) / len(points),
            "avgEngagement": sum(p["y"] for p in points) / len(points),
        }
    else:
        benchmarks = {"avgViews": 0.0, "avgEngagement": 0.0}
    return {"scatterData": points, "benchmarks": benchmarks}

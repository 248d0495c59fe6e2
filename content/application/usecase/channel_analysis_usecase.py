import asyncio
import logging
import uuid
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from config.settings import YouTubeSettings
from content.application.port.analysis_cache_port import AnalysisCachePort
from content.application.port.youtube_data_port import YouTubeDataPort
from content.domain.channel_analysis import (
    AnalysisMetadata,
    AnalysisResponse,
    AnalysisStatus,
    ChannelAnalysisResult,
    ChannelMetrics,
    VideoRecord,
)
from content.domain.channel_analysis_errors import CredentialError
from content.domain.channel_analytics_calculator import compute_analytics
from content.domain.channel_trend_processor import (
    build_comparative_growth,
    build_performance_distribution,
)
from content.infrastructure.service.channel_metrics_fetcher import ChannelMetricsFetcher
from content.infrastructure.service.channel_resolver import ChannelResolver
from content.infrastructure.service.video_detail_fetcher import VideoDetailFetcher
from content.infrastructure.service.video_discovery import VideoDiscovery, utc_now
from content.utils import cache_key


logger = logging.getLogger(__name__)

MIN_TIME_WINDOW_DAYS = 1
MAX_TIME_WINDOW_DAYS = 30


class ChannelAnalysisUseCase:
    """
    채널 URL 목록 + 기간(일)을 받아 채널별 분석 결과와 전체 집계를 만든다.

    채널 하나의 실패는 해당 채널의 error 결과로만 남고 나머지 채널 분석은 계속된다.
    API 키 문제(CredentialError)만 배치 전체를 즉시 중단시킨다.
    """

    def __init__(
        self,
        settings: YouTubeSettings,
        client_factory: Callable[[], YouTubeDataPort],
        cache: Optional[AnalysisCachePort] = None,
        max_concurrency: int = 1,
        clock: Callable[[], datetime] = utc_now,
    ):
        if max_concurrency <= 0:
            raise ValueError("max_concurrency must be positive")
        self.settings = settings
        self.client_factory = client_factory
        self.cache = cache
        self.max_concurrency = max_concurrency
        self.clock = clock

    async def analyze_all(
        self,
        channel_urls: Sequence[str],
        time_window_days: int,
        request_id: Optional[str] = None,
    ) -> AnalysisResponse:
        self._ensure_credential()
        self._ensure_time_window(time_window_days)

        channel_urls = list(channel_urls)
        request_id = request_id or f"channel_analysis_{uuid.uuid4().hex[:12]}"
        today = self._today()

        signature = cache_key.analysis_key(channel_urls, time_window_days, today)
        response = self._cache_decode(
            signature,
            lambda cached: self._from_cached_analysis(cached, channel_urls, request_id),
        )
        if response is not None:
            logger.info(f"Analysis cache hit for {len(channel_urls)} channels ({time_window_days} days)")
            return response

        logger.info(
            f"Starting analysis of {len(channel_urls)} channels "
            f"({time_window_days} days, concurrency={self.max_concurrency})"
        )

        # 한국어 주석: 고정 개수 워커로 동시 실행하되 결과는 입력 순서(index) 그대로 모은다.
        semaphore = asyncio.Semaphore(self.max_concurrency)
        results: List[Optional[ChannelAnalysisResult]] = [None] * len(channel_urls)

        async def run(index: int, channel_url: str) -> None:
            async with semaphore:
                results[index] = await asyncio.to_thread(
                    self.analyze_channel, channel_url, time_window_days
                )

        await asyncio.gather(*(run(i, url) for i, url in enumerate(channel_urls)))

        channels = [result for result in results if result is not None]
        succeeded = [c for c in channels if c.succeeded]
        response = AnalysisResponse(
            request_id=request_id,
            status=AnalysisStatus.COMPLETED,
            channels=channels,
            metadata=AnalysisMetadata(
                total_videos=sum(c.analytics.total_videos for c in succeeded),
                total_views=sum(c.analytics.total_views for c in succeeded),
                processed_at=self.clock(),
                time_window=time_window_days,
                individual_channel_count=len(channels),
            ),
        )
        logger.info(
            f"Analysis {request_id} completed: {len(succeeded)}/{len(channels)} channels succeeded, "
            f"{response.metadata.total_videos} videos"
        )

        self._cache_put(signature, response.to_dict(), cache_key.ANALYSIS_TTL_SECONDS)
        return response

    def analyze_channel(self, channel_url: str, time_window_days: int) -> ChannelAnalysisResult:
        """채널 하나를 분석한다. 어떤 오류도 밖으로 던지지 않고 error 결과로 돌려준다."""
        channel_id = ""
        try:
            self._ensure_credential()
            self._ensure_time_window(time_window_days)

            client = self.client_factory()
            cached = self._cached_channel(channel_url)
            if cached is not None:
                channel_id, channel_name, channel_metrics = cached
            else:
                # 해석된 ID는 이후 단계가 실패해도 실패 결과에 남긴다.
                channel_id = ChannelResolver(client).resolve(channel_url)
                channel_name, channel_metrics = self._fetch_channel(client, channel_url, channel_id)

            video_ids = self._load_video_ids(client, channel_id, time_window_days)
            videos = self._load_video_details(client, video_ids)

            analytics = compute_analytics(videos, channel_metrics)
            logger.info(f"Analyzed {len(videos)} videos from {channel_name}")
            return ChannelAnalysisResult.success(
                channel_id=channel_id,
                channel_name=channel_name,
                channel_url=channel_url,
                videos=videos,
                analytics=analytics,
                channel_metrics=channel_metrics,
            )
        except Exception as exc:
            logger.warning(f"Channel analysis failed for {channel_url}: {exc}")
            return ChannelAnalysisResult.failure(channel_url, str(exc) or exc.__class__.__name__, channel_id)

    def build_comparison(
        self,
        response: AnalysisResponse,
        metric: str = "views",
        time_range: Optional[int] = None,
    ) -> Dict[str, Any]:
        time_range = time_range or response.metadata.time_window
        today = self._today()
        growth = build_comparative_growth(response.channels, metric, time_range=time_range, today=today)
        growth["distribution"] = build_performance_distribution(response.channels)
        growth["requestId"] = response.request_id
        return growth

    @staticmethod
    def _from_cached_analysis(
        cached: Dict[str, Any],
        channel_urls: List[str],
        request_id: str,
    ) -> Optional[AnalysisResponse]:
        # 한국어 주석: 캐시 키는 정렬된 채널 목록 기준이므로 결과를 이번 요청의 입력 순서로 다시 맞춘다.
        stored = AnalysisResponse.from_dict(cached)
        by_url: Dict[str, List[ChannelAnalysisResult]] = {}
        for channel in stored.channels:
            by_url.setdefault(channel.channel_url, []).append(channel)

        channels = []
        for url in channel_urls:
            candidates = by_url.get(url)
            if not candidates:
                return None
            channels.append(candidates.pop(0))

        stored.metadata.from_cache = True
        return AnalysisResponse(
            request_id=request_id,
            status=stored.status,
            channels=channels,
            metadata=stored.metadata,
        )

    def _cached_channel(self, channel_url: str) -> Optional[tuple[str, str, ChannelMetrics]]:
        return self._cache_decode(
            cache_key.channel_info_key(channel_url),
            lambda cached: (
                str(cached["channelId"]),
                str(cached["channelName"]),
                ChannelMetrics.from_dict(cached["channelMetrics"]),
            ),
        )

    def _fetch_channel(self, client: YouTubeDataPort, channel_url: str, channel_id: str) -> tuple[str, ChannelMetrics]:
        profile = ChannelMetricsFetcher(client).fetch_channel_profile(channel_id)
        self._cache_put(
            cache_key.channel_info_key(channel_url),
            {
                "channelId": channel_id,
                "channelName": profile.title,
                "channelMetrics": profile.metrics.to_dict(),
            },
            cache_key.CHANNEL_INFO_TTL_SECONDS,
        )
        return profile.title, profile.metrics

    def _load_video_ids(self, client: YouTubeDataPort, channel_id: str, time_window_days: int) -> List[str]:
        key = cache_key.video_list_key(channel_id, time_window_days, self._today())
        cached_ids = self._cache_decode(key, self._decode_video_ids)
        if cached_ids is not None:
            return cached_ids

        video_ids = VideoDiscovery(client, clock=self.clock).find_videos(channel_id, time_window_days)
        self._cache_put(key, video_ids, cache_key.VIDEO_LIST_TTL_SECONDS)
        return video_ids

    def _load_video_details(self, client: YouTubeDataPort, video_ids: List[str]) -> List[VideoRecord]:
        if not video_ids:
            return []
        key = cache_key.video_details_key(video_ids)
        cached_videos = self._cache_decode(key, lambda cached: [VideoRecord.from_dict(v) for v in cached])
        if cached_videos is not None:
            return cached_videos

        videos = VideoDetailFetcher(client, clock=self.clock).fetch_details(video_ids)
        self._cache_put(key, [v.to_dict() for v in videos], cache_key.VIDEO_DETAILS_TTL_SECONDS)
        return videos

    def _ensure_credential(self) -> None:
        if not self.settings.has_valid_api_key():
            if not (self.settings.api_key or "").strip():
                raise CredentialError("YouTube API key not found. Set YOUTUBE_API_KEY.")
            raise CredentialError(
                f"Invalid YouTube API key format. Should start with \"{self.settings.API_KEY_PREFIX}\"."
            )

    @staticmethod
    def _ensure_time_window(time_window_days: int) -> None:
        if isinstance(time_window_days, bool) or not isinstance(time_window_days, int):
            raise ValueError("Time window must be an integer number of days")
        if not MIN_TIME_WINDOW_DAYS <= time_window_days <= MAX_TIME_WINDOW_DAYS:
            raise ValueError(
                f"Invalid time window. Must be between {MIN_TIME_WINDOW_DAYS} and {MAX_TIME_WINDOW_DAYS} days"
            )

    def _today(self) -> date:
        return self.clock().date()

    def _cache_get(self, key: str) -> Optional[Any]:
        if self.cache is None:
            return None
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

    def _cache_decode(self, key: str, decode: Callable[[Any], Any]) -> Optional[Any]:
        """캐시 값을 읽어 decode한다. 형식이 깨진 항목은 캐시 미스로 취급한다."""
        cached = self._cache_get(key)
        if cached is None:
            return None
        try:
            return decode(cached)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring malformed cache entry {key}: {e!r}")
            return None

    @staticmethod
    def _decode_video_ids(cached: Any) -> List[str]:
        if not isinstance(cached, list) or not all(isinstance(v, str) for v in cached):
            raise TypeError("cached video id list must be a list of strings")
        return list(cached)

    def _cache_put(self, key: str, value: Any, ttl_seconds: int) -> None:
        if self.cache is None:
            return
        try:
            self.cache.put(key, value, ttl_seconds)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

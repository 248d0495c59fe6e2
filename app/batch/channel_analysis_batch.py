import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

from content.infrastructure.config.dependency_injection import create_container


async def run_channel_analysis_batch_once(
    channels: Optional[List[str]] = None,
    time_window: Optional[int] = None,
) -> Dict[str, Any]:
    """
    기본 채널 목록(또는 전달받은 목록)을 한 번 분석하는 배치 진입점.

    동작:
    - 만료된 캐시 항목 정리 (캐시 사용 시)
    - 채널별 분석 실행 (채널 단위 실패는 결과에만 남김)
    - 채널별 성공/실패 요약 출력
    """
    container = create_container()
    channels = channels or container.config.default_channels()
    time_window = time_window or container.config.default_time_window()

    summary: Dict[str, Any] = {
        "channels": len(channels),
        "succeeded": 0,
        "failed": 0,
        "total_videos": 0,
        "purged_cache_entries": 0,
        "start_time": datetime.now().isoformat(),
    }

    try:
        cache = container.analysis_cache()
        if cache is not None:
            summary["purged_cache_entries"] = cache.purge_expired()
            print(f"[CHANNEL-BATCH] Purged {summary['purged_cache_entries']} expired cache entries")

        print(f"[CHANNEL-BATCH] Analyzing {len(channels)} channels ({time_window} days)...")
        usecase = container.channel_analysis_usecase()
        response = await usecase.analyze_all(channels, time_window)

        for channel in response.channels:
            if channel.succeeded:
                summary["succeeded"] += 1
                print(
                    f"[CHANNEL-BATCH] {channel.channel_name}: "
                    f"{channel.analytics.total_videos} videos, score {channel.analytics.performance_score}"
                )
            else:
                summary["failed"] += 1
                print(f"[CHANNEL-BATCH] {channel.channel_url} failed: {channel.error}")

        summary["request_id"] = response.request_id
        summary["total_videos"] = response.metadata.total_videos
        summary["end_time"] = datetime.now().isoformat()
        print(f"[CHANNEL-BATCH] Completed successfully: {summary}")

    except Exception as e:
        summary["error"] = str(e)
        summary["end_time"] = datetime.now().isoformat()
        print(f"[CHANNEL-BATCH] Failed with error: {e}")
        raise

    return summary


if __name__ == "__main__":
    asyncio.run(run_channel_analysis_batch_once())

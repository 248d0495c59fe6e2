import os

from dotenv import load_dotenv

load_dotenv()


DEFAULT_NEET_CHANNELS = [
    "https://www.youtube.com/@CompetitionWallah",
    "https://www.youtube.com/@UnacademyNEET",
    "https://www.youtube.com/@VedantuNEET",
]


class YouTubeSettings:
    """YouTube Data API 접속 설정"""

    API_KEY_PREFIX = "AIzaSy"

    def __init__(
        self,
        api_key: str | None = None,
        request_timeout_seconds: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else os.getenv("YOUTUBE_API_KEY", "")
        self.request_timeout_seconds = (
            request_timeout_seconds
            if request_timeout_seconds is not None
            else float(os.getenv("YOUTUBE_REQUEST_TIMEOUT_SECONDS", "15"))
        )

    def has_valid_api_key(self) -> bool:
        # 한국어 주석: 키 존재 여부와 접두사만 확인한다. 실제 유효성은 호출 시점에 드러난다.
        key = (self.api_key or "").strip()
        return bool(key) and key.startswith(self.API_KEY_PREFIX)


class ChannelAnalysisSettings:
    """채널 분석 파이프라인 설정"""

    def __init__(self):
        self.max_concurrency = int(os.getenv("CHANNEL_ANALYSIS_MAX_CONCURRENCY", "3"))
        self.cache_enabled = os.getenv("CHANNEL_ANALYSIS_CACHE_ENABLED", "false").lower() == "true"
        self.default_time_window = int(os.getenv("CHANNEL_ANALYSIS_TIME_WINDOW", "7"))

        channels_env = os.getenv("CHANNEL_ANALYSIS_CHANNELS")
        if channels_env:
            self.default_channels = [x.strip() for x in channels_env.split(",") if x.strip()]
        else:
            self.default_channels = list(DEFAULT_NEET_CHANNELS)

        if self.max_concurrency <= 0:
            raise ValueError("CHANNEL_ANALYSIS_MAX_CONCURRENCY must be positive")

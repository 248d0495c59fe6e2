from datetime import datetime, timedelta

import pytest

from config.settings import YouTubeSettings
from fakes import FIXED_NOW, VALID_API_KEY


@pytest.fixture
def youtube_settings() -> YouTubeSettings:
    return YouTubeSettings(api_key=VALID_API_KEY, request_timeout_seconds=1)


@pytest.fixture
def days_ago():
    def _days_ago(days: int, hour: int = 12) -> datetime:
        return (FIXED_NOW - timedelta(days=days)).replace(hour=hour)
    return _days_ago

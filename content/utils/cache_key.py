import base64
from datetime import date
from typing import Iterable
from urllib.parse import quote


CHANNEL_INFO_TTL_SECONDS = 24 * 3600
VIDEO_LIST_TTL_SECONDS = 2 * 3600
VIDEO_DETAILS_TTL_SECONDS = 6 * 3600
ANALYSIS_TTL_SECONDS = 3600


def _encode(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def channel_info_key(channel_url: str) -> str:
    return f"channel:{quote(channel_url, safe='')}"


def video_list_key(channel_id: str, time_window: int, today: date) -> str:
    # 날짜가 키에 들어가므로 하루가 지나면 자연히 새 키가 된다.
    return f"videos:{channel_id}:{time_window}days:{today.isoformat()}"


def video_details_key(video_ids: Iterable[str]) -> str:
    return f"videodetails:{_encode(','.join(sorted(video_ids)))}"


def analysis_key(channel_urls: Iterable[str], time_window: int, today: date) -> str:
    signature = f"{'|'.join(sorted(channel_urls))}:{time_window}:{today.isoformat()}"
    return f"analysis:{_encode(signature)}"

import re


CHANNEL_ID_PATTERN = re.compile(r"^UC[a-zA-Z0-9_-]{22}$")

# 한국어 주석: 먼저 일치하는 패턴이 이긴다. (채널 ID 경로 → @핸들 → /c/ 커스텀 → /user/ 레거시)
CHANNEL_URL_PATTERNS = (
    re.compile(r"/channel/([a-zA-Z0-9_-]+)"),
    re.compile(r"/@([a-zA-Z0-9_.-]+)"),
    re.compile(r"/c/([a-zA-Z0-9_-]+)"),
    re.compile(r"/user/([a-zA-Z0-9_-]+)"),
)


def is_channel_id(value: str | None) -> bool:
    if not value:
        return False
    return bool(CHANNEL_ID_PATTERN.match(value))


def extract_channel_segment(url: str | None) -> str | None:
    # 한국어 주석: 채널 URL에서 채널 ID/핸들/커스텀 이름 부분만 잘라낸다.
    if not url:
        return None
    value = url.strip()
    for pattern in CHANNEL_URL_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None

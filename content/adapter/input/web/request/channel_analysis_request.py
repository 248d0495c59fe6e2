from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


MIN_TIME_WINDOW = 1
MAX_TIME_WINDOW = 30


class ChannelAnalysisRequest(BaseModel):
    channels: list[str] = Field(default=None, validate_default=True)
    timeWindow: int = Field(default=None, validate_default=True)
    requestId: str | None = None

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, value: Any) -> Any:
        # 한국어 주석: 위반 종류마다 서로 다른 error type을 돌려준다.
        if value is None:
            raise PydanticCustomError("channels_missing", "Channels property is missing from request")
        if not isinstance(value, list):
            raise PydanticCustomError("channels_not_array", "Channels must be an array")
        if len(value) == 0:
            raise PydanticCustomError("channels_empty", "At least one channel is required")
        for item in value:
            if not isinstance(item, str) or not item.strip():
                raise PydanticCustomError("channel_url_empty", "Each channel must be a non-empty string")
        # 검증은 공백을 제거한 값으로 하되, 응답의 channelUrl은 입력 그대로 유지한다.
        return value

    @field_validator("timeWindow", mode="before")
    @classmethod
    def validate_time_window(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("time_window_missing", "TimeWindow is required")
        if isinstance(value, bool) or not isinstance(value, int):
            raise PydanticCustomError("time_window_not_integer", "TimeWindow must be an integer")
        if not MIN_TIME_WINDOW <= value <= MAX_TIME_WINDOW:
            raise PydanticCustomError(
                "time_window_out_of_range",
                "Invalid time window. Must be between {min} and {max} days",
                {"min": MIN_TIME_WINDOW, "max": MAX_TIME_WINDOW},
            )
        return value


class ChannelComparisonRequest(ChannelAnalysisRequest):
    metric: Literal["views", "engagement", "uploads"] = "views"

from abc import ABC, abstractmethod
from typing import Any, Optional


class AnalysisCachePort(ABC):
    """키-값 캐시. 값은 JSON 직렬화 가능한 객체여야 한다."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        pass

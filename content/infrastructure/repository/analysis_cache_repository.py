import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from config.database.session import SessionLocal
from content.application.port.analysis_cache_port import AnalysisCachePort
from content.infrastructure.orm.models import AnalysisCacheORM


logger = logging.getLogger(__name__)


class AnalysisCacheRepository(AnalysisCachePort):
    """
    channel_analysis_cache 테이블 기반 TTL 캐시.

    채널 분석은 워커 스레드에서 동시에 실행되므로 호출마다 세션을 새로 연다.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[Any]:
        with self.session_factory() as db:
            orm = db.get(AnalysisCacheORM, key)
            if orm is None:
                return None
            if self._as_utc(orm.expires_at) <= datetime.now(timezone.utc):
                # 한국어 주석: 만료된 항목은 읽는 시점에 정리한다.
                db.delete(orm)
                db.commit()
                return None
            return json.loads(orm.payload)

    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        payload = json.dumps(value, ensure_ascii=False)
        with self.session_factory() as db:
            orm = db.get(AnalysisCacheORM, key)
            if orm is None:
                orm = AnalysisCacheORM(cache_key=key)
                db.add(orm)
            orm.payload = payload
            orm.expires_at = expires_at
            db.commit()
        logger.debug(f"Cached {key} for {ttl_seconds}s")

    def purge_expired(self) -> int:
        with self.session_factory() as db:
            deleted = (
                db.query(AnalysisCacheORM)
                .filter(AnalysisCacheORM.expires_at <= datetime.now(timezone.utc))
                .delete(synchronize_session=False)
            )
            db.commit()
        return int(deleted or 0)

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # SQLite는 tz 정보를 보존하지 않으므로 naive 값은 UTC로 간주한다.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

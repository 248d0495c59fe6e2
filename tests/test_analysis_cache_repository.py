from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database.session import Base
from content.infrastructure.orm.models import AnalysisCacheORM
from content.infrastructure.repository.analysis_cache_repository import AnalysisCacheRepository


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def _insert_expired(session_factory, key: str) -> None:
    with session_factory() as db:
        db.add(
            AnalysisCacheORM(
                cache_key=key,
                payload='{"stale": true}',
                expires_at=datetime.now(timezone.utc) - timedelta(minutes=5),
            )
        )
        db.commit()


def test_put_then_get_returns_json_value(session_factory):
    repository = AnalysisCacheRepository(session_factory)

    repository.put("videos:UC1:7days:2024-05-15", ["v1", "v2"], ttl_seconds=60)

    assert repository.get("videos:UC1:7days:2024-05-15") == ["v1", "v2"]
    assert repository.get("missing") is None


def test_put_overwrites_existing_entry(session_factory):
    repository = AnalysisCacheRepository(session_factory)

    repository.put("channel:abc", {"channelName": "Old"}, ttl_seconds=60)
    repository.put("channel:abc", {"channelName": "New"}, ttl_seconds=60)

    assert repository.get("channel:abc") == {"channelName": "New"}


def test_expired_entry_is_dropped_on_read(session_factory):
    repository = AnalysisCacheRepository(session_factory)
    _insert_expired(session_factory, "analysis:old")

    assert repository.get("analysis:old") is None
    with session_factory() as db:
        assert db.get(AnalysisCacheORM, "analysis:old") is None


def test_purge_expired_removes_only_stale_rows(session_factory):
    repository = AnalysisCacheRepository(session_factory)
    _insert_expired(session_factory, "analysis:old")
    repository.put("analysis:fresh", {"ok": True}, ttl_seconds=3600)

    assert repository.purge_expired() == 1
    assert repository.get("analysis:fresh") == {"ok": True}

from sqlalchemy import Column, DateTime, Text, func

from config.database.session import Base


class AnalysisCacheORM(Base):
    __tablename__ = "channel_analysis_cache"

    cache_key = Column(Text, primary_key=True)
    payload = Column(Text, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

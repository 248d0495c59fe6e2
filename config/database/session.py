import os
import urllib.parse

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

# Uses SQL_* env vars provided (e.g., Supabase): SQL_USER, SQL_PASSWORD, SQL_HOST, SQL_PORT, SQL_DATABASE
# 한국어 주석: 분석 결과 캐시 테이블이 위치할 PostgreSQL 접속 정보로 SQLAlchemy 엔진을 만듭니다.
password = urllib.parse.quote_plus(os.getenv("SQL_PASSWORD", ""))

DATABASE_URL = (
    f"postgresql+psycopg2://{os.getenv('SQL_USER','postgres')}:{password}"
    f"@{os.getenv('SQL_HOST','localhost')}:{os.getenv('SQL_PORT','5432')}/{os.getenv('SQL_DATABASE','channel_analysis')}"
)

# 엔진은 실제 연결 시점에 접속하므로 캐시를 끈 상태에서도 import는 안전하다.
engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("SQL_ECHO", "false").lower() == "true",
    pool_pre_ping=True,
    pool_recycle=300,  # 5분마다 재사용
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db_schema():
    """
    애플리케이션 기동 시 캐시 테이블이 없을 경우를 대비해 스키마를 생성합니다.
    """
    # ORM 모델을 Base.metadata에 등록하기 위해 import 한다.
    from content.infrastructure.orm import models  # noqa: F401

    Base.metadata.create_all(bind=engine)

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import ChannelAnalysisSettings, YouTubeSettings
from config.database.session import init_db_schema
from content.adapter.input.web.channel_analysis_router import channel_analysis_router


load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan 훅에서 캐시 테이블을 준비합니다.
    """
    # 캐시를 켠 경우에만 DB에 접속한다.
    if ChannelAnalysisSettings().cache_enabled:
        try:
            init_db_schema()
        except Exception as e:
            logger.warning(f"Analysis cache schema init failed, continuing without cache table: {e}")
    yield


app = FastAPI(title="Channel Analysis Server", version="0.1.0", lifespan=lifespan)

origins_env = os.getenv("CORS_ORIGINS")
origins = [origin for origin in origins_env.split(",") if origin] if origins_env else ["http://localhost:5173"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(channel_analysis_router, prefix="/analysis")


@app.get("/health")
def health_check() -> dict:
    """
    헬스체크 엔드포인트입니다. API 키 값은 노출하지 않고 설정 여부만 알려줍니다.
    """
    return {
        "status": "ok",
        "hasYouTubeApiKey": YouTubeSettings().has_valid_api_key(),
    }


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("APP_HOST", "0.0.0.0")
    port = int(os.getenv("APP_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)

from dotenv import load_dotenv
from dependency_injector import containers, providers

from config.settings import ChannelAnalysisSettings, YouTubeSettings
from content.application.usecase.channel_analysis_usecase import ChannelAnalysisUseCase
from content.infrastructure.client.youtube_client import YouTubeClient
from content.infrastructure.repository.analysis_cache_repository import AnalysisCacheRepository


def _build_cache(enabled: bool):
    # 한국어 주석: 캐시는 선택 사항이다. 꺼져 있으면 None을 주입해 매번 새로 계산한다.
    if not enabled:
        return None
    return AnalysisCacheRepository()


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    youtube_settings = providers.Singleton(YouTubeSettings)

    # 채널 분석 1건마다 새 클라이언트(새 httplib2.Http)를 만든다.
    youtube_client = providers.Factory(
        YouTubeClient,
        settings=youtube_settings,
    )

    analysis_cache = providers.Singleton(
        _build_cache,
        enabled=config.cache_enabled,
    )

    channel_analysis_usecase = providers.Factory(
        ChannelAnalysisUseCase,
        settings=youtube_settings,
        client_factory=youtube_client.provider,
        cache=analysis_cache,
        max_concurrency=config.max_concurrency,
    )


def create_container() -> Container:
    load_dotenv()

    settings = ChannelAnalysisSettings()
    container = Container()
    container.config.from_dict({
        'max_concurrency': settings.max_concurrency,
        'cache_enabled': settings.cache_enabled,
        'default_time_window': settings.default_time_window,
        'default_channels': settings.default_channels,
    })
    return container

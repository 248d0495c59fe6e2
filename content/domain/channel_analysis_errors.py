class ChannelAnalysisError(Exception):
    """채널 분석 파이프라인 공통 예외"""
    pass


class CredentialError(ChannelAnalysisError):
    """API 키가 없거나 형식이 잘못된 경우. 배치 전체를 중단한다."""
    pass


class ResolutionError(ChannelAnalysisError):
    """채널 URL/핸들에서 채널 ID를 얻지 못한 경우"""
    pass


class DiscoveryError(ChannelAnalysisError):
    """기간 내 영상 검색 호출 실패"""
    pass


class DetailFetchError(ChannelAnalysisError):
    """영상 상세 정보 배치 호출 실패"""
    pass


class MetricsFetchError(ChannelAnalysisError):
    """채널 통계 조회 실패 (채널 없음 포함)"""
    pass

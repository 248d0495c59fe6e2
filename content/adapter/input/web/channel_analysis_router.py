from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from content.adapter.input.web.request.channel_analysis_request import (
    ChannelAnalysisRequest,
    ChannelComparisonRequest,
)
from content.adapter.input.web.response.channel_analysis_response import (
    ChannelAnalysisResponse,
    ChannelComparisonResponse,
)
from content.application.usecase.channel_analysis_usecase import ChannelAnalysisUseCase
from content.domain.channel_analysis_errors import CredentialError
from content.infrastructure.config.dependency_injection import create_container


channel_analysis_router = APIRouter(tags=["analysis"])
container = create_container()


def get_channel_analysis_usecase() -> ChannelAnalysisUseCase:
    return container.channel_analysis_usecase()


@channel_analysis_router.post("/channels", response_model=ChannelAnalysisResponse)
async def analyze_channels(
    request: ChannelAnalysisRequest,
    usecase: ChannelAnalysisUseCase = Depends(get_channel_analysis_usecase),
):
    try:
        result = await usecase.analyze_all(
            request.channels,
            request.timeWindow,
            request_id=request.requestId,
        )
    except CredentialError as exc:
        # 한국어 주석: 키 문제는 부분 결과 없이 전체 실패로 응답한다.
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return JSONResponse(jsonable_encoder(result.to_dict()))


@channel_analysis_router.post("/channels/comparison", response_model=ChannelComparisonResponse)
async def compare_channels(
    request: ChannelComparisonRequest,
    usecase: ChannelAnalysisUseCase = Depends(get_channel_analysis_usecase),
):
    try:
        result = await usecase.analyze_all(
            request.channels,
            request.timeWindow,
            request_id=request.requestId,
        )
        comparison = usecase.build_comparison(result, metric=request.metric)
    except CredentialError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return JSONResponse(jsonable_encoder(comparison))

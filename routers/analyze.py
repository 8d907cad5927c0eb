# routers/analyze.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from config import Settings, cors_headers
from dependencies import get_pipeline, get_settings
from models.analyze_model import AnalysisResult, AnalyzeMoodRequest, ErrorResponse
from services.analyze_service import MoodPipeline
from services.errors import InvalidInput, MoodAnalysisError, UnsupportedMethod

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["analyze"])

# 독립 서버 경로 + 서버리스(/api) 경로 둘 다 같은 핸들러
ANALYZE_PATHS = ("/analyze-mood", "/api/analyze-mood")
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


def server_error(details: str, settings: Settings) -> JSONResponse:
    content = {"error": INTERNAL_ERROR_MESSAGE}
    # 상세 원인은 개발 모드에서만 노출
    if settings.is_development:
        content["details"] = details
    return JSONResponse(status_code=500, content=content)


def analyze_mood(
    b: Optional[AnalyzeMoodRequest] = None,
    pipeline: MoodPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    try:
        return pipeline.run(b.userInput if b is not None else None)
    except InvalidInput as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except MoodAnalysisError as e:
        logger.error("Error in /analyze-mood (stage=%s): %s", e.stage, e)
        return server_error(e.details, settings)
    except Exception as e:
        logger.exception("Unexpected error in /analyze-mood")
        return server_error(str(e), settings)


def analyze_mood_options(request: Request, settings: Settings = Depends(get_settings)):
    return Response(status_code=200, headers=cors_headers(settings, request.headers.get("origin")))


def analyze_mood_other_methods(request: Request):
    raise UnsupportedMethod("Method not allowed", details=request.method)


for _path in ANALYZE_PATHS:
    router.add_api_route(
        _path,
        analyze_mood,
        methods=["POST"],
        response_model=AnalysisResult,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    router.add_api_route(_path, analyze_mood_options, methods=["OPTIONS"], include_in_schema=False)
    router.add_api_route(
        _path,
        analyze_mood_other_methods,
        methods=["GET", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )

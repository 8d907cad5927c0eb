# main.py
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import cors_headers
from dependencies import get_settings
from routers import analyze
from services.analyze_service import INVALID_INPUT_MESSAGE, check_prompts
from services.errors import UnsupportedMethod

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("mood_api")

# 프롬프트 파일 누락 시 부팅 단계에서 바로 실패
check_prompts()

app = FastAPI(title="Mood Analysis API")


# CORS 는 이 미들웨어 + OPTIONS 라우트가 전담 (preflight 도 항상 200)
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Global error: %s %s", request.method, request.url.path)
        response = JSONResponse(status_code=500, content={"error": "Server error"})
    for name, value in cors_headers(settings, request.headers.get("origin")).items():
        response.headers.setdefault(name, value)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(UnsupportedMethod)
async def unsupported_method_handler(request: Request, exc: UnsupportedMethod):
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    # 본문이 JSON 객체가 아님 등 → 입력 오류로 통일
    return JSONResponse(status_code=400, content={"error": INVALID_INPUT_MESSAGE})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


app.include_router(analyze.router)

@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    logger.info("Server is running at: http://localhost:%s/analyze-mood", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)

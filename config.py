# config.py
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(), override=False)

DEFAULT_BASE_URL = "https://dashscope-intl.aliyuncs.com/compatible-mode/v1"
DEFAULT_MODEL = "qwen-plus"


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    app_env: str = "production"
    cors_allow_origins: Tuple[str, ...] = ("*",)
    strict_language: bool = True
    include_recommendations: bool = True
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        # DashScope 키 우선, 없으면 OPENAI_API_KEY
        api_key = os.getenv("DASHSCOPE_API_KEY") or os.getenv("OPENAI_API_KEY") or ""
        origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
        return cls(
            api_key=api_key,
            base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
            model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
            app_env=os.getenv("APP_ENV", "production"),
            cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",),
            strict_language=_flag("MOOD_STRICT_LANGUAGE", True),
            include_recommendations=_flag("MOOD_RECOMMENDATIONS", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int("PORT", 3000),
        )


def cors_headers(settings: Settings, origin: Optional[str] = None) -> Dict[str, str]:
    """
    OPTIONS 응답 및 모든 응답에 붙는 CORS 헤더.
    허용 목록이 '*' 이면 그대로, 아니면 요청 origin 이 목록에 있을 때만 echo.
    """
    allowed = settings.cors_allow_origins
    if "*" in allowed:
        allow_origin = "*"
    elif origin and origin in allowed:
        allow_origin = origin
    else:
        allow_origin = allowed[0]
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
    }

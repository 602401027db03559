"""
Application configuration loader.
"""

from dataclasses import dataclass
import os

from dotenv import load_dotenv
from loguru import logger

DEFAULT_JIRA_BASE_URL = "https://jisr.marocpme.gov.ma/jira"
DEV_SESSION_SECRET = "dev-only-session-secret-change-me"


@dataclass(frozen=True)
class Settings:
    jira_base_url: str
    http_timeout_seconds: float

    use_mock_data: bool

    app_env: str
    log_level: str

    session_secret: str

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def _bool(value: str) -> bool:
    return str(value).lower() in ("1", "true", "yes", "on")


def _float(value: str, default: float) -> float:
    try:
        return float(str(value).strip())
    except Exception:
        return default


def load_settings() -> Settings:
    load_dotenv()

    app_env = os.getenv("APP_ENV", "dev").strip().lower() or "dev"

    secret = (os.getenv("SESSION_SECRET", "") or "").strip()
    if not secret:
        if app_env == "production":
            raise RuntimeError("SESSION_SECRET must be set when APP_ENV=production")
        logger.warning("SESSION_SECRET is not set; using an insecure development secret")
        secret = DEV_SESSION_SECRET

    return Settings(
        jira_base_url=os.getenv("JIRA_BASE_URL", DEFAULT_JIRA_BASE_URL),
        http_timeout_seconds=_float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"), 10.0),

        use_mock_data=_bool(os.getenv("USE_MOCK_DATA", "false")),

        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", "INFO"),

        session_secret=secret,
    )

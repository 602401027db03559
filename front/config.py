"""
Dashboard HTTP listener settings (FRONT_HOST, FRONT_PORT, FRONT_ACCESS_LOG).
"""

from dataclasses import dataclass
import os

from dotenv import load_dotenv


@dataclass(frozen=True)
class FrontSettings:
    host: str
    port: int
    access_log: bool


def _port(v: str, default: int) -> int:
    try:
        port = int(str(v).strip())
    except (TypeError, ValueError):
        return default
    return port if 0 < port < 65536 else default


def load_front_settings() -> FrontSettings:
    load_dotenv()
    return FrontSettings(
        host=os.getenv("FRONT_HOST", "127.0.0.1").strip() or "127.0.0.1",
        port=_port(os.getenv("FRONT_PORT", "8010"), 8010),
        access_log=str(os.getenv("FRONT_ACCESS_LOG", "false")).lower() in ("1", "true", "yes", "on"),
    )

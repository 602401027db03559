"""
Loguru logging setup for the dashboard.
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, Union

from loguru import logger

_BASIC_RE = re.compile(r"(Basic\s+)[A-Za-z0-9+/=]+")


def redact(message: str) -> str:
    return _BASIC_RE.sub(r"\1***", message)


def _redact_record(record: Dict[str, Any]) -> None:
    record["message"] = redact(record["message"])


def setup_logging(log_level: str, app_env: str, logs_dir: Union[str, Path] = "logs") -> None:
    logger.remove()
    logger.configure(patcher=_redact_record)

    logger.add(
        sys.stdout,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
    )

    logs_path = Path(logs_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    logger.add(
        logs_path / f"dashboard_{app_env}.log",
        level=log_level,
        rotation="10 MB",
        retention="14 days",
        compression="zip",
        enqueue=True,
    )
    logger.info("Logging ready (level={}, env={}, dir={})", log_level, app_env, logs_path)

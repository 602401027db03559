"""
Front server runner (uvicorn in background thread).
"""

import threading
from typing import Any, Optional

import uvicorn
from loguru import logger

from front.config import FrontSettings, load_front_settings


class FrontServer:
    def __init__(self, asgi_app: Any, settings: Optional[FrontSettings] = None) -> None:
        self._app = asgi_app
        self._settings = settings or load_front_settings()
        self._thread: Optional[threading.Thread] = None
        self._server: Optional[uvicorn.Server] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        s = self._settings

        cfg = uvicorn.Config(
            self._app,
            host=s.host,
            port=int(s.port),
            log_level="info",
            access_log=s.access_log,
        )
        self._server = uvicorn.Server(cfg)

        def _run() -> None:
            try:
                self._server.run()
            except Exception as e:
                logger.error("Dashboard server crashed: {}", e)

        self._thread = threading.Thread(target=_run, name="front_ui", daemon=True)
        self._thread.start()
        logger.info("Dashboard started on http://{}:{}", s.host, s.port)

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=5)
        logger.info("Dashboard stopped")

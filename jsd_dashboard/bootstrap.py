"""
Application bootstrap: config, logging, data source, dashboard server.
"""

from dataclasses import dataclass
import time
from typing import Any, Dict

from loguru import logger

from jsd_dashboard.config.settings import Settings, load_settings
from jsd_dashboard.logging.setup import setup_logging
from jsd_dashboard.sd.data_source import ServiceDeskSource, build_source

from front.app import create_app
from front.config import load_front_settings
from front.server import FrontServer


@dataclass
class Runner:
    settings: Settings
    source: ServiceDeskSource
    front: FrontServer

    def start(self) -> None:
        self.front.start()

    def run_forever(self) -> None:
        self.start()
        try:
            while self.front.running:
                time.sleep(1)
            logger.warning("Dashboard server exited")
        except KeyboardInterrupt:
            logger.info("Shutdown requested (Ctrl+C)")
        finally:
            self.front.stop()
            logger.info("Service stopped")


def build_app() -> Dict[str, Any]:
    settings = load_settings()
    setup_logging(settings.log_level, settings.app_env)

    source = build_source(settings)
    web_app = create_app(settings=settings, source=source)
    front_server = FrontServer(web_app, load_front_settings())

    runner = Runner(settings=settings, source=source, front=front_server)

    return {
        "settings": settings,
        "source": source,
        "web_app": web_app,
        "front": front_server,
        "runner": runner,
    }

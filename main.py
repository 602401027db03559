from jsd_dashboard.bootstrap import build_app
from loguru import logger


def main() -> None:
    app = build_app()
    logger.info("Dashboard service started (mock={}, env={})", app["settings"].use_mock_data, app["settings"].app_env)
    app["runner"].run_forever()


if __name__ == "__main__":
    main()

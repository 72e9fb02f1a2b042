"""Process entry point: configure logging, build the app and serve it with uvicorn."""
from __future__ import annotations

from loguru import logger

from userhub.app import create_app
from userhub.core.config import get_settings
from userhub.core.logging import configure_logging


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    app = create_app(settings)
    logger.info("Server listening on http://{}:{}", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()

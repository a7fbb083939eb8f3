"""Main entry point for the coordinator service."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from .api import create_fastapi_app
from .app import Application
from .config import PROJECT_ROOT, Settings
from .logging_config import setup_logging


def main():
    """Run the coordinator service."""
    load_dotenv(PROJECT_ROOT / ".env")
    load_dotenv(Path.cwd() / ".env")
    setup_logging()

    # Get configuration from environment
    settings = Settings.from_env()
    if not settings.url:
        settings.url = f"http://{settings.api_host}:{settings.api_port}"

    app = create_fastapi_app(Application(settings=settings))

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()

"""
TempoPush - Web application entry point.

Runs the FastAPI app from ``backend.src.adapters.inbound.fastapi_app`` under uvicorn.
"""

import uvicorn

from backend.src.infrastructure.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "backend.src.adapters.inbound.fastapi_app:app",
        host=settings.web.host,
        port=settings.web.port,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()

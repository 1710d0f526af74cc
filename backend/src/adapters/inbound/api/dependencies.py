"""FastAPI dependencies resolving application services from the container."""
from __future__ import annotations

from fastapi import Request

from backend.src.application.progress_service import ProgressService


def get_progress_service(request: Request) -> ProgressService:
    """Build the progress service from the container attached at startup."""
    return request.app.state.container.progress_service()

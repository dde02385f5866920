"""
Information endpoint for API v1.

Returns the service name, version and the storage backend in use, so
that operators and the bundled client can check that the API is up
without touching the books resource.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request

from library_api.app.core.config import settings

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def get_info(request: Request) -> Dict[str, Any]:
    """Return general information about the running service."""
    repository = request.app.state.repository
    return {
        "name": settings.project_name,
        "version": settings.api_version,
        "storage": repository.name,
    }

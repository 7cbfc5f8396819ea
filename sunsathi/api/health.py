"""
Health check endpoint for the estimator API.

Provides a simple GET /health endpoint that returns HTTP 200 with the
service status and whether a Gemini API key is configured. The key itself
is never echoed.

CHANGELOG:
- 2026-10-14: Report ai_configured (STORY-009)
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

from fastapi import APIRouter

from sunsathi.api.deps import Settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(settings: Settings) -> dict[str, str | bool]:
    """Return a simple health status.

    Returns:
        dict: ``{"status": "ok", "ai_configured": <bool>}``.
    """
    return {"status": "ok", "ai_configured": settings.has_api_key}

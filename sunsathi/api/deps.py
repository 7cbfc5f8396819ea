"""
FastAPI dependency injection providers.

Provides the loaded settings and a configured Gemini client for use with
FastAPI's Depends() mechanism. Building the client fails with a
ConfigurationError when no API key is set, so AI routes are refused before
any upload is read or any network call is made.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-009)
"""

from typing import Annotated

from fastapi import Depends, Request

from sunsathi.config import SunSathiSettings
from sunsathi.services.gemini import GeminiClient


def get_settings(request: Request) -> SunSathiSettings:
    """Return the settings loaded at startup and stored on app.state."""
    return request.app.state.settings


# Type alias for injecting settings via FastAPI Depends().
Settings = Annotated[SunSathiSettings, Depends(get_settings)]


def get_gemini_client(settings: Settings) -> GeminiClient:
    """Build a Gemini client from the current settings.

    Raises:
        ConfigurationError: If ``API_KEY`` is not configured.
    """
    return GeminiClient(
        api_key=settings.api_key,
        model_id=settings.model_id,
        base_url=settings.gemini_base_url,
        timeout_s=settings.request_timeout_s,
        max_video_bytes=settings.max_video_bytes,
    )


# Usage in route handlers:
#   async def my_route(gemini: Gemini):
#       result = await gemini.detect_appliances(...)
Gemini = Annotated[GeminiClient, Depends(get_gemini_client)]

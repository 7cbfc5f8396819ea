"""
Gemini client for the three AI-backed flows.

Builds ``generateContent`` requests (inline media + instruction + response
schema), POSTs them to the Generative Language REST API over HTTPS, and
validates the JSON reply against the matching Pydantic model.

Operations:
- analyze_solar_potential(image_b64, region): roof photo to SolarAnalysisResult.
- detect_appliances(image_b64): appliance photo to a list of Appliance.
- analyze_video_efficiency(video_b64, mime_type): room video to EfficiencyResult.

Every failure after the request is built (network error, non-200 status,
empty body, schema mismatch) becomes an AnalysisError subclass carrying the
flow's generic user-facing message. There is no retry and no backoff.

CHANGELOG:
- 2026-10-14: Enforce the video size ceiling before any request (STORY-007)
- 2026-10-13: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from sunsathi.constants import (
    DEFAULT_GEMINI_BASE_URL,
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_MODEL_ID,
    DETECTED_APPLIANCE_DAILY_HOURS,
    MAX_VIDEO_BYTES,
    IndianRegion,
)
from sunsathi.errors import (
    ConfigurationError,
    ResponseDecodeError,
    ServiceRequestError,
)
from sunsathi.models import (
    Appliance,
    DetectedApplianceList,
    EfficiencyResult,
    SolarAnalysisResult,
)
from sunsathi.services.media import decoded_size, ensure_within_limit
from sunsathi.services.prompts import (
    APPLIANCE_DETECTION_PROMPT,
    VIDEO_EFFICIENCY_PROMPT,
    solar_potential_prompt,
)
from sunsathi.services.schemas import (
    APPLIANCE_DETECTION_SCHEMA,
    EFFICIENCY_AUDIT_SCHEMA,
    SOLAR_ANALYSIS_SCHEMA,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_SOLAR_TEMPERATURE = 0.4

MISSING_API_KEY_MESSAGE = "API Key is missing in environment variables."
SOLAR_FAILURE_MESSAGE = (
    "Failed to analyze the image. Please try again with a clearer photo."
)
DETECTION_FAILURE_MESSAGE = "Could not identify appliances. Please try again."
VIDEO_FAILURE_MESSAGE = (
    "Failed to analyze video. Ensure file is < 10MB and format is supported."
)


class GeminiClient:
    """Structured-output client for the Gemini ``generateContent`` endpoint.

    A fresh ``httpx.AsyncClient`` is opened per call, so independent flows
    can be in flight at the same time without sharing state. TLS certificate
    verification is always enabled.

    Args:
        api_key: Gemini API key, sent as the ``x-goog-api-key`` header.
        model_id: Model name, e.g. ``gemini-2.5-flash``.
        base_url: API base URL. Must start with ``https://``.
        timeout_s: Per-call timeout, or None for no client-side timeout.
        max_video_bytes: Ceiling for decoded video size in the audit flow.

    Raises:
        ConfigurationError: If *api_key* is empty or blank.
        ValueError: If *base_url* does not start with ``https://``.

    Usage::

        client = GeminiClient(api_key=settings.api_key)
        result = await client.analyze_solar_potential(image_b64, IndianRegion.WEST)
        if not result.is_analyzable:
            show_unclear_roof(result.reasoning)
    """

    def __init__(
        self,
        api_key: str,
        model_id: str = DEFAULT_MODEL_ID,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        timeout_s: float | None = None,
        max_video_bytes: int = MAX_VIDEO_BYTES,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        if not base_url.lower().startswith("https://"):
            raise ValueError(f"Gemini base URL must use HTTPS (got: '{base_url}').")
        self._api_key = api_key
        self._model_id = model_id
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_video_bytes = max_video_bytes

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> str:
        """Full ``generateContent`` URL for the configured model."""
        return f"{self._base_url}/models/{self._model_id}:generateContent"

    async def analyze_solar_potential(
        self,
        image_b64: str,
        region: IndianRegion,
    ) -> SolarAnalysisResult:
        """Estimate rooftop solar potential from a roof photo.

        Args:
            image_b64: Base64-encoded JPEG of the roof.
            region: Region whose peak sun hours drive the generation figures.

        Returns:
            SolarAnalysisResult: The service's estimate. A zero
            ``usable_roof_area_sq_m`` means the roof could not be analysed;
            this is returned, not raised.

        Raises:
            AnalysisError: On network, status, or decoding failure.
        """
        body = self.build_request(
            media_b64=image_b64,
            mime_type=DEFAULT_IMAGE_MIME_TYPE,
            prompt=solar_potential_prompt(region),
            schema=SOLAR_ANALYSIS_SCHEMA,
            temperature=_SOLAR_TEMPERATURE,
        )
        result = await self._generate(
            body, SolarAnalysisResult, failure_message=SOLAR_FAILURE_MESSAGE
        )
        logger.info(
            "Solar analysis for region=%s: area=%.1f m2, capacity=%.2f kW",
            region.name,
            result.usable_roof_area_sq_m,
            result.system_capacity_kw,
        )
        return result

    async def detect_appliances(
        self,
        image_b64: str,
        mime_type: str = DEFAULT_IMAGE_MIME_TYPE,
    ) -> list[Appliance]:
        """Identify appliances in a photo.

        The service estimates wattage, quantity and category only, so every
        returned appliance gets ``DETECTED_APPLIANCE_DAILY_HOURS`` daily
        hours and an id of the form ``ai-<epoch-ms>-<index>``.

        Raises:
            AnalysisError: On network, status, or decoding failure.
        """
        body = self.build_request(
            media_b64=image_b64,
            mime_type=mime_type,
            prompt=APPLIANCE_DETECTION_PROMPT,
            schema=APPLIANCE_DETECTION_SCHEMA,
        )
        detected = await self._generate(
            body, DetectedApplianceList, failure_message=DETECTION_FAILURE_MESSAGE
        )

        stamp = int(time.time() * 1000)
        appliances = [
            Appliance(
                id=f"ai-{stamp}-{index}",
                name=item.name,
                wattage=item.wattage,
                quantity=item.quantity,
                daily_hours=DETECTED_APPLIANCE_DAILY_HOURS,
                category=item.category,
            )
            for index, item in enumerate(detected.appliances)
        ]
        logger.info("Detected %d appliance(s) in image", len(appliances))
        return appliances

    async def analyze_video_efficiency(
        self,
        video_b64: str,
        mime_type: str,
    ) -> EfficiencyResult:
        """Audit a short room video for inefficient appliances.

        The decoded size is checked against ``max_video_bytes`` first; an
        oversized clip is rejected without any network call.

        Args:
            video_b64: Base64-encoded video clip.
            mime_type: Video encoding, e.g. ``video/mp4``.

        Raises:
            FileTooLargeError: If the clip exceeds the size ceiling.
            AnalysisError: On network, status, or decoding failure.
        """
        ensure_within_limit(decoded_size(video_b64), self._max_video_bytes)

        body = self.build_request(
            media_b64=video_b64,
            mime_type=mime_type,
            prompt=VIDEO_EFFICIENCY_PROMPT,
            schema=EFFICIENCY_AUDIT_SCHEMA,
        )
        result = await self._generate(
            body, EfficiencyResult, failure_message=VIDEO_FAILURE_MESSAGE
        )
        logger.info(
            "Video audit: %d appliance(s), score=%.0f, loss=%.0f INR/month",
            len(result.appliances),
            result.efficiency_score,
            result.total_monthly_loss_inr,
        )
        return result

    @staticmethod
    def build_request(
        *,
        media_b64: str,
        mime_type: str,
        prompt: str,
        schema: dict[str, Any],
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Build a ``generateContent`` request body.

        The media part comes first, followed by the instruction text. The
        reply is constrained to JSON matching *schema*.
        """
        generation_config: dict[str, Any] = {
            "responseMimeType": "application/json",
            "responseSchema": schema,
        }
        if temperature is not None:
            generation_config["temperature"] = temperature
        return {
            "contents": [
                {
                    "parts": [
                        {"inlineData": {"mimeType": mime_type, "data": media_b64}},
                        {"text": prompt},
                    ]
                }
            ],
            "generationConfig": generation_config,
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _generate(
        self,
        body: dict[str, Any],
        model: type[M],
        *,
        failure_message: str,
    ) -> M:
        """POST *body*, then validate the reply text as *model*."""
        try:
            async with httpx.AsyncClient(verify=True, timeout=self._timeout_s) as client:
                response = await client.post(
                    self.endpoint,
                    json=body,
                    headers={"x-goog-api-key": self._api_key},
                )
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed (network error): %s", exc)
            raise ServiceRequestError(failure_message) from exc

        if response.status_code != 200:
            logger.error(
                "Gemini request failed (HTTP %d): %s",
                response.status_code,
                response.text[:200],
            )
            raise ServiceRequestError(failure_message)

        try:
            text = _extract_text(response.json())
        except ValueError as exc:
            logger.error("Gemini reply is not valid JSON", exc_info=True)
            raise ResponseDecodeError(failure_message) from exc

        if not text:
            logger.error("No response text from Gemini.")
            raise ResponseDecodeError(failure_message)

        try:
            return model.model_validate_json(text)
        except ValidationError as exc:
            logger.error(
                "Gemini reply failed %s validation: %s", model.__name__, exc
            )
            raise ResponseDecodeError(failure_message) from exc


def _extract_text(payload: Any) -> str:
    """Concatenate the text parts of the first candidate.

    Returns an empty string when the reply carries no candidate (for
    example when the prompt was blocked) or when the envelope does not have
    the expected shape.
    """
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    if not isinstance(first, dict):
        return ""
    content = first.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )

"""
Unit tests for the Gemini client.

Tests verify:
- Missing API key raises ConfigurationError before any request.
- Non-HTTPS base URL is rejected at construction.
- Request body: inline media first, prompt second, JSON schema config.
- Solar prompt embeds the region's sun hours and uses temperature 0.4.
- Replies are validated into typed results; a zero roof area is returned.
- Detected appliances get default hours and ai-* ids.
- Network errors and non-200 statuses raise ServiceRequestError.
- Empty or schema-invalid replies raise ResponseDecodeError.
- Oversized videos are rejected without creating an HTTP client.

CHANGELOG:
- 2026-10-14: Add video size ceiling tests (STORY-007)
- 2026-10-13: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

import base64
import json
import re
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from sunsathi.constants import IndianRegion
from sunsathi.errors import (
    AnalysisError,
    ConfigurationError,
    FileTooLargeError,
    ResponseDecodeError,
    ServiceRequestError,
)
from sunsathi.services.gemini import (
    DETECTION_FAILURE_MESSAGE,
    SOLAR_FAILURE_MESSAGE,
    VIDEO_FAILURE_MESSAGE,
    GeminiClient,
)
from sunsathi.services.schemas import SOLAR_ANALYSIS_SCHEMA

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

IMAGE_B64 = base64.b64encode(b"\xff\xd8\xff fake jpeg").decode()

SOLAR_REPLY = {
    "usableRoofAreaSqM": 40,
    "numberOfPanels": 20,
    "systemCapacityKw": 8,
    "dailyGenerationKwh": 46,
    "monthlyGenerationKwh": 1380,
    "monthlySavingsInr": 11040,
    "yearlySavingsInr": 132480,
    "estimatedSubsidyInr": 78000,
    "roiYears": 2.4,
    "reasoning": "Large flat roof with good exposure.",
}


def _gemini_reply(payload: Any) -> dict:
    """Wrap *payload* as the JSON text of a generateContent reply."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _mock_http(
    reply: dict | None = None,
    status_code: int = 200,
    side_effect: Exception | None = None,
) -> AsyncMock:
    """Create a mock httpx.AsyncClient usable as an async context manager."""
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.text = "upstream said no"
    mock_response.json = MagicMock(return_value=reply if reply is not None else {})

    mock_client = AsyncMock()
    if side_effect is not None:
        mock_client.post = AsyncMock(side_effect=side_effect)
    else:
        mock_client.post = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def _client(**kwargs: Any) -> GeminiClient:
    return GeminiClient(api_key="key-123", **kwargs)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    """Credential and URL checks happen at construction."""

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_missing_api_key_raises(self, api_key: str) -> None:
        with pytest.raises(ConfigurationError, match="API Key is missing"):
            GeminiClient(api_key=api_key)

    def test_http_base_url_rejected(self) -> None:
        with pytest.raises(ValueError, match="HTTPS"):
            GeminiClient(api_key="key-123", base_url="http://example.com")

    def test_endpoint_uses_model_id(self) -> None:
        client = GeminiClient(
            api_key="key-123",
            model_id="gemini-test",
            base_url="https://api.example.com/v1beta/",
        )
        assert client.endpoint == (
            "https://api.example.com/v1beta/models/gemini-test:generateContent"
        )


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------


class TestBuildRequest:
    """Request body follows the structured-output contract."""

    def test_parts_order_and_config(self) -> None:
        body = GeminiClient.build_request(
            media_b64="abc",
            mime_type="video/mp4",
            prompt="describe",
            schema={"type": "OBJECT"},
        )
        parts = body["contents"][0]["parts"]
        assert parts[0] == {"inlineData": {"mimeType": "video/mp4", "data": "abc"}}
        assert parts[1] == {"text": "describe"}
        assert body["generationConfig"] == {
            "responseMimeType": "application/json",
            "responseSchema": {"type": "OBJECT"},
        }

    def test_temperature_included_when_set(self) -> None:
        body = GeminiClient.build_request(
            media_b64="abc",
            mime_type="image/jpeg",
            prompt="p",
            schema={},
            temperature=0.4,
        )
        assert body["generationConfig"]["temperature"] == 0.4


# ---------------------------------------------------------------------------
# Solar potential
# ---------------------------------------------------------------------------


class TestAnalyzeSolarPotential:
    """Roof photo analysis."""

    @pytest.mark.asyncio
    async def test_posts_image_prompt_and_schema(self) -> None:
        mock_client = _mock_http(_gemini_reply(SOLAR_REPLY))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.WEST)

        call_args = mock_client.post.call_args
        assert call_args[0][0].endswith("/models/gemini-2.5-flash:generateContent")
        assert call_args[1]["headers"] == {"x-goog-api-key": "key-123"}

        body = call_args[1]["json"]
        parts = body["contents"][0]["parts"]
        assert parts[0]["inlineData"] == {"mimeType": "image/jpeg", "data": IMAGE_B64}
        prompt = parts[1]["text"]
        assert "Western India (Rajasthan, Gujarat, Maharashtra)" in prompt
        assert "Average Peak Sun Hours: 5.75 hours/day" in prompt
        assert "₹78,000 total subsidy fixed" in prompt
        assert "System Capacity * ₹50,000" in prompt
        assert body["generationConfig"]["responseSchema"] == SOLAR_ANALYSIS_SCHEMA
        assert body["generationConfig"]["temperature"] == 0.4

    @pytest.mark.asyncio
    async def test_returns_typed_result(self) -> None:
        mock_client = _mock_http(_gemini_reply(SOLAR_REPLY))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            result = await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.NORTH)

        assert result.usable_roof_area_sq_m == 40
        assert result.system_capacity_kw == 8
        assert result.estimated_subsidy_inr == 78000
        # Not in the service schema, so it defaults.
        assert result.estimated_net_cost_inr == 0
        assert result.is_analyzable is True

    @pytest.mark.asyncio
    async def test_zero_area_is_a_result_not_an_error(self) -> None:
        reply = {"usableRoofAreaSqM": 0, "reasoning": "image unclear"}
        mock_client = _mock_http(_gemini_reply(reply))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            result = await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.OTHER)

        assert result.is_analyzable is False
        assert result.reasoning == "image unclear"
        assert result.number_of_panels == 0
        assert result.system_capacity_kw == 0
        assert result.monthly_generation_kwh == 0
        assert result.estimated_subsidy_inr == 0

    @pytest.mark.asyncio
    async def test_no_timeout_by_default(self) -> None:
        mock_client = _mock_http(_gemini_reply(SOLAR_REPLY))

        with patch(
            "sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client
        ) as mock_cls:
            await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.OTHER)

        mock_cls.assert_called_once_with(verify=True, timeout=None)


# ---------------------------------------------------------------------------
# Appliance detection
# ---------------------------------------------------------------------------


class TestDetectAppliances:
    """Appliance photo detection."""

    @pytest.mark.asyncio
    async def test_maps_items_to_appliances(self) -> None:
        reply = {
            "appliances": [
                {"name": "Ceiling Fan", "wattage": 75, "quantity": 2, "category": "cooling"},
                {"name": "Tube Light", "wattage": 40, "quantity": 1, "category": "lighting"},
            ]
        }
        mock_client = _mock_http(_gemini_reply(reply))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            appliances = await _client().detect_appliances(IMAGE_B64)

        assert [app.name for app in appliances] == ["Ceiling Fan", "Tube Light"]
        assert [app.quantity for app in appliances] == [2, 1]
        assert all(app.daily_hours == 4 for app in appliances)
        assert appliances[1].category == "lighting"
        assert re.fullmatch(r"ai-\d+-0", appliances[0].id)
        assert re.fullmatch(r"ai-\d+-1", appliances[1].id)

    @pytest.mark.asyncio
    async def test_no_temperature_in_request(self) -> None:
        mock_client = _mock_http(_gemini_reply({"appliances": []}))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            appliances = await _client().detect_appliances(IMAGE_B64)

        assert appliances == []
        body = mock_client.post.call_args[1]["json"]
        assert "temperature" not in body["generationConfig"]

    @pytest.mark.asyncio
    async def test_unknown_category_is_decode_error(self) -> None:
        reply = {"appliances": [{"name": "Robot", "wattage": 10, "quantity": 1, "category": "toys"}]}
        mock_client = _mock_http(_gemini_reply(reply))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ResponseDecodeError) as exc_info:
                await _client().detect_appliances(IMAGE_B64)

        assert exc_info.value.message == DETECTION_FAILURE_MESSAGE


# ---------------------------------------------------------------------------
# Video efficiency audit
# ---------------------------------------------------------------------------


class TestAnalyzeVideoEfficiency:
    """Room video audit."""

    @pytest.mark.asyncio
    async def test_returns_typed_result(self) -> None:
        reply = {
            "appliances": [
                {
                    "name": "CRT TV",
                    "detectedCondition": "Old/Inefficient",
                    "currentWattage": 120,
                    "efficientWattage": 60,
                    "monthlyEnergyLossKwh": 10.8,
                    "monthlyMoneyLossInr": 86.4,
                    "replacementRecommendation": "Replace with a 5-star LED TV",
                }
            ],
            "totalMonthlyLossInr": 86.4,
            "efficiencyScore": 55,
            "analysisSummary": "One old TV found.",
        }
        video_b64 = base64.b64encode(b"\x00" * 1024).decode()
        mock_client = _mock_http(_gemini_reply(reply))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            result = await _client().analyze_video_efficiency(video_b64, "video/mp4")

        assert result.efficiency_score == 55
        assert result.appliances[0].detected_condition == "Old/Inefficient"
        assert result.appliances[0].monthly_money_loss_inr == pytest.approx(86.4)
        part = mock_client.post.call_args[1]["json"]["contents"][0]["parts"][0]
        assert part["inlineData"]["mimeType"] == "video/mp4"

    @pytest.mark.asyncio
    async def test_eleven_megabyte_clip_rejected_locally(self) -> None:
        video_b64 = base64.b64encode(b"\x00" * (11 * 1024 * 1024)).decode()

        with patch("sunsathi.services.gemini.httpx.AsyncClient") as mock_cls:
            with pytest.raises(FileTooLargeError, match="under 10MB"):
                await _client().analyze_video_efficiency(video_b64, "video/mp4")

            mock_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_clip_at_limit_is_sent(self) -> None:
        video_b64 = base64.b64encode(b"\x00" * 3000).decode()
        mock_client = _mock_http(_gemini_reply({"efficiencyScore": 90}))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            result = await _client(max_video_bytes=3000).analyze_video_efficiency(
                video_b64, "video/webm"
            )

        assert result.efficiency_score == 90
        mock_client.post.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_score_out_of_range_is_decode_error(self) -> None:
        video_b64 = base64.b64encode(b"\x00" * 16).decode()
        mock_client = _mock_http(_gemini_reply({"efficiencyScore": 150}))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ResponseDecodeError) as exc_info:
                await _client().analyze_video_efficiency(video_b64, "video/mp4")

        assert exc_info.value.message == VIDEO_FAILURE_MESSAGE


# ---------------------------------------------------------------------------
# Failure mapping
# ---------------------------------------------------------------------------


class TestFailureMapping:
    """Every failure maps to the flow's generic message."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")],
    )
    async def test_network_error(self, exc: Exception) -> None:
        mock_client = _mock_http(side_effect=exc)

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ServiceRequestError) as exc_info:
                await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.SOUTH)

        assert exc_info.value.message == SOLAR_FAILURE_MESSAGE
        # One attempt only: no retry.
        assert mock_client.post.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 403, 429, 500, 503])
    async def test_non_200_status(self, status_code: int) -> None:
        mock_client = _mock_http(status_code=status_code)

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ServiceRequestError):
                await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.SOUTH)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
            {"candidates": ["oops"]},
            {"candidates": {"a": 1}},
            {"candidates": [{"content": "text"}]},
            {"candidates": [{"content": {"parts": "text"}}]},
            {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        ],
    )
    async def test_empty_reply(self, reply: dict) -> None:
        mock_client = _mock_http(reply)

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ResponseDecodeError):
                await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.EAST)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply",
        [
            {"candidates": ["oops"]},
            {"candidates": {"a": 1}},
            {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        ],
    )
    async def test_malformed_envelope_uses_flow_message(self, reply: dict) -> None:
        mock_client = _mock_http(reply)

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(AnalysisError) as exc_info:
                await _client().detect_appliances(IMAGE_B64)

        assert exc_info.value.message == DETECTION_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_unparseable_text(self) -> None:
        mock_client = _mock_http(_gemini_reply("not json {"))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ResponseDecodeError):
                await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.EAST)

    @pytest.mark.asyncio
    async def test_missing_required_field(self) -> None:
        reply = {k: v for k, v in SOLAR_REPLY.items() if k != "reasoning"}
        mock_client = _mock_http(_gemini_reply(reply))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ResponseDecodeError):
                await _client().analyze_solar_potential(IMAGE_B64, IndianRegion.EAST)

    @pytest.mark.asyncio
    async def test_body_not_json(self) -> None:
        mock_client = _mock_http()
        response = mock_client.post.return_value
        response.json = MagicMock(side_effect=json.JSONDecodeError("bad", "", 0))

        with patch("sunsathi.services.gemini.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ResponseDecodeError):
                await _client().detect_appliances(IMAGE_B64)

    def test_decode_and_request_errors_are_analysis_errors(self) -> None:
        assert issubclass(ServiceRequestError, AnalysisError)
        assert issubclass(ResponseDecodeError, AnalysisError)
        assert not issubclass(ResponseDecodeError, ServiceRequestError)

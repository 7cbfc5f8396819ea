"""
Gemini structured-output response schemas.

Each schema is sent as ``generationConfig.responseSchema`` so the service
answers with JSON of exactly this shape. Property names must stay identical
to the camelCase aliases in :mod:`sunsathi.models`, which validate the reply.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

from typing import Any

SOLAR_ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "usableRoofAreaSqM": {
            "type": "NUMBER",
            "description": "Estimated flat, usable roof area in square meters free of obstructions.",
        },
        "numberOfPanels": {
            "type": "NUMBER",
            "description": "Number of 400W panels that fit (1 panel = 2 sq meters).",
        },
        "systemCapacityKw": {
            "type": "NUMBER",
            "description": "Total system capacity in kW (Panels * 0.4).",
        },
        "dailyGenerationKwh": {
            "type": "NUMBER",
            "description": "Daily energy generation in kWh.",
        },
        "monthlyGenerationKwh": {
            "type": "NUMBER",
            "description": "Monthly energy generation in kWh.",
        },
        "monthlySavingsInr": {
            "type": "NUMBER",
            "description": "Estimated monthly savings in Indian Rupees (₹8/unit).",
        },
        "yearlySavingsInr": {
            "type": "NUMBER",
            "description": "Estimated yearly savings in Indian Rupees.",
        },
        "estimatedSubsidyInr": {
            "type": "NUMBER",
            "description": "Subsidy amount based on PM Surya Ghar rules.",
        },
        "roiYears": {
            "type": "NUMBER",
            "description": "Return on investment period in years.",
        },
        "reasoning": {
            "type": "STRING",
            "description": "A short, encouraging summary of the analysis and roof suitability.",
        },
    },
    "required": [
        "usableRoofAreaSqM",
        "numberOfPanels",
        "systemCapacityKw",
        "monthlyGenerationKwh",
        "estimatedSubsidyInr",
        "reasoning",
    ],
}

APPLIANCE_DETECTION_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "appliances": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "wattage": {
                        "type": "NUMBER",
                        "description": "Average wattage in India",
                    },
                    "quantity": {"type": "NUMBER"},
                    "category": {
                        "type": "STRING",
                        "enum": [
                            "cooling",
                            "heating",
                            "lighting",
                            "entertainment",
                            "kitchen",
                            "other",
                        ],
                    },
                },
            },
        }
    },
}

EFFICIENCY_AUDIT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "appliances": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "detectedCondition": {
                        "type": "STRING",
                        "enum": ["Old/Inefficient", "Modern/Efficient"],
                    },
                    "currentWattage": {
                        "type": "NUMBER",
                        "description": "Estimated wattage of the detected device",
                    },
                    "efficientWattage": {
                        "type": "NUMBER",
                        "description": "Wattage of a modern 5-star equivalent",
                    },
                    "monthlyEnergyLossKwh": {
                        "type": "NUMBER",
                        "description": "Difference in kWh assuming 6 hours daily usage",
                    },
                    "monthlyMoneyLossInr": {
                        "type": "NUMBER",
                        "description": "Loss in Rupees at ₹8/unit",
                    },
                    "replacementRecommendation": {
                        "type": "STRING",
                        "description": "Specific advice (e.g., Replace CFL with LED)",
                    },
                },
            },
        },
        "totalMonthlyLossInr": {"type": "NUMBER"},
        "efficiencyScore": {
            "type": "NUMBER",
            "description": "Score from 0 (Wasteful) to 100 (Efficient)",
        },
        "analysisSummary": {"type": "STRING"},
    },
}

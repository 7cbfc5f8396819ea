"""
Sun-Sathi estimator package.

Estimates rooftop solar potential, household appliance consumption, and
efficiency losses for Indian homes. Roof photos, appliance photos, and room
videos are analysed by the Gemini vision API; the appliance bill and system
sizing are computed locally.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

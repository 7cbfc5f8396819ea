"""
Service layer: local consumption maths and the Gemini analysis client.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-002)
"""

"""Multimodal request-assembly package.

Architectural role:
- Converts an optional uploaded file plus a prompt into ordered Gemini parts.
- Applies the inline-size ceiling before any upstream call.

Scope:
- Content preprocessing only; no HTTP endpoint definitions.
"""

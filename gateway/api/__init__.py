"""Gateway API adapter package.

Architectural role:
- Defines the external HTTP boundary and the server entrypoint.
- Performs transport-level parsing and response shaping.
- Delegates validation/assembly/generation to `gateway.core.pipeline`.
"""

"""Gemini inline gateway.

Architectural role:
    Small HTTP gateway that forwards text, image, document, and audio inputs to
    the Gemini `generateContent` API and relays the extracted text response.

Package split:
    - `config`: immutable runtime configuration resolved from the environment.
    - `errors`: error taxonomy shared by the pipeline and the HTTP adapter.
    - `multimodal`: request-part assembly and inline-size enforcement.
    - `llm`: upstream transport client and response-text extraction.
    - `core`: endpoint dispatch table and request pipeline.
    - `api`: FastAPI adapter and server entrypoint.
"""

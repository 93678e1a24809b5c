"""LLM access package.

Architectural role:
    Provides the upstream transport used by the pipeline to invoke Gemini and the
    defensive extraction of generated text from its responses.

Module split:
    - `client`: REST transport for `generateContent`.
    - `extractor`: ordered text-locator strategies with a diagnostic fallback.
"""

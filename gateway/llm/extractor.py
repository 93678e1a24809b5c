"""Defensive text extraction from generation results.

Architectural role:
    Turns the loosely-structured value returned by the generation call into the
    plain string relayed to HTTP callers.

Extraction flow:
    `extract_text(result)` -> ordered `TextLocator` attempts -> first non-empty
    string wins -> otherwise diagnostic fallback with the full JSON rendering.

Locator order (`DEFAULT_LOCATORS`):
    1. `response.candidates[0].content.parts[0].text`
    2. `candidates[0].content.parts[0].text`
    3. `response.text`

    New response shapes are supported by appending a locator; no caller changes.

Failure handling model:
    `extract_text` never raises. Locator faults and serialization faults are
    logged and converted into a fallback string, so an unexpected upstream shape
    degrades into a diagnostic payload rather than a failed request.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Protocol


logger = logging.getLogger(__name__)

NOT_FOUND_PREFIX = "Error: Could not extract text. Full response below:\n"
FAULT_PREFIX = "Extraction error. Full response below:\n"


class TextLocator(Protocol):
    """Capability to find generated text inside one response shape."""

    def locate(self, result: Any) -> str | None:
        """Return the text at this locator's position, or `None` when absent."""
        ...


def _step(value: Any, key: str | int) -> Any:
    """Optional-chaining lookup over mappings, sequences, and attributes."""
    if value is None:
        return None

    if isinstance(key, int):
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return value[key] if -len(value) <= key < len(value) else None
        return None

    if isinstance(value, Mapping):
        return value.get(key)

    return getattr(value, key, None)


class PathLocator:
    """Locate text by walking a fixed key/index path."""

    def __init__(self, *path: str | int):
        self.path = path

    def locate(self, result: Any) -> str | None:
        value = result
        for key in self.path:
            value = _step(value, key)
            if value is None:
                return None
        return value if isinstance(value, str) else None

    def __repr__(self) -> str:
        return f"PathLocator({'.'.join(str(key) for key in self.path)})"


DEFAULT_LOCATORS: tuple[TextLocator, ...] = (
    PathLocator("response", "candidates", 0, "content", "parts", 0, "text"),
    PathLocator("candidates", 0, "content", "parts", 0, "text"),
    PathLocator("response", "text"),
)


def render_json(result: Any, strict: bool = True) -> str:
    """Pretty-print `result` as 2-space indented JSON.

    With `strict=False`, values that are not JSON-serializable are rendered with
    `str()` instead of raising.
    """
    return json.dumps(
        result,
        indent=2,
        ensure_ascii=False,
        default=None if strict else str,
    )


def extract_text(result: Any, locators: Iterable[TextLocator] = DEFAULT_LOCATORS) -> str:
    """Return generated text from `result`, or a diagnostic fallback string.

    Args:
        result: Opaque value returned by the generation call.
        locators: Ordered strategies; the first non-empty string wins.

    Returns:
        The generated text, `NOT_FOUND_PREFIX` + JSON when no locator matches, or
        `FAULT_PREFIX` + best-effort JSON when a locator or serialization fails.
    """
    try:
        for locator in locators:
            text = locator.locate(result)
            if text:
                return text

        return NOT_FOUND_PREFIX + render_json(result)

    except Exception:
        logger.exception("Error while extracting text from generation result")
        return FAULT_PREFIX + _render_best_effort(result)


def _render_best_effort(result: Any) -> str:
    try:
        return render_json(result, strict=False)
    except Exception:
        # Circular references and similar cannot be rendered as JSON at all.
        return repr(result)

"""
Multimodal request assembly for the generation call.

Architectural role:
- Convert an optional uploaded file plus a text prompt into an ordered list of
  Gemini parts.
- Enforce the inline-size ceiling before any upstream call is attempted.
- Provide assembly only (no endpoint registration, no upstream I/O).

Assembly lifecycle:
1. Reject uploads larger than the inline ceiling (`SizeError`).
2. Base64-encode the upload into an inline binary part, placed first.
3. Append one text part built from the endpoint prefix plus the prompt.

Call shapes:
- `assemble` produces the structured part list used by multimodal endpoints.
- `assemble_text` returns the bare prompt string used by the simple-text
  endpoint; the upstream API accepts either form.

Error handling strategy:
- Exactly one error: oversized inline payload. A missing prompt is not an
  assembler error; required-field checks belong to the caller.

Side effects:
- None. Pure transformation plus a size check.
"""

import base64
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gateway.config import MAX_INLINE_BYTES
from gateway.errors import SizeError


# ============================================================
# DATA MODEL
# ============================================================

class TextPart(BaseModel):
    """Text prompt for Gemini."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = Field(..., description="Text prompt for Gemini")

    def to_wire(self) -> dict:
        return {"text": self.text}


class InlineBinaryPart(BaseModel):
    """Inline media data for Gemini input."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inlineBinary"] = "inlineBinary"
    mime_type: str = Field(..., description="MIME type of the data, e.g., image/jpeg, audio/mpeg")
    base64_data: str = Field(..., description="Base64-encoded binary data of the media file")

    def to_wire(self) -> dict:
        return {
            "inlineData": {
                "mimeType": self.mime_type,
                "data": self.base64_data,
            }
        }


Part = Union[InlineBinaryPart, TextPart]


@dataclass(frozen=True)
class UploadedFile:
    """In-memory upload received by the HTTP adapter for a single request.

    Attributes:
        data: Full file content.
        filename: Original client filename (informational only).
        mime_type: Declared content type.
    """

    data: bytes = field(repr=False)
    filename: str = ""
    mime_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        """Byte length of `data`."""
        return len(self.data)


# ============================================================
# PUBLIC ENTRYPOINTS
# ============================================================

def assemble(
    prompt: Optional[str],
    file: Optional[UploadedFile] = None,
    prompt_prefix: Optional[str] = None,
    max_inline_bytes: int = MAX_INLINE_BYTES,
    size_hint: Optional[str] = None,
) -> List[Part]:
    """
    Build the ordered part list for one generation call.

    Validation behavior:
    - Raises `SizeError` when `file.size` exceeds `max_inline_bytes`.
      The boundary is inclusive: a file of exactly the ceiling is accepted.

    Ordering:
    - Inline binary part (when a file is present) precedes the text part.
    """
    parts: List[Part] = []

    if file is not None:
        _check_inline_size(file, max_inline_bytes, size_hint)
        parts.append(to_inline_part(file.data, file.mime_type))

    parts.append(TextPart(text=(prompt_prefix or "") + (prompt or "")))

    return parts


def assemble_text(prompt: Optional[str]) -> str:
    """Return the bare prompt sent as `contents` by the simple-text endpoint."""
    return prompt or ""


def to_inline_part(data: bytes, mime_type: str) -> InlineBinaryPart:
    """Encode raw bytes as an inline binary part."""
    return InlineBinaryPart(
        mime_type=mime_type,
        base64_data=base64.b64encode(data).decode("ascii"),
    )


def to_contents(parts: List[Part]) -> List[dict]:
    """Render parts into the wire dictionaries expected by `generateContent`."""
    return [part.to_wire() for part in parts]


# ============================================================
# VALIDATION
# ============================================================

def _check_inline_size(file: UploadedFile, max_inline_bytes: int, size_hint: Optional[str]):
    if file.size > max_inline_bytes:
        raise SizeError(file.size, max_inline_bytes, hint=size_hint)

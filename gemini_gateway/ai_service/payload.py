"""
Request payload builders.

Turns an inbound prompt (plus an optional uploaded file) into a provider-agnostic
payload, and converts that payload into google-genai content objects.
"""

import base64
from dataclasses import dataclass, field
from typing import List, Optional, Union

from google.genai import types

DEFAULT_AUDIO_PROMPT = "Transcribe the following audio"
DEFAULT_DOCUMENT_PROMPT = "Summarize the following document"


@dataclass(frozen=True)
class Attachment:
    data: bytes
    mime_type: str
    field_name: str


@dataclass(frozen=True)
class TextPart:
    text: str

    def to_sdk(self) -> types.Part:
        return types.Part(text=self.text)


@dataclass(frozen=True)
class InlineDataPart:
    mime_type: str
    data: str  # base64

    @classmethod
    def from_attachment(cls, attachment: Attachment) -> "InlineDataPart":
        encoded = base64.b64encode(attachment.data).decode("ascii")
        return cls(mime_type=attachment.mime_type, data=encoded)

    def to_sdk(self) -> types.Part:
        # The SDK wants raw bytes and does its own base64 encoding on the wire.
        return types.Part(
            inline_data=types.Blob(mime_type=self.mime_type, data=base64.b64decode(self.data))
        )


Part = Union[TextPart, InlineDataPart]


@dataclass(frozen=True)
class Content:
    role: str
    parts: List[Part] = field(default_factory=list)

    def to_sdk(self) -> types.Content:
        return types.Content(role=self.role, parts=[p.to_sdk() for p in self.parts])


@dataclass(frozen=True)
class ProviderPayload:
    model: str
    contents: Union[Optional[str], List[Content]]

    def to_sdk_contents(self):
        """
        Convert to the `contents` argument of `models.generate_content`.
        Plain prompts are passed through untouched.
        """
        if isinstance(self.contents, list):
            return [c.to_sdk() for c in self.contents]
        return self.contents


def build_text_payload(model: str, prompt: Optional[str]) -> ProviderPayload:
    return ProviderPayload(model=model, contents=prompt)


def build_media_payload(
    model: str,
    prompt: Optional[str],
    attachment: Attachment,
    default_prompt: Optional[str] = None,
) -> ProviderPayload:
    """
    Build a single user message carrying the prompt text and the uploaded file.

    Args:
        model (str): Model identifier.
        prompt (str, optional): Caller-supplied instruction.
        attachment (Attachment): The uploaded file.
        default_prompt (str, optional): Used when the caller sent no prompt (or an empty one).
            Without a default the prompt is used as given, including "".

    Returns:
        ProviderPayload: `[text part, inline data part]`, or only the inline data
        part when the prompt is None and there is no default.
    """
    text = prompt if default_prompt is None else (prompt or default_prompt)
    parts: List[Part] = []
    if text is not None:
        parts.append(TextPart(text=text))
    parts.append(InlineDataPart.from_attachment(attachment))
    return ProviderPayload(model=model, contents=[Content(role="user", parts=parts)])

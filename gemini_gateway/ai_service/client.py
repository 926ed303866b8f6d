"""
Thin wrapper over the google-genai client.
One instance is built by the entry point and injected into the Flask app.
"""

import logging
import time
from typing import Any

from google import genai
from google.genai import types

from gemini_gateway.ai_service.payload import ProviderPayload
from gemini_gateway.gateway.config import Settings


class GenerationService:
    def __init__(self, client: Any, model: str):
        self._client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationService":
        """
        Create the Gemini client for this process.

        Args:
            settings (Settings): Resolved configuration (API key, model, timeout).

        Returns:
            GenerationService: A service bound to a fresh `genai.Client`.
        """
        http_options = None
        if settings.timeout_ms:
            http_options = types.HttpOptions(timeout=settings.timeout_ms)

        client = genai.Client(api_key=settings.api_key, http_options=http_options)
        logging.info(f"[AI] Initialized Gemini client for model {settings.model}")
        return cls(client, settings.model)

    def generate(self, payload: ProviderPayload) -> Any:
        """
        Make one `generate_content` call. No retry; errors propagate to the caller.

        Returns:
            The raw SDK response, unnormalized.
        """
        kind = "text" if not isinstance(payload.contents, list) else "multipart"
        started = time.monotonic()
        response = self._client.models.generate_content(
            model=payload.model,
            contents=payload.to_sdk_contents(),
        )
        elapsed_ms = (time.monotonic() - started) * 1000
        logging.info(f"[AI] generate_content model={payload.model} contents={kind} took {elapsed_ms:.0f}ms")
        return response

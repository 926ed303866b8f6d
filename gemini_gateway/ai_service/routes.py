"""
AI service route handlers.

Provides routes for:
- Text generation from a prompt (/generate-text)
- Generation from an uploaded image, audio clip or document

Each handler builds a payload, makes one call through the injected
`GenerationService`, and returns the normalized text as `{"result": ...}`.
"""

import logging
from typing import Optional, Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from gemini_gateway.ai_service.client import GenerationService
from gemini_gateway.ai_service.normalizer import extract_text
from gemini_gateway.ai_service.payload import (
    DEFAULT_AUDIO_PROMPT,
    DEFAULT_DOCUMENT_PROMPT,
    Attachment,
    ProviderPayload,
    build_media_payload,
    build_text_payload,
)

ai_blueprint = Blueprint("ai", __name__)

SERVICE_EXTENSION = "generation_service"
GENERIC_ERROR = "The AI service encountered an internal error."


def get_generation_service() -> GenerationService:
    return current_app.extensions[SERVICE_EXTENSION]


# --- REQUEST LOGGING ---
@ai_blueprint.before_request
def before_request() -> None:
    logging.info(f"[AI] Incoming {request.method} {request.path} Content-Type={request.content_type}")


@ai_blueprint.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[AI] Response {response.status}")
    return response


def _error_message(err: Exception) -> str:
    if current_app.config.get("EXPOSE_ERROR_DETAILS", True):
        return str(err)
    return GENERIC_ERROR


def _run(payload: ProviderPayload) -> Tuple[Response, int]:
    """Call the provider once and wrap the normalized answer or the failure."""
    service = get_generation_service()
    try:
        resp = service.generate(payload)
        return jsonify({"result": extract_text(resp)}), 200
    except Exception as e:
        logging.exception(f"[AI] Generation failed: {e}")
        return jsonify({"error": _error_message(e)}), 500


def _read_attachment(field_name: str) -> Optional[Attachment]:
    upload = request.files.get(field_name)
    # Browsers send the file field with an empty filename when no file was chosen.
    if upload is None or not upload.filename:
        return None
    return Attachment(data=upload.read(), mime_type=upload.mimetype, field_name=field_name)


def _generate_from_upload(field_name: str, label: str, default_prompt: Optional[str] = None) -> Tuple[Response, int]:
    # Reading request.files may raise RequestEntityTooLarge; that stays a 413.
    attachment = _read_attachment(field_name)
    if attachment is None:
        return jsonify({"error": f"{label} file is required"}), 400

    prompt = request.form.get("prompt")
    model = get_generation_service().model
    return _run(build_media_payload(model, prompt, attachment, default_prompt))


# --- TEXT ---
@ai_blueprint.route("/generate-text", methods=["POST"])
def generate_text() -> Tuple[Response, int]:
    """
    Generate text from a prompt.

    Expects a JSON body with:
    - prompt (str)

    Returns:
        200: {"result": str}
        500: {"error": str} on provider failure.
    """
    data = request.get_json(silent=True) or {}
    prompt = data.get("prompt")
    model = get_generation_service().model
    return _run(build_text_payload(model, prompt))


# --- IMAGE ---
@ai_blueprint.route("/generate-from-image", methods=["POST"])
def generate_from_image() -> Tuple[Response, int]:
    """
    Multipart form: `image` (file, required), `prompt` (text).

    Returns:
        200: {"result": str}
        400: No image uploaded.
        500: Provider failure.
    """
    return _generate_from_upload("image", "Image")


# --- AUDIO ---
@ai_blueprint.route("/generate-from-audio", methods=["POST"])
def generate_from_audio() -> Tuple[Response, int]:
    """
    Multipart form: `audio` (file, required), `prompt` (text, optional).
    Without a prompt the model is asked to transcribe the clip.
    """
    return _generate_from_upload("audio", "Audio", DEFAULT_AUDIO_PROMPT)


# --- DOCUMENT ---
@ai_blueprint.route("/generate-from-document", methods=["POST"])
def generate_from_document() -> Tuple[Response, int]:
    """
    Multipart form: `document` (file, required), `prompt` (text, optional).
    Without a prompt the model is asked for a summary.
    """
    return _generate_from_upload("document", "Document", DEFAULT_DOCUMENT_PROMPT)

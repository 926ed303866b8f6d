import json

from google.genai import types

from gemini_gateway.ai_service.normalizer import (
    ResponseShape,
    classify_response,
    dump_response,
    extract_text,
)


def test_nested_candidate_parts():
    resp = {"response": {"candidates": [{"content": {"parts": [{"text": "X"}]}}]}}
    assert extract_text(resp) == "X"
    assert classify_response(resp)[0] is ResponseShape.NESTED_CANDIDATE_PARTS


def test_candidate_parts():
    resp = {"candidates": [{"content": {"parts": [{"text": "Y"}]}}]}
    assert extract_text(resp) == "Y"
    assert classify_response(resp)[0] is ResponseShape.CANDIDATE_PARTS


def test_nested_candidate_content_text():
    resp = {"response": {"candidates": [{"content": {"text": "Z"}}]}}
    assert extract_text(resp) == "Z"
    assert classify_response(resp)[0] is ResponseShape.NESTED_CANDIDATE_CONTENT_TEXT


def test_first_match_wins():
    resp = {
        "response": {"candidates": [{"content": {"parts": [{"text": "first"}], "text": "third"}}]},
        "candidates": [{"content": {"parts": [{"text": "second"}]}}],
    }
    assert extract_text(resp) == "first"


def test_empty_string_is_a_match():
    resp = {"candidates": [{"content": {"parts": [{"text": ""}]}}]}
    assert classify_response(resp) == (ResponseShape.CANDIDATE_PARTS, "")
    assert extract_text(resp) == ""


def test_unknown_shape_dumps_pretty_json():
    resp = {"foo": "bar"}
    assert classify_response(resp) == (ResponseShape.UNKNOWN, None)
    assert extract_text(resp) == json.dumps(resp, indent=2)


def test_fallback_round_trips():
    resp = {"candidates": [], "usage": {"tokens": 3}, "flags": [True, None, 1.5]}
    assert json.loads(extract_text(resp)) == resp


def test_wrong_types_fall_through():
    # parts is a dict, not a list; text is not a string
    resp = {
        "candidates": [{"content": {"parts": {"text": "nope"}}}],
        "response": {"candidates": [{"content": {"text": 42}}]},
    }
    assert classify_response(resp)[0] is ResponseShape.UNKNOWN
    assert json.loads(extract_text(resp)) == resp


def test_missing_intermediate_fields():
    for resp in [{}, {"candidates": None}, {"candidates": [{}]}, {"response": None}, None, "text", []]:
        assert classify_response(resp)[0] is ResponseShape.UNKNOWN


def test_traversal_error_falls_back(mocker):
    class Exploding:
        @property
        def response(self):
            raise ValueError("boom")

        def __str__(self):
            return "exploding-response"

    log = mocker.patch("gemini_gateway.ai_service.normalizer.logging")
    assert extract_text(Exploding()) == json.dumps("exploding-response", indent=2)
    log.exception.assert_called_once()


def test_sdk_response_object():
    resp = types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text="from sdk")]))]
    )
    assert classify_response(resp) == (ResponseShape.CANDIDATE_PARTS, "from sdk")


def test_sdk_response_without_text_is_dumped():
    resp = types.GenerateContentResponse(candidates=[])
    dumped = dump_response(resp)
    assert json.loads(dumped)["candidates"] == []

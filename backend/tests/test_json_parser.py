"""Tests for JSON extraction from LLM output."""

from app.utils.json_parser import parse_json_object_from_llm_response


def test_direct_json():
    assert parse_json_object_from_llm_response('{"a": 1}') == {"a": 1}


def test_markdown_fence():
    content = '```json\n{"correctedText": "x", "wrongWords": []}\n```'
    assert parse_json_object_from_llm_response(content) == {"correctedText": "x", "wrongWords": []}


def test_embedded_object():
    content = 'Here you go: {"correctedText": "x", "wrongWords": ["y"]} Hope that helps!'
    assert parse_json_object_from_llm_response(content)["wrongWords"] == ["y"]


def test_array_is_not_an_object():
    assert parse_json_object_from_llm_response('["a", "b"]') is None


def test_garbage_returns_none():
    assert parse_json_object_from_llm_response("no json here") is None

"""
Unit tests for form field normalization.
Array fields must behave identically whether they arrive as a list, JSON text, or CSV text.
"""

import pytest

from src.api.field_parsing import (
    calculate_read_time,
    classify_list_input,
    clean_text,
    find_missing_fields,
    is_valid_mobile,
    parse_list_field,
)


def test_comma_delimited_values_are_trimmed() -> None:
    assert parse_list_field("A, B ,C") == ["A", "B", "C"]


def test_json_array_string_is_decoded() -> None:
    assert parse_list_field('["A","B"]') == ["A", "B"]


def test_malformed_json_falls_back_to_comma_split() -> None:
    tagged = classify_list_input('["A", "B"')
    assert tagged is not None
    assert tagged.kind == "csv"
    assert parse_list_field('["A", "B"') == ['["A"', '"B"']


def test_native_list_and_single_form_value() -> None:
    assert parse_list_field([" x ", "", "y"]) == ["x", "y"]
    assert classify_list_input(["a, b"]).kind == "csv"
    assert parse_list_field(["a, b"]) == ["a", "b"]


def test_omitted_and_blank_inputs() -> None:
    assert parse_list_field(None) is None
    assert parse_list_field("") == []
    assert parse_list_field(" , ,") == []


def test_plain_value_becomes_single_item() -> None:
    assert parse_list_field("42") == ["42"]


@pytest.mark.parametrize(
    ("words", "expected"),
    [(0, 1), (1, 1), (200, 1), (201, 2), (450, 3), (1000, 5)],
)
def test_read_time(words: int, expected: int) -> None:
    assert calculate_read_time(" ".join(["w"] * words)) == expected


def test_clean_text_and_missing_fields() -> None:
    assert clean_text("  hi ") == "hi"
    assert clean_text("   ") is None
    assert clean_text(None) is None
    values = {"title": "x", "content": "  ", "author": None, "tags": []}
    assert find_missing_fields(values, ["title", "content", "author", "tags"]) == [
        "content",
        "author",
        "tags",
    ]


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ("+1 (555) 123-4567", True),
        ("9876543210", True),
        ("+91 98765 43210", True),
        ("987.654.3210", True),
        ("12345", False),
        ("1234567890123456", False),
        ("98765abc10", False),
    ],
)
def test_mobile_numbers(value: str, valid: bool) -> None:
    assert is_valid_mobile(value) is valid


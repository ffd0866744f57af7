import pytest

from string_analyzer.services.filters import FilterSpec
from string_analyzer.validation import (
    CONFLICTING_QUERY,
    INVALID_BODY,
    INVALID_QUERY,
    Invalid,
    Valid,
    validate_create_request,
    validate_filter_query,
)


def _params(**kwargs):
    base = {
        "is_palindrome": None,
        "min_length": None,
        "max_length": None,
        "word_count": None,
        "contains_character": None,
    }
    base.update(kwargs)
    return base


class TestCreateRequest:
    def test_valid(self):
        result = validate_create_request({"value": "hello"})
        assert isinstance(result, Valid)
        assert result.value.value == "hello"

    def test_empty_string_is_valid(self):
        assert isinstance(validate_create_request({"value": ""}), Valid)

    @pytest.mark.parametrize("payload", [None, {}, {"val": "x"}, {"value": 123}, {"value": None}, ["value"], "value"])
    def test_invalid(self, payload):
        result = validate_create_request(payload)
        assert isinstance(result, Invalid)
        assert result.status_code == 400
        assert result.message == INVALID_BODY


class TestFilterQuery:
    def test_no_filters(self):
        result = validate_filter_query(_params())
        assert isinstance(result, Valid)
        assert result.value.is_empty()

    def test_all_filters(self):
        result = validate_filter_query(
            _params(is_palindrome="true", min_length="2", max_length="10", word_count="1", contains_character="A")
        )
        assert isinstance(result, Valid)
        assert result.value == FilterSpec(
            is_palindrome=True, min_length=2, max_length=10, word_count=1, contains_character="A"
        )

    def test_false_flag(self):
        result = validate_filter_query(_params(is_palindrome="false"))
        assert isinstance(result, Valid)
        assert result.value.as_dict() == {"is_palindrome": False}

    @pytest.mark.parametrize(
        "params",
        [
            {"min_length": "abc"},
            {"max_length": "1.5"},
            {"word_count": "two"},
            {"min_length": "-1"},
            {"word_count": "-3"},
            {"contains_character": "ab"},
            {"contains_character": ""},
            {"is_palindrome": "maybe"},
        ],
    )
    def test_bad_values_are_400(self, params):
        result = validate_filter_query(_params(**params))
        assert isinstance(result, Invalid)
        assert result.status_code == 400
        assert result.message == INVALID_QUERY
        assert result.details

    def test_min_greater_than_max_is_422(self):
        result = validate_filter_query(_params(min_length="10", max_length="5"))
        assert isinstance(result, Invalid)
        assert result.status_code == 422
        assert result.message == CONFLICTING_QUERY

    def test_equal_bounds_ok(self):
        assert isinstance(validate_filter_query(_params(min_length="5", max_length="5")), Valid)

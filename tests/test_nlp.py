from string_analyzer.services.nlp import (
    CONFLICT_ERROR,
    EMPTY_QUERY_ERROR,
    FIRST_VOWEL_NOTE,
    UNPARSEABLE_ERROR,
    ParseFailure,
    parse_natural_language,
)


def _filters(q):
    res = parse_natural_language(q)
    assert res.ok, res.errors
    return res.filters.as_dict()


def test_single_word_palindromic():
    q = "all single word palindromic strings"
    res = parse_natural_language(q)
    assert res.original == q
    assert res.errors == []
    assert res.filters.as_dict() == {"word_count": 1, "is_palindrome": True}


def test_strings_longer_than_10():
    # longer than 10 => min_length = 11
    assert _filters("strings longer than 10 characters") == {"min_length": 11}


def test_more_than():
    assert _filters("strings with more than 3 chars") == {"min_length": 4}


def test_shorter_than():
    assert _filters("strings shorter than 5 characters") == {"max_length": 4}


def test_less_than():
    assert _filters("less than 8") == {"max_length": 7}


def test_number_words():
    assert _filters("strings longer than ten characters") == {"min_length": 11}


def test_number_word_prefix_is_not_truncated():
    assert _filters("shorter than seventeen") == {"max_length": 16}


def test_longer_without_number_does_not_hide_later_bound():
    assert _filters("longer strings with more than 5 characters") == {"min_length": 6}


def test_shorter_without_number_does_not_hide_later_bound():
    f = _filters("palindromes, shorter ones, less than 4 chars")
    assert f == {"is_palindrome": True, "max_length": 3}


def test_longer_without_any_number_is_unparseable():
    res = parse_natural_language("longer strings please")
    assert res.failure is ParseFailure.UNPARSEABLE


def test_contains_letter_z():
    assert _filters("strings containing the letter z") == {"contains_character": "z"}


def test_contains_without_article():
    assert _filters("words that contain x") == {"contains_character": "x"}


def test_contains_whole_word_is_not_a_letter():
    res = parse_natural_language("strings that contain water")
    assert res.failure is ParseFailure.UNPARSEABLE


def test_contain_the_first_vowel():
    res = parse_natural_language("strings that contain the first vowel")
    assert res.filters.contains_character == "a"
    assert res.notes == [FIRST_VOWEL_NOTE]


def test_first_vowel_overrides_explicit_letter():
    res = parse_natural_language("contains the letter e or the first vowel")
    assert res.filters.contains_character == "a"


def test_case_and_surrounding_whitespace_ignored():
    assert _filters("   PALINDROME Strings  ") == {"is_palindrome": True}


def test_combined_rules():
    f = _filters("palindromes longer than 2 and shorter than 9 containing the letter r")
    assert f == {"is_palindrome": True, "min_length": 3, "max_length": 8, "contains_character": "r"}


def test_no_notes_without_heuristics():
    assert parse_natural_language("palindromes").notes == []


def test_conflicting_lengths():
    res = parse_natural_language("strings longer than 20 characters and shorter than 5 characters")
    assert res.failure is ParseFailure.CONFLICTING
    assert res.errors == [CONFLICT_ERROR]
    assert res.filters.min_length == 21
    assert res.filters.max_length == 4


def test_equal_bounds_are_not_a_conflict():
    assert _filters("longer than 4 and shorter than 6") == {"min_length": 5, "max_length": 5}


def test_unparseable():
    res = parse_natural_language("show me something nice")
    assert res.failure is ParseFailure.UNPARSEABLE
    assert res.filters is None
    assert res.errors == [UNPARSEABLE_ERROR]


def test_empty_and_non_string():
    for q in ["", None, 42, ["palindrome"]]:
        res = parse_natural_language(q)
        assert res.failure is ParseFailure.UNPARSEABLE
        assert res.filters is None
        assert res.errors == [EMPTY_QUERY_ERROR]


def test_whitespace_only_is_unparseable():
    res = parse_natural_language("   ")
    assert res.errors == [UNPARSEABLE_ERROR]


def test_parse_is_repeatable():
    q = "single word palindromes containing the letter a"
    assert parse_natural_language(q) == parse_natural_language(q)

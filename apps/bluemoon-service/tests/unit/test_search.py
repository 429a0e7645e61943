from bluemoon.utils.search import LIKE_ESCAPE, contains_pattern


def test_plain_term_is_wrapped():
    assert contains_pattern("nguyen") == "%nguyen%"


def test_wildcards_and_escape_char_are_escaped():
    assert LIKE_ESCAPE == "\\"
    assert contains_pattern("A_1") == "%A\\_1%"
    assert contains_pattern("50%") == "%50\\%%"
    assert contains_pattern("a\\b") == "%a\\\\b%"

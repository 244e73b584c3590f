import pytest

from helmify.format import fix_unterminated_quotes, remove_trailing_whitespaces


def test_fix_unterminated_quotes_joins_broken_line():
    text = 'a: {{ required "x\n    is required" .Values.x }}\nb: c'
    assert fix_unterminated_quotes(text) == 'a: {{ required "x is required" .Values.x }}\nb: c'


def test_fix_unterminated_quotes_keeps_following_continuations():
    text = (
        'k: {{ required "long.name\n'
        '    is required" .Values.long.name | b64enc\n'
        "    | quote }}\n"
        "kind: Secret"
    )
    want = (
        'k: {{ required "long.name is required" .Values.long.name | b64enc\n'
        "    | quote }}\n"
        "kind: Secret"
    )
    assert fix_unterminated_quotes(text) == want


def test_fix_unterminated_quotes_leaves_balanced_text():
    text = 'a: "b"\nc: {{ "d" | e\n    | f }}'
    assert fix_unterminated_quotes(text) == text


@pytest.mark.parametrize(
    ("text", "want"),
    [
        ("abc   ", "abc"),
        ("abc   \nedf", "abc\nedf"),
        ("abc   \nedf   ", "abc\nedf"),
        ("abc   .\nedf   .", "abc   .\nedf   ."),
    ],
)
def test_remove_trailing_whitespaces(text, want):
    assert remove_trailing_whitespaces(text) == want


def test_remove_trailing_whitespaces_is_idempotent():
    once = remove_trailing_whitespaces("a \n b  \n\n")
    assert remove_trailing_whitespaces(once) == once
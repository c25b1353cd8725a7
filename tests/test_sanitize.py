import pytest

from collections_service.sanitize import sanitize_string


def test_newlines_become_spaces():
    assert sanitize_string("Hand made\nceramic\nmug") == "Hand made ceramic mug"


def test_escaped_quotes_are_removed():
    assert sanitize_string('The \\"best\\" mug') == "The best mug"


def test_trims_after_replacing_newlines():
    assert sanitize_string("\n  A mug  \n") == "A mug"


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_gives_empty_output(text):
    assert sanitize_string(text) == ""


@pytest.mark.parametrize(
    "text",
    [
        "plain text",
        'quoted \\"text\\"\nacross lines ',
        "\n\n\n",
        '  \\"\\"  ',
        '\\\\""',
    ],
)
def test_output_is_clean_and_idempotent(text):
    cleaned = sanitize_string(text)
    assert "\n" not in cleaned
    assert '\\"' not in cleaned
    assert cleaned == cleaned.strip()
    assert sanitize_string(cleaned) == cleaned


def test_escaped_quote_joined_by_removal_is_also_removed():
    assert sanitize_string('a \\\\"" b') == 'a  b'

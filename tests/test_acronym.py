import pytest

from voicedictation.acronym import AcronymProcessor


@pytest.fixture
def processor():
    return AcronymProcessor()


def test_empty_string(processor):
    assert processor.process("") == ""


def test_api_pattern(processor):
    assert processor.process("testing a p i integration") == "testing API integration"


def test_http_pattern(processor):
    assert processor.process("h t t p request") == "HTTP request"


def test_url_pattern(processor):
    assert processor.process("the u r l is valid") == "the URL is valid"


def test_multiple_acronyms(processor):
    assert processor.process("a p i uses h t t p") == "API uses HTTP"


def test_no_false_positives(processor):
    assert processor.process("i want a p e n") == "i want a p e n"


def test_mixed_content(processor):
    result = processor.process("the a p i needs better error handling")
    assert result == "the API needs better error handling"


def test_already_capitalized(processor):
    assert processor.process("API is working") == "API is working"


def test_json_xml(processor):
    assert processor.process("j s o n and x m l formats") == "JSON and XML formats"


def test_two_letter_acronym(processor):
    assert processor.process("a i model") == "AI model"


def test_preserve_non_acronyms(processor):
    assert processor.process("hello world testing") == "hello world testing"


def test_longest_match_preferred(processor):
    assert processor.process("h t t p s site") == "HTTPS site"


def test_uppercase_letters_are_joined(processor):
    assert processor.process("A P I") == "API"


def test_whitespace_is_collapsed(processor):
    assert processor.process("  a   p i  ") == "API"


def test_custom_acronyms():
    custom = AcronymProcessor(["xyz"])
    assert custom.process("x y z and a p i") == "XYZ and a p i"


def test_non_letters_not_joined(processor):
    assert processor.process("a 1 i") == "a 1 i"
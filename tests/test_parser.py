import pytest

from conftest import MAP_JSON
from map_scout.collector.parser import parse_map
from map_scout.errors import MapParseError


def test_parses_source_map():
    parsed = parse_map(MAP_JSON)
    assert parsed["version"] == 3
    assert parsed["sources"] == ["foo.js", "bar.js"]


@pytest.mark.parametrize("content,expected", [("[]", []), ("42", 42), ('"x"', "x"), ("null", None)])
def test_any_json_is_accepted(content, expected):
    assert parse_map(content) == expected


@pytest.mark.parametrize(
    "content,message",
    [
        ("{{}", "SyntaxError: Unexpected token { in JSON at position 1"),
        ("{};", "SyntaxError: Unexpected token ; in JSON at position 2"),
        ('{"a" 1}', "SyntaxError: Unexpected token 1 in JSON at position 5"),
        ("", "SyntaxError: Unexpected end of JSON input"),
        ('{"version": 3', "SyntaxError: Unexpected end of JSON input"),
    ],
)
def test_syntax_errors_have_fixed_format(content, message):
    with pytest.raises(MapParseError) as exc_info:
        parse_map(content)
    assert str(exc_info.value) == message
    assert exc_info.value.message == message


def test_excessive_nesting_is_parse_error():
    with pytest.raises(MapParseError) as exc_info:
        parse_map("[" * 100000 + "]" * 100000)
    assert str(exc_info.value) == "SyntaxError: Maximum nesting depth exceeded in JSON"

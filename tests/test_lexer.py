import pytest

from forwarded.util import lexer
from forwarded.util.structures import StringView


@pytest.mark.parametrize(
    'source,pos,expected,end',
    [
        ('192.0.2.43', 0, '192.0.2.43', 10),
        ('unknown;proto=https', 0, 'unknown', 7),
        ('for=_gazonk', 4, '_gazonk', 11),
        ("!#$%&'*+-.^_`|~", 0, "!#$%&'*+-.^_`|~", 15),
        ('host,more', 0, 'host', 4),
        ('a b', 0, 'a', 1),
    ],
)
def test_parse_token(source, pos, expected, end):
    value, new_pos = lexer.parse_token(source, pos)
    assert isinstance(value, StringView)
    assert value == expected
    assert value.source is source
    assert new_pos == end


@pytest.mark.parametrize('source', ['', ' leading', '"quoted"', ';', '[::1]', 'ü'])
def test_parse_token_none(source):
    assert lexer.parse_token(source) == (None, 0)


def test_parse_token_at_end():
    assert lexer.parse_token('for=', 4) == (None, 4)


@pytest.mark.parametrize(
    'source,expected,end',
    [
        ('""', '', 2),
        ('"[2001:db8:cafe::17]"', '[2001:db8:cafe::17]', 21),
        ('"a;b, c" rest', 'a;b, c', 8),
        ('"ünïcode"', 'ünïcode', 9),
    ],
)
def test_parse_quoted_string_without_escapes(source, expected, end):
    value, new_pos = lexer.parse_quoted_string(source)

    # NOTE: No escapes, so the value should still refer to the source.
    assert isinstance(value, StringView)
    assert value == expected
    assert new_pos == end


@pytest.mark.parametrize(
    'source,expected',
    [
        (r'"1\.2\.3\.4"', '1.2.3.4'),
        (r'"\""', '"'),
        (r'"\\"', '\\'),
        (r'"quote: \" backslash: \\"', 'quote: " backslash: \\'),
        (r'"extra,\"info\""', 'extra,"info"'),
    ],
)
def test_parse_quoted_string_with_escapes(source, expected):
    value, new_pos = lexer.parse_quoted_string(source)
    assert isinstance(value, str)
    assert value == expected
    assert new_pos == len(source)


@pytest.mark.parametrize(
    'source',
    [
        '',
        'token',
        '"',
        '"unterminated string',
        r'"escaped end\"',
        '"trailing backslash\\',
    ],
)
def test_parse_quoted_string_none(source):
    assert lexer.parse_quoted_string(source) == (None, 0)


def test_parse_quoted_string_at_offset():
    value, pos = lexer.parse_quoted_string('by="proxy";', 3)
    assert value == 'proxy'
    assert pos == 10


@pytest.mark.parametrize(
    'source,expected,end',
    [
        ('unknown', 'unknown', 7),
        ('"unknown"', 'unknown', 9),
        ('"a\\"b";x', 'a"b', 6),
    ],
)
def test_parse_value(source, expected, end):
    assert lexer.parse_value(source) == (expected, end)


@pytest.mark.parametrize('source', ['', ',', ' x', '"open', '=value'])
def test_parse_value_none(source):
    assert lexer.parse_value(source) == (None, 0)


@pytest.mark.parametrize(
    'value,expected',
    [
        ('192.0.2.43', True),
        ('_gazonk', True),
        ('', False),
        ('[2001:db8:cafe::17]', False),
        ('two words', False),
        ('a"b', False),
        ('ü', False),
    ],
)
def test_is_token(value, expected):
    assert lexer.is_token(value) is expected


@pytest.mark.parametrize(
    'value,expected',
    [
        ('unknown', 'unknown'),
        ('', '""'),
        ('[2001:db8:cafe::17]', '"[2001:db8:cafe::17]"'),
        (';proto=https', '";proto=https"'),
        ('quote: " backslash: \\', r'"quote: \" backslash: \\"'),
    ],
)
def test_format_value(value, expected):
    assert lexer.format_value(value) == expected


@pytest.mark.parametrize(
    'source,pos,expected',
    [
        ('for=a', 0, True),
        ('FoR=a', 0, True),
        ('x;for=a', 2, True),
        ('for', 0, False),
        ('', 0, False),
        ('form=a', 0, False),
    ],
)
def test_starts_with_ignore_case(source, pos, expected):
    assert lexer.starts_with_ignore_case(source, 'for=', pos) is expected

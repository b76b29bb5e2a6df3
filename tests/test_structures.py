import pytest

import forwarded
from forwarded.util.structures import is_borrowed
from forwarded.util.structures import split_views
from forwarded.util.structures import StringView
from forwarded.util.structures import to_str


class TestStringView:
    def test_defaults_to_whole_source(self):
        view = StringView('192.0.2.43')
        assert str(view) == '192.0.2.43'
        assert len(view) == 10
        assert view.start == 0
        assert view.end == 10

    def test_substring(self):
        source = 'for=192.0.2.43;proto=https'
        view = StringView(source, 4, 14)
        assert str(view) == '192.0.2.43'
        assert view.source is source
        assert len(view) == 10

    def test_equality(self):
        view = StringView('by=proxy', 3)
        assert view == 'proxy'
        assert 'proxy' == view
        assert view == StringView('proxy')
        assert view != 'proxy2'
        assert view != 42

    def test_hash(self):
        assert hash(StringView('xproxy', 1)) == hash('proxy')
        assert {StringView('proxy'): 1}['proxy'] == 1

    def test_repr(self):
        assert repr(StringView('for=a', 4)) == "StringView('a')"

    def test_slots(self):
        with pytest.raises(AttributeError):
            StringView('a').extra = True


def test_to_str():
    owned = 'proxy'
    assert to_str(owned) is owned
    assert to_str(StringView('by=proxy', 3)) == 'proxy'
    assert type(to_str(StringView('proxy'))) is str


def test_is_borrowed():
    assert is_borrowed(StringView('proxy'))
    assert not is_borrowed('proxy')
    assert not is_borrowed(None)


@pytest.mark.parametrize(
    'source,expected',
    [
        ('', ['']),
        ('192.0.2.43', ['192.0.2.43']),
        ('192.0.2.43, 2001:db8:cafe::17', ['192.0.2.43', '2001:db8:cafe::17']),
        ('  a ,b,\tc  ', ['a', 'b', 'c']),
        ('a,,b', ['a', '', 'b']),
        ('a,', ['a', '']),
        (' , ', ['', '']),
    ],
)
def test_split_views(source, expected):
    views = list(split_views(source))
    assert all(view.source is source for view in views)
    assert [str(view) for view in views] == expected


def test_split_views_custom_separator():
    assert [str(v) for v in split_views('a; b', ';')] == ['a', 'b']


class TestCaseInsensitiveDict:
    def test_lookup(self):
        headers = forwarded.CaseInsensitiveDict({'X-Forwarded-For': '192.0.2.43'})
        assert headers['x-forwarded-for'] == '192.0.2.43'
        assert 'X-FORWARDED-FOR' in headers
        assert list(headers) == ['X-Forwarded-For']

    def test_get_header(self):
        headers = forwarded.CaseInsensitiveDict(
            {'forwarded': 'for=a', 'X-Forwarded-For': ['192.0.2.43', '198.51.100.17']}
        )
        assert headers.get_header('Forwarded') == 'for=a'
        assert headers.get_header('x-forwarded-for') == '192.0.2.43, 198.51.100.17'
        assert headers.get_header('X-Forwarded-Proto') is None
        assert headers.get_header('X-Forwarded-Proto', 'http') == 'http'

    def test_set_header(self):
        headers = forwarded.CaseInsensitiveDict()
        headers.set_header('forwarded', 'for=a')
        headers.set_header('Forwarded', 'for=b')
        assert len(headers) == 1
        assert headers.get_header('FORWARDED') == 'for=b'

    def test_equality_and_copy(self):
        headers = forwarded.CaseInsensitiveDict({'Forwarded': 'for=a'})
        assert headers == {'forwarded': 'for=a'}
        assert headers != 'for=a'

        copied = headers.copy()
        copied['Forwarded'] = 'for=b'
        assert headers['forwarded'] == 'for=a'

    def test_delete(self):
        headers = forwarded.CaseInsensitiveDict({'Forwarded': 'for=a'})
        del headers['FORWARDED']
        assert not headers

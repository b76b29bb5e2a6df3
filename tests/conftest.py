import pytest

import forwarded


class _RequestStub:
    """Mimics the header lookup interface of falcon.Request."""

    def __init__(self, headers):
        self._headers = forwarded.CaseInsensitiveDict(headers)

    def get_header(self, name, required=False, default=None):
        return self._headers.get_header(name, default)


class _ResponseStub:
    """Mimics the header setter interface of falcon.Response."""

    def __init__(self):
        self.headers = {}

    def set_header(self, name, value):
        self.headers[name.lower()] = value


@pytest.fixture(params=['mapping', 'request'])
def header_source(request):
    # NOTE: Same as Falcon's asgi/wsgi fixture pair; every test using this
    #   fixture runs against both kinds of header source.
    def factory(headers=None):
        headers = headers or {}
        if request.param == 'request':
            return _RequestStub(headers)
        return dict(headers)

    return factory


@pytest.fixture()
def response():
    return _ResponseStub()

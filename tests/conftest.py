import pytest

import sieve
from sieve import testing

# NOTE: Mirrors what a FastCGI or CGI gateway hands over for a typical
#   browser GET; the values are not all strings on purpose.
SERVER_GET = {
    'HTTP_COOKIE': 'ln=en',
    'HTTP_ACCEPT_LANGUAGE': 'fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7,ru;q=0.6',
    'HTTP_ACCEPT_ENCODING': 'gzip, deflate, br',
    'HTTP_ACCEPT': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'HTTP_DNT': '1',
    'HTTP_USER_AGENT': 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_13_6)',
    'HTTP_UPGRADE_INSECURE_REQUESTS': '1',
    'HTTP_CACHE_CONTROL': 'max-age=0',
    'HTTP_CONNECTION': 'keep-alive',
    'HTTP_HOST': 'localhost:9000',
    'REQUEST_METHOD': 'GET',
    'REQUEST_SCHEME': 'http',
    'SERVER_PORT': 80,
    'REQUEST_URI': '/users/?limit=10',
}

FORM_BODY = 'id=123&name%5B%5D=Amundsen-Scott&name%5B%5D=Dome%20Fuji'
JSON_BODY = '{"id":"123","name":["Amundsen-Scott","Dome Fuji"]}'

STATION_RULES = {
    'id': 'int',
    'name': {'filter': 'string', 'flags': sieve.RuleFlags.REQUIRE_SEQUENCE},
}


@pytest.fixture
def server_get():
    return dict(SERVER_GET)


@pytest.fixture
def server_put(server_get):
    env = dict(server_get)
    env['REQUEST_METHOD'] = 'PUT'
    env['HTTP_CONTENT_TYPE'] = sieve.MEDIA_URLENCODED
    return env


@pytest.fixture
def server_patch(server_get):
    env = dict(server_get)
    env['REQUEST_METHOD'] = 'PATCH'
    env['HTTP_CONTENT_TYPE'] = sieve.MEDIA_JSON
    return env


@pytest.fixture
def station_rules():
    return dict(STATION_RULES)


@pytest.fixture
def options():
    return sieve.RequestOptions()


@pytest.fixture
def create_req():
    return testing.create_req

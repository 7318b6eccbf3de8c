import pytest

import sieve


def test_precedence_order():
    merged = sieve.merge_sources(
        cookies={'a': 'cookie'},
        body={'a': 'body', 'b': 'body'},
        query={'a': 'query', 'b': 'query', 'c': 'query'},
        headers={'a': 'header', 'b': 'header', 'c': 'header', 'd': 'header'},
        fields={'a': 'field', 'b': 'field', 'c': 'field', 'd': 'field', 'e': 'field'},
    )

    assert merged == {
        'a': 'cookie',
        'b': 'body',
        'c': 'query',
        'd': 'header',
        'e': 'field',
    }


@pytest.mark.parametrize(
    'cookies,body,query',
    [
        ({'id': '1'}, {}, {'id': '2'}),
        ({'id': '1'}, {'id': '3'}, {'id': '2'}),
    ],
)
def test_cookie_wins(cookies, body, query):
    merged = sieve.merge_sources(cookies, body, query, {})
    assert merged['id'] == '1'


def test_first_source_wins_even_for_none():
    merged = sieve.merge_sources({'id': None}, {'id': '1'}, {}, {})
    assert merged == {'id': None}


def test_fields_optional():
    assert sieve.merge_sources({}, {}, {'a': '1'}, {}) == {'a': '1'}
    assert sieve.merge_sources({}, {}, {}, {}, None) == {}


def test_inputs_untouched():
    cookies = {'a': '1'}
    query = {'a': '2', 'b': '3'}

    merged = sieve.merge_sources(cookies, {}, query, {})
    merged['z'] = 'new'

    assert cookies == {'a': '1'}
    assert query == {'a': '2', 'b': '3'}


def test_request_params():
    req = sieve.Request(
        {'HTTP_X_TOKEN': 'header', 'QUERY_STRING': 'x-token=query&id=q'},
        cookies={'id': 'cookie'},
    )

    assert req.params['id'] == 'cookie'
    assert req.params['x-token'] == 'query'

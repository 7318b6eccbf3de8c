from collections import OrderedDict
import http

import pytest

import sieve
from sieve import errors


def test_base_error():
    err = sieve.HTTPError(422, description='Unprocessable', code=7)

    assert err.status is http.HTTPStatus.UNPROCESSABLE_ENTITY
    assert err.status_code == 422
    assert err.title == '422 Unprocessable Entity'
    assert err.to_dict() == {
        'title': '422 Unprocessable Entity',
        'description': 'Unprocessable',
        'code': 7,
    }


def test_custom_title():
    err = sieve.HTTPError(http.HTTPStatus.BAD_REQUEST, title='Nope')

    assert err.title == 'Nope'
    assert err.to_dict() == {'title': 'Nope'}


def test_to_dict_obj_type():
    err = sieve.HTTPError(400)
    assert isinstance(err.to_dict(OrderedDict), OrderedDict)


def test_invalid_status():
    with pytest.raises(ValueError):
        sieve.HTTPError(999)


def test_repr():
    err = sieve.HTTPError(415)

    assert repr(err) == '<HTTPError: 415 Unsupported Media Type>'
    assert str(err) == repr(err)


def test_unsupported_media_type():
    err = errors.UnsupportedMediaType('text/csv')

    assert isinstance(err, sieve.HTTPError)
    assert err.status_code == 415
    assert err.media_type == 'text/csv'
    assert err.description == 'text/csv is an unsupported media type.'


def test_unsupported_media_type_description():
    err = errors.UnsupportedMediaType('text/csv', description='Use JSON', code=3)

    assert err.description == 'Use JSON'
    assert err.code == 3


def test_media_malformed_error():
    try:
        try:
            raise ValueError('Expecting value: line 1 column 1 (char 0)')
        except ValueError as cause:
            raise errors.MediaMalformedError('JSON') from cause
    except errors.MediaMalformedError as ex:
        err = ex

    assert err.status_code == 400
    assert err.title == 'Invalid JSON'
    assert err.description == (
        'Could not parse JSON body - Expecting value: line 1 column 1 (char 0)'
    )
    assert err.to_dict()['description'] == err.description


def test_media_malformed_error_without_cause():
    err = errors.MediaMalformedError('MessagePack')

    assert err.description == 'Could not parse MessagePack body'

    # NOTE: The description is always derived from the cause
    err.description = 'ignored'
    assert err.description == 'Could not parse MessagePack body'


@pytest.mark.parametrize('error_cls', [errors.UnknownFilterError, errors.MalformedUpload])
def test_configuration_errors_are_value_errors(error_cls):
    assert issubclass(error_cls, ValueError)
    assert not issubclass(error_cls, sieve.HTTPError)

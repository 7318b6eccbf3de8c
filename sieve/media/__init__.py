from .base import BaseHandler
from .handlers import Handlers
from .handlers import MissingDependencyHandler
from .json import JSONHandler
from .msgpack import MessagePackHandler
from .urlencoded import URLEncodedFormHandler


__all__ = [
    'BaseHandler',
    'Handlers',
    'JSONHandler',
    'MessagePackHandler',
    'MissingDependencyHandler',
    'URLEncodedFormHandler',
]

import logging
import time

from collections.abc import Iterable, Mapping

from django.conf import settings


logger = logging.getLogger('django.db.backends.mockreduce')


def get_setting(name, default=None):
    """
    Reads `name` from the Django settings, falling back to `default` when
    no settings module has been configured (MockReduce is usable without
    a Django project).
    """
    if not settings.configured:
        return default
    return getattr(settings, name, default)


def debug_enabled():
    return get_setting('MOCKREDUCE_DEBUG', get_setting('DEBUG', False))


def records_of(data, what='test data'):
    """
    Materializes `data` into a list of records. Mappings contribute their
    values; strings and non-iterables are rejected.
    """
    if isinstance(data, Mapping):
        return list(data.values())
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        raise TypeError("%s must be an iterable of records (got %r)"
                        % (what, type(data).__name__))
    return list(data)


class MockCollectionDebugWrapper(object):

    def __init__(self, collection, name):
        self.collection = collection
        self.name = name

    def __getattr__(self, attr):
        return getattr(self.collection, attr)

    def profile_call(self, func, args=(), kwargs={}):
        start = time.time()
        retval = func(*args, **kwargs)
        duration = time.time() - start
        return duration, retval

    def log(self, op, duration, args, kwargs=None):
        args = ' '.join(getattr(arg, '__name__', str(arg)) for arg in args)
        msg = '%s.%s (%.2f) %s' % (self.name, op, duration, args)
        kwargs = dict((k, v) for k, v in (kwargs or {}).items() if v)
        if kwargs:
            msg += ' %s' % kwargs
        logger.debug(msg, extra={'duration': duration})

    def logging_wrapper(method):

        def wrapper(self, *args, **kwargs):
            func = getattr(self.collection, method)
            duration, retval = self.profile_call(func, args, kwargs)
            self.log(method, duration, args, kwargs)
            return retval

        return wrapper

    map_reduce = logging_wrapper('map_reduce')
    inline_map_reduce = logging_wrapper('inline_map_reduce')

    del logging_wrapper

import time

from collections.abc import Mapping

from .installer import Installer
from .map import Map
from .reduce import Reduce
from .scope import Scope
from .utils import logger, records_of


# Options MongoDB's mapReduce command takes that make no difference for
# in-memory test data.
IGNORED_OPTIONS = frozenset(['query', 'sort', 'verbose', 'jsMode',
                             'js_mode', 'keeptemp', 'bypassDocumentValidation',
                             'collation', 'session'])


class MockReduce(object):
    """
    Stands in for a MongoDB collection in Map/Reduce tests.

    Feed it the documents the collection would hold with
    :meth:`next_test_data`, then call :meth:`map_reduce` like you would on
    a :class:`pymongo.collection.Collection`::

        mock = MockReduce().next_test_data([{'n': 1}, {'n': 2}])
        mock.map_reduce(lambda this: emit('n', this['n']),
                        lambda key, values: sum(values))

    Public API: next_test_data, map_reduce, inline_map_reduce, get_emits,
    get_mapped_data, get_reduced_data, install, uninstall.
    """

    def __init__(self, scope=None):
        self.scope = scope if scope is not None else Scope()
        self.map = Map(self.scope)
        self.reduce = Reduce()
        self.installer = Installer()
        self._test_data = []

    def next_test_data(self, test_data):
        self._test_data = records_of(test_data)
        return self

    def map_reduce(self, map, reduce=None, out=None, full_response=False,
                   callback=None, **kwargs):
        """
        Runs `map` and `reduce` over the test data and returns the reduced
        documents (or MongoDB's full command response if `full_response` is
        ``True``). If given, `callback` is called with ``(None, result)``.

        `map` may also be a dict holding ``map``, ``reduce`` and any of the
        options, as passed to mongoose's ``Model.mapReduce``.

        Supported options: `limit`, `scope`, `finalize`. Other MongoDB
        options are accepted and ignored.
        """
        if isinstance(map, Mapping):
            options = dict(map)
            map = options.pop('map')
            reduce = options.pop('reduce', reduce)
            out = options.pop('out', out)
            options.update(kwargs)
            kwargs = options
        if reduce is None:
            raise TypeError("map_reduce() requires a reduce function")

        limit = kwargs.pop('limit', None)
        scope = kwargs.pop('scope', None) or {}
        finalize = kwargs.pop('finalize', None)
        for option in kwargs:
            log = logger.debug if option in IGNORED_OPTIONS else logger.warning
            log('Ignoring map_reduce option %r', option)

        start_time = time.time()
        test_data = self._test_data
        if limit:
            test_data = test_data[:limit]

        mapped_data = self.map.run(test_data, map, scope)
        if scope:
            with self.scope.exposed(scope):
                results = self._reduce_and_finalize(mapped_data, reduce,
                                                    finalize)
        else:
            results = self._reduce_and_finalize(mapped_data, reduce, finalize)

        if full_response:
            results = {
                'result': results,
                'counts': {
                    'input': len(test_data),
                    'emit': len(self.map.get_emits()),
                    'reduce': sum(1 for group in mapped_data
                                  if len(group['value']) > 1),
                    'output': len(results),
                },
                'timeMillis': int(round((time.time() - start_time) * 1000)),
                'ok': 1.0,
            }
        if callback is not None:
            callback(None, results)
        return results

    def inline_map_reduce(self, map, reduce, full_response=False, **kwargs):
        kwargs.pop('out', None)
        return self.map_reduce(map, reduce, out={'inline': 1},
                               full_response=full_response, **kwargs)

    def _reduce_and_finalize(self, mapped_data, reduce, finalize):
        results = self.reduce.run(mapped_data, reduce)
        if finalize is not None:
            for result in results:
                result['value'] = finalize(result['_id'], result['value'])
        return results

    def get_emits(self):
        return self.map.get_emits()

    def get_mapped_data(self):
        return self.map.get_mapped_data()

    def get_reduced_data(self):
        return self.reduce.get_reduced_data()

    def install(self, connector):
        self.installer.install(connector, self)

    def uninstall(self):
        self.installer.uninstall()


mock_reduce = MockReduce()

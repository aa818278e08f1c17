from .keys import group_key
from .scope import Scope
from .utils import logger, records_of


class Map(object):
    """
    Emulates the map phase of a MongoDB Map/Reduce.

    `run` calls the map function once per record, passing the record as the
    only argument (MongoDB's ``this``). While it runs, ``emit`` is exposed
    through `scope`; every emit is stored and grouped by its key::

        def map_function(this):
            emit(this['author'], this['points'])

        Map(Scope()).run(posts, map_function)
    """

    def __init__(self, scope=None):
        self.scope = scope if scope is not None else Scope()
        self._reset_state()

    def _reset_state(self):
        self._emits = []
        self._mapped_data = {}

    def run(self, test_data, map_function, scope=None):
        """
        Maps `test_data` with `map_function` and returns the grouped data.

        `scope` holds additional names made visible to the map function.
        If the map function raises, the emits and groups of the records
        processed so far are kept.
        """
        records = records_of(test_data)
        bindings = dict(scope or {})
        bindings['emit'] = self.emit
        with self.scope.exposed(bindings):
            self._reset_state()
            for record in records:
                map_function(record)

        logger.debug('Mapped %d records into %d emits, %d groups',
                     len(records), len(self._emits), len(self._mapped_data))
        return self.get_mapped_data()

    def emit(self, key, value):
        """
        Stores an emit and adds it to the group of its key.
        Returns the emitted document.
        """
        emitted = {'_id': key, 'value': value}
        self._emits.append(emitted)
        self._add_to_group(emitted)
        return emitted

    def get_emits(self):
        return self._emits

    def get_mapped_data(self):
        return list(self._mapped_data.values())

    def _add_to_group(self, emitted):
        # The first key seen for a group is the one shown in the results.
        key = group_key(emitted['_id'])
        if key not in self._mapped_data:
            self._mapped_data[key] = {'_id': emitted['_id'], 'value': []}
        self._mapped_data[key]['value'].append(emitted['value'])

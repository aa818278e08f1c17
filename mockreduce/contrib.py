from django.db import models

from . import base


class MapReduceResult(object):
    """
    Represents one item of a MapReduce result array.

    :param model: the model on that query the MapReduce was performed
    :param key: the *key* from the result item
    :param value: the *value* from the result item
    """

    def __init__(self, model, key, value):
        self.model = model
        self.key = key
        self.value = value

    @classmethod
    def from_entity(cls, model, entity):
        return cls(model, entity['_id'], entity['value'])

    def get_object(self):
        """
        Fetches the model instance with ``self.key`` as primary key from the
        database (doing a database query).
        """
        return self.model.objects.get(pk=self.key)

    def __eq__(self, other):
        if not isinstance(other, MapReduceResult):
            return NotImplemented
        return (self.model, self.key, self.value) == \
            (other.model, other.key, other.value)

    __hash__ = None

    def __repr__(self):
        return '<%s model=%r key=%r value=%r>' % (self.__class__.__name__,
                                                  self.model.__name__,
                                                  self.key, self.value)


class MockReduceMixin(object):
    """
    Mixes mocked MapReduce support into your manager. Uses the manager's
    `mock_reduce` if set, else the shared :data:`mockreduce.base.mock_reduce`.
    """
    mock_reduce = None

    def _get_mock_reduce(self):
        if self.mock_reduce is not None:
            return self.mock_reduce
        return base.mock_reduce

    def map_reduce(self, map_func, reduce_func, finalize_func=None,
                   limit=None, scope=None, keeptemp=False, **kwargs):
        """
        Performs a MapReduce on the mock's test data using `map_func`,
        `reduce_func` and (optionally) `finalize_func`, then returns an
        iterator yielding a :class:`MapReduceResult` for each result entity.

        `keeptemp` and `drop_collection` are accepted for compatibility
        with django-mongodb-engine's manager; no collection is involved.
        """
        kwargs.pop('drop_collection', None)
        mapreduce_kwargs = self._mapreduce_kwargs(finalize_func, limit, scope)
        mapreduce_kwargs.update(kwargs)
        results = self._get_mock_reduce().map_reduce(
            map_func, reduce_func, **mapreduce_kwargs)
        return self._map_reduce_results(results)

    def _map_reduce_results(self, results):
        for entity in results:
            yield MapReduceResult.from_entity(self.model, entity)

    def inline_map_reduce(self, map_func, reduce_func, finalize_func=None,
                          limit=None, scope=None, **kwargs):
        """
        Similar to :meth:`map_reduce` but returns a list of
        :class:`MapReduceResults <MapReduceResult>`.
        """
        mapreduce_kwargs = self._mapreduce_kwargs(finalize_func, limit, scope)
        mapreduce_kwargs.update(kwargs)
        return [MapReduceResult.from_entity(self.model, entity) for entity in
                self._get_mock_reduce().inline_map_reduce(
                    map_func, reduce_func, **mapreduce_kwargs)]

    def _mapreduce_kwargs(self, finalize_func, limit, scope):
        mapreduce_kwargs = {}
        if finalize_func is not None:
            mapreduce_kwargs['finalize'] = finalize_func
        if limit is not None:
            mapreduce_kwargs['limit'] = limit
        if scope is not None:
            mapreduce_kwargs['scope'] = scope
        return mapreduce_kwargs


class MockReduceManager(MockReduceMixin, models.Manager):
    """
    Lets you test Map/Reduce code written against django-mongodb-engine's
    ``MongoDBManager`` without a database::

        class FooModel(models.Model):
            ...
            objects = MockReduceManager()
    """

    def __init__(self, mock_reduce=None):
        super(MockReduceManager, self).__init__()
        self.mock_reduce = mock_reduce

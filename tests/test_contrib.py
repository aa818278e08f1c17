import types

from mockreduce.base import mock_reduce
from mockreduce.contrib import MapReduceResult

from .models import (MapReduceModel, MapReduceModelWithOwnMock,
                     own_mock_reduce)
from .testcase import TestCase


def map_numbers(this):
    for i in range(this['n']):
        emit(this['_id'], this['m'])


def sum_numbers(key, values):
    return sum(values)


RANDOM_NUMBERS = [
    (3, 4),
    (6, 19),
    (5, 8),
    (0, 20), # This instance won't be emitted by `map`.
    (2, 77),
    (300, 10),
]


class MapReduceTests(TestCase):

    def setUp(self):
        super(MapReduceTests, self).setUp()
        mock_reduce.next_test_data([{'_id': pk, 'n': n, 'm': m}
                                    for pk, (n, m) in
                                    enumerate(RANDOM_NUMBERS, 1)])

    def test_map_reduce(self):
        documents = MapReduceModel.objects.map_reduce(map_numbers,
                                                      sum_numbers)
        documents = list(documents)
        self.assertEqual(len(documents), len(RANDOM_NUMBERS) - 1)
        self.assertEqual(sum(doc.value for doc in documents),
                         sum(n * m for n, m in RANDOM_NUMBERS))
        self.assertTrue(all(doc.model is MapReduceModel
                            for doc in documents))
        self.assertEqual(documents[0].key, 1)

    def test_map_reduce_runs_when_called(self):
        documents = MapReduceModel.objects.map_reduce(map_numbers,
                                                      sum_numbers)
        self.assertIsInstance(documents, types.GeneratorType)
        self.assertEqual(len(mock_reduce.get_reduced_data()),
                         len(RANDOM_NUMBERS) - 1)
        mock_reduce.next_test_data([{'_id': 'x', 'n': 1, 'm': 2}])
        self.assertEqual(len(list(documents)), len(RANDOM_NUMBERS) - 1)

    def test_map_reduce_failure_raises_when_called(self):
        def map_failing(this):
            raise ValueError('no touching')
        with self.assertRaises(ValueError):
            MapReduceModel.objects.map_reduce(map_failing, sum_numbers)

    def test_map_reduce_arguments(self):
        documents = list(MapReduceModel.objects.map_reduce(
            map_numbers, sum_numbers, limit=3, drop_collection=True,
            keeptemp=True))
        self.assertEqual(len(documents), 3)
        self.assertEqual(sum(doc.value for doc in documents),
                         sum(n * m for n, m in RANDOM_NUMBERS[:3]))

    def test_finalize_and_scope(self):
        def finalize(key, value):
            return value * factor

        documents = MapReduceModel.objects.inline_map_reduce(
            map_numbers, sum_numbers, finalize_func=finalize,
            scope={'factor': 2}, limit=1)
        self.assertEqual(documents, [MapReduceResult(MapReduceModel, 1, 24)])

    def test_inline_map_reduce(self):
        documents = MapReduceModel.objects.inline_map_reduce(map_numbers,
                                                             sum_numbers)
        self.assertIsInstance(documents, list)
        self.assertEqual(len(documents), len(RANDOM_NUMBERS) - 1)
        self.assertEqual(documents[-1].value, 300 * 10)

    def test_own_mock_reduce(self):
        own_mock_reduce.next_test_data([{'_id': 'bar', 'data': 'yo?'}])
        somedoc = MapReduceModelWithOwnMock.objects.inline_map_reduce(
            lambda this: emit(this['_id'], None),
            lambda key, values: None)[0]
        self.assertEqual(somedoc.key, 'bar')
        self.assertEqual(somedoc.value, None)
        self.assertIs(somedoc.model, MapReduceModelWithOwnMock)


class MapReduceResultTests(TestCase):

    def test_from_entity(self):
        result = MapReduceResult.from_entity(MapReduceModel,
                                             {'_id': 'k', 'value': 3})
        self.assertEqual((result.model, result.key, result.value),
                         (MapReduceModel, 'k', 3))

    def test_repr(self):
        self.assertEqual(repr(MapReduceResult(MapReduceModel, 'k', 3)),
                         "<MapReduceResult model='MapReduceModel' key='k' "
                         "value=3>")

from .utils import logger, records_of


class Reduce(object):
    """
    Emulates the reduce phase of a MongoDB Map/Reduce.

    Like MongoDB, the reduce function is only called for keys with more
    than one value; a single value is the reduced value as it is.
    """

    def __init__(self):
        self._reset_reduced_data()

    def _reset_reduced_data(self):
        self._reduced_data = []

    def run(self, test_data, reduce_function):
        """
        Reduces every ``{'_id': key, 'value': [values]}`` group of
        `test_data` and returns the reduced documents in input order.
        """
        groups = records_of(test_data, 'grouped data')
        self._reset_reduced_data()

        for group in groups:
            key = group['_id']
            values = group['value'] if 'value' in group else group['values']
            self._reduced_data.append({
                '_id': key,
                'value': self._reduce_values(key, values, reduce_function),
            })

        return self.get_reduced_data()

    def _reduce_values(self, key, values, reduce_function):
        if isinstance(values, (str, bytes)) or \
                not isinstance(values, (list, tuple)):
            raise TypeError("Values of group %r must be a list (got %r)"
                            % (key, type(values).__name__))
        if len(values) > 1:
            return reduce_function(key, list(values))
        if not values:
            logger.warning('Group %r has no values, reducing it to None', key)
            return None
        return values[0]

    def get_reduced_data(self):
        return self._reduced_data

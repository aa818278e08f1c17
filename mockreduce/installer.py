"""
Patches a MongoDB connector so that connecting hands out a MockReduce
instead of a real collection.

A connector is any object with a ``connect`` function. Mongoose-like
connectors also have ``create_connection`` and ``model``; those are patched
only when present.
"""
from .utils import MockCollectionDebugWrapper, debug_enabled, logger


NATIVE = 'native'
MONGOOSE = 'mongoose'


class MockConnection(object):
    """
    Stands in for the database object a connector's ``connect`` returns.
    Every collection of it is the mock.
    """

    def __init__(self, mock, url=None):
        self.mock = mock
        self.url = url

    def collection(self, name, options=None, callback=None):
        if callable(options):
            callback, options = options, None
        collection = self.get_collection(name)
        if callback is not None:
            callback(None, collection)
        return collection

    def get_collection(self, name, **kwargs):
        if debug_enabled():
            return MockCollectionDebugWrapper(self.mock, name)
        return self.mock

    def __getitem__(self, name):
        return self.get_collection(name)

    def close(self, force=False, callback=None):
        if callable(force):
            callback = force
        if callback is not None:
            callback(None, self.mock)
        return self.mock

    def __repr__(self):
        return '<%s url=%r>' % (self.__class__.__name__, self.url)


class Installer(object):
    """
    Public API: install, uninstall, is_installed, connector_type.
    """

    def __init__(self):
        self._connector = None
        self._original_connect = None
        self._original_create_connection = None
        self._original_model = None
        self._installed = False

    @property
    def is_installed(self):
        return self._installed

    @property
    def connector_type(self):
        if self._connector is None:
            return None
        if hasattr(self._connector, 'create_connection'):
            return MONGOOSE
        return NATIVE

    def install(self, connector, mock):
        if self._installed:
            logger.debug('MockReduce is already installed for %r',
                         self._connector)
            return
        self._connector = connector
        self._install_connect(mock)
        self._install_create_connection()
        self._install_model(mock)
        self._installed = True
        logger.debug('Installed MockReduce for %s connector %r',
                     self.connector_type, connector)

    def _install_connect(self, mock):
        self._original_connect = self._connector.connect

        def connect(url=None, callback=None, *args, **kwargs):
            connection = MockConnection(mock, url)
            if callable(callback):
                callback(None, connection)
            return connection

        self._connector.connect = connect

    def _install_create_connection(self):
        if not hasattr(self._connector, 'create_connection'):
            return
        self._original_create_connection = self._connector.create_connection

        def create_connection(*args, **kwargs):
            pass

        self._connector.create_connection = create_connection

    def _install_model(self, mock):
        if getattr(self._connector, 'model', None) is None:
            return
        original_model = self._original_model = self._connector.model

        def map_reduce(*args, **kwargs):
            return mock.map_reduce(*args, **kwargs)

        def model(*args, **kwargs):
            model = original_model(*args, **kwargs)
            if isinstance(model, type):
                model.map_reduce = staticmethod(map_reduce)
            else:
                model.map_reduce = map_reduce
            return model

        self._connector.model = model

    def uninstall(self):
        """
        Restores the original functions of the connector.
        """
        if not self._installed:
            return
        self._connector.connect = self._original_connect
        if self._original_create_connection is not None:
            self._connector.create_connection = \
                self._original_create_connection
        if self._original_model is not None:
            self._connector.model = self._original_model
        self._original_connect = None
        self._original_create_connection = None
        self._original_model = None
        self._installed = False
        logger.debug('Uninstalled MockReduce from %r', self._connector)
        self._connector = None

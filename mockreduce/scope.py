import builtins

from contextlib import contextmanager

from .utils import logger


_MISSING = object()


class Scope(object):
    """
    Makes names visible to user map/reduce functions without passing them
    as arguments, the way MongoDB provides ``emit`` to map functions.

    Names are installed into `namespace` (a module or a dict), which
    defaults to the :mod:`builtins` module. That default is process-wide:
    two runners sharing it must not run at the same time.
    """

    def __init__(self, namespace=None):
        if namespace is None:
            namespace = builtins
        if not isinstance(namespace, dict):
            namespace = vars(namespace)
        self.namespace = namespace
        self._shadowed = {}
        self.active = False

    def expose(self, bindings):
        for name, value in bindings.items():
            if name not in self._shadowed:
                self._shadowed[name] = self.namespace.get(name, _MISSING)
            self.namespace[name] = value
        logger.debug('Exposed %s', ', '.join(sorted(bindings)))

    def conceal_all(self):
        for name, previous in self._shadowed.items():
            if previous is _MISSING:
                self.namespace.pop(name, None)
            else:
                self.namespace[name] = previous
        self._shadowed = {}

    @contextmanager
    def exposed(self, bindings):
        if self.active:
            raise RuntimeError("Scope is already exposing names for another "
                               "run; runs sharing a scope cannot be nested.")
        self.active = True
        try:
            self.expose(bindings)
            yield self
        finally:
            self.conceal_all()
            self.active = False

import builtins

from mockreduce.scope import Scope

from .testcase import TestCase


def emit_something():
    return emit('key', 'value')


class ScopeTests(TestCase):

    def setUp(self):
        super(ScopeTests, self).setUp()
        self.namespace = {'existing': 'original'}
        self.scope = Scope(self.namespace)

    def test_expose_and_conceal(self):
        self.scope.expose({'emit': len})
        self.assertIs(self.namespace['emit'], len)
        self.scope.conceal_all()
        self.assertNotIn('emit', self.namespace)
        self.assertEqual(self.namespace, {'existing': 'original'})

    def test_restores_shadowed_names(self):
        self.scope.expose({'existing': 'shadow'})
        self.scope.expose({'existing': 'shadow again'})
        self.assertEqual(self.namespace['existing'], 'shadow again')
        self.scope.conceal_all()
        self.assertEqual(self.namespace['existing'], 'original')

    def test_exposed_conceals_on_error(self):
        with self.assertRaises(ValueError):
            with self.scope.exposed({'emit': len}):
                self.assertIn('emit', self.namespace)
                raise ValueError
        self.assertNotIn('emit', self.namespace)
        self.assertFalse(self.scope.active)

    def test_exposed_cannot_be_nested(self):
        with self.scope.exposed({'emit': len}):
            with self.assertRaises(RuntimeError):
                with self.scope.exposed({'other': len}):
                    pass
            self.assertNotIn('other', self.namespace)
            self.assertIn('emit', self.namespace)
        self.assertNotIn('emit', self.namespace)

    def test_modules_are_used_through_their_dict(self):
        scope = Scope(builtins)
        self.assertIs(scope.namespace, vars(builtins))

    def test_builtins_by_default(self):
        scope = Scope()
        with scope.exposed({'emit': lambda key, value: (key, value)}):
            self.assertEqual(emit_something(), ('key', 'value'))
        self.assertFalse(hasattr(builtins, 'emit'))
        with self.assertRaises(NameError):
            emit_something()

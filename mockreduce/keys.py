"""
Key canonicalization for grouping emitted documents.

MongoDB groups emits by value, not by identity: ``{'x': 1, 'y': 2}`` and
``{'y': 2, 'x': 1}`` are the same key. :func:`canonicalize` turns a key into
a form where field order no longer matters and :func:`group_key` serializes
that form into a string usable as a dictionary key.
"""
from collections.abc import Mapping

from bson import json_util
from bson.binary import UuidRepresentation
from bson.son import SON


JSON_OPTIONS = json_util.JSONOptions(
    uuid_representation=UuidRepresentation.STANDARD)


def canonicalize(key):
    """
    Returns `key` with the fields of every (nested) mapping sorted by name.

    Lists and tuples keep their element order but have their elements
    canonicalized. Integral floats become ints since MongoDB compares
    numbers by value. Everything else is returned unaltered.
    """
    if isinstance(key, Mapping):
        return SON((str(name), canonicalize(key[name]))
                   for name in sorted(key, key=str))
    if isinstance(key, (list, tuple)):
        return [canonicalize(item) for item in key]
    if isinstance(key, float) and key.is_integer():
        return int(key)
    return key


def _type_tag(value):
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    cls = type(value)
    return '%s.%s' % (cls.__module__, cls.__qualname__)


def _tagged(canonical):
    # Every leaf becomes a [type tag, value] pair so that e.g. an ObjectId
    # and a document shaped like its Extended JSON do not serialize alike.
    if isinstance(canonical, SON):
        return SON((name, _tagged(value)) for name, value in canonical.items())
    if isinstance(canonical, list):
        return [_tagged(item) for item in canonical]
    return [_type_tag(canonical), canonical]


def group_key(key):
    """
    Serializes the canonical form of `key`. Two keys belong to the same
    group iff their group keys are equal.
    """
    return json_util.dumps(_tagged(canonicalize(key)), default=repr,
                           json_options=JSON_OPTIONS)

class Object(object):
    """
    Attribute-style view of a resolved object, keyed by field query key.
    """

    def __init__(self, values):
        self._values = values
        for key in values:
            setattr(self, key, values[key])

    def __bool__(self):
        return bool(self._values)

    def __eq__(self, other):
        if isinstance(other, Object):
            return self._values == other._values
        else:
            return NotImplemented

    def __ne__(self, other):
        return not (self == other)

    def to_dict(self):
        return dict(
            (key, _to_plain(value))
            for key, value in self._values.items()
        )

    def __repr__(self):
        return "Object({!r})".format(self._values)


def _to_plain(value):
    if isinstance(value, Object):
        return value.to_dict()
    elif isinstance(value, list):
        return [_to_plain(element) for element in value]
    else:
        return value

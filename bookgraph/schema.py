from functools import reduce

from . import iterables
from .core import ArgumentError, GraphError, UnknownFieldError
from .memo import lambdaize, memoize
from .representations import Object


_undefined = object()


class ScalarType(object):
    def __init__(self, name, coerce):
        self.name = name
        self._coerce = coerce

    def __call__(self):
        return ScalarQuery(self)

    def __repr__(self):
        return "ScalarType(name={!r})".format(self.name)

    def __str__(self):
        return self.name

    def child_types(self):
        return ()

    def coerce(self, value):
        return self._coerce(value)


def _coerce_int(value):
    # bool is a subclass of int, but true is not a valid Int
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    else:
        raise _coercion_error(value, Int)


Int = ScalarType("Int", coerce=_coerce_int)


def _coerce_string(value):
    if isinstance(value, str):
        return value
    else:
        raise _coercion_error(value, String)


String = ScalarType("String", coerce=_coerce_string)


class ScalarQuery(object):
    def __init__(self, type):
        self.type = type

    def for_type(self, target_type):
        if self.type == target_type:
            return self
        else:
            raise _query_coercion_error(self.type, target_type)

    def __add__(self, other):
        if not isinstance(other, ScalarQuery):
            return NotImplemented
        elif self.type != other.type:
            raise TypeError("cannot add queries for different scalar types: {} and {}".format(
                self.type,
                other.type,
            ))
        else:
            return self

    def __repr__(self):
        return "ScalarQuery(type={})".format(self.type)


class TypeRegistry(object):
    """
    Lookup table of object types by name.

    Fields refer to other types with ``registry.ref(name)`` rather than by
    holding the type itself, so mutually referring types can be declared in
    any order. A reference is looked up in the registry when the field's type
    is first read, which is at query construction or execution time.
    """

    def __init__(self):
        self._types = {}

    def add(self, graph_type):
        if graph_type.name in self._types:
            raise GraphError("type is already registered: {}".format(graph_type.name))

        self._types[graph_type.name] = graph_type
        return graph_type

    def object_type(self, name, fields, description=None):
        return self.add(ObjectType(name, fields=fields, description=description))

    def ref(self, name):
        return TypeReference(self, name)

    def get(self, name):
        graph_type = self._types.get(name)
        if graph_type is None:
            raise GraphError("no type registered with name: {}".format(name))
        else:
            return graph_type

    def __contains__(self, name):
        return name in self._types

    def __iter__(self):
        return iter(self._types.values())


class TypeReference(object):
    def __init__(self, registry, name):
        self._registry = registry
        self.name = name

    def resolve(self):
        return self._registry.get(self.name)

    def __repr__(self):
        return "TypeReference(name={!r})".format(self.name)


def resolve_type(graph_type):
    if isinstance(graph_type, TypeReference):
        return graph_type.resolve()
    else:
        return graph_type


class ListType(object):
    def __init__(self, element_type):
        self._element_type = element_type

    @property
    def element_type(self):
        return resolve_type(self._element_type)

    def __call__(self, *args, **kwargs):
        return ListQuery(self, self.element_type(*args, **kwargs))

    def query(self, *args, **kwargs):
        return ListQuery(self, self.element_type.query(*args, **kwargs))

    def __eq__(self, other):
        if isinstance(other, ListType):
            return self.element_type == other.element_type
        else:
            return NotImplemented

    def __ne__(self, other):
        return not (self == other)

    def __hash__(self):
        return hash((ListType, self.element_type))

    def __repr__(self):
        return "ListType(element_type={!r})".format(self._element_type)

    def __str__(self):
        return "List({})".format(self.element_type)

    def child_types(self):
        return (self.element_type, )

    def coerce(self, value):
        if not isinstance(value, (list, tuple)):
            raise _coercion_error(value, self)

        return [
            self.element_type.coerce(element)
            for element in value
        ]


class ListQuery(object):
    def __init__(self, type, element_query):
        self.type = type
        self.element_query = element_query

    def for_type(self, target_type):
        if isinstance(target_type, ListType):
            element_query = self.element_query.for_type(target_type.element_type)
            return ListQuery(type=target_type, element_query=element_query)
        else:
            raise _query_coercion_error(self.type, target_type)

    def __add__(self, other):
        if not isinstance(other, ListQuery):
            return NotImplemented
        elif self.type != other.type:
            raise TypeError("cannot add queries for lists with different element types: {} and {}".format(
                self.type.element_type,
                other.type.element_type,
            ))
        else:
            return ListQuery(type=self.type, element_query=self.element_query + other.element_query)

    def __repr__(self):
        return "ListQuery(type={}, element_query={!r})".format(self.type, self.element_query)


class NullableType(object):
    def __init__(self, element_type):
        self._element_type = element_type

    @property
    def element_type(self):
        return resolve_type(self._element_type)

    def __call__(self, *args, **kwargs):
        return NullableQuery(self, self.element_type(*args, **kwargs))

    def query(self, *args, **kwargs):
        return NullableQuery(self, self.element_type.query(*args, **kwargs))

    def __eq__(self, other):
        if isinstance(other, NullableType):
            return self.element_type == other.element_type
        else:
            return NotImplemented

    def __ne__(self, other):
        return not (self == other)

    def __hash__(self):
        return hash((NullableType, self.element_type))

    def __repr__(self):
        return "NullableType(element_type={!r})".format(self._element_type)

    def __str__(self):
        return "Nullable({})".format(self.element_type)

    def child_types(self):
        return (self.element_type, )

    def coerce(self, value):
        if value is None:
            return None
        else:
            return self.element_type.coerce(value)


class NullableQuery(object):
    def __init__(self, type, element_query):
        self.type = type
        self.element_query = element_query

    def for_type(self, target_type):
        if isinstance(target_type, NullableType):
            element_query = self.element_query.for_type(target_type.element_type)
            return NullableQuery(type=target_type, element_query=element_query)
        else:
            raise _query_coercion_error(self.type, target_type)

    def __add__(self, other):
        if not isinstance(other, NullableQuery):
            return NotImplemented
        elif self.type != other.type:
            raise TypeError("cannot add queries for nullables with different element types: {} and {}".format(
                self.type.element_type,
                other.type.element_type,
            ))
        else:
            return NullableQuery(type=self.type, element_query=self.element_query + other.element_query)

    def __repr__(self):
        return "NullableQuery(type={}, element_query={!r})".format(self.type, self.element_query)


class ObjectType(object):
    def __init__(self, name, fields, description=None):
        self.name = name
        self.description = description
        if not callable(fields):
            fields = lambdaize(fields)

        def owned_fields():
            return tuple(
                field.with_owner_type(self)
                for field in fields()
            )

        self.fields = Fields(name, owned_fields)

    def __call__(self, *field_queries):
        return ObjectQuery.create(self, field_queries=field_queries)

    def query(self, *, field_queries, create_object):
        return ObjectQuery.create(self, field_queries=field_queries, create_object=create_object)

    def __repr__(self):
        return "ObjectType(name={!r})".format(self.name)

    def __str__(self):
        return self.name

    def child_types(self):
        return tuple(
            child_type
            for field in self.fields
            for child_type in field.child_types()
        )


class Fields(object):
    def __init__(self, type_name, fields):
        self._type_name = type_name
        self._fields = memoize(fields)

    def __iter__(self):
        return iter(self._fields())

    def __getattr__(self, field_name):
        if field_name.startswith("__"):
            raise AttributeError(field_name)

        field = self._find_field(field_name)

        # Trailing underscore allows fields named after keywords, such as from_
        if field is None and field_name.endswith("_"):
            field = self._find_field(field_name[:-1])

        if field is None:
            raise UnknownFieldError("{} has no field {}".format(self._type_name, field_name))
        else:
            return field

    def _find_field(self, field_name):
        return iterables.find(lambda field: field.name == field_name, self._fields(), default=None)


class ObjectQuery(object):
    @staticmethod
    def create(type, *, field_queries, create_object=None):
        if create_object is None:
            create_object = Object

        return ObjectQuery(type, field_queries=field_queries, create_object=create_object)

    def __init__(self, type, field_queries, *, create_object):
        self.type = type
        self.field_queries = tuple(field_queries)
        self.create_object = create_object

    def __add__(self, other):
        if not isinstance(other, ObjectQuery):
            return NotImplemented
        elif self.type != other.type:
            raise TypeError("cannot add queries for different object types: {} and {}".format(
                self.type,
                other.type,
            ))
        else:
            field_queries = [
                reduce(lambda left, right: left + right, same_key_queries)
                for same_key_queries in iterables.to_multidict(
                    ((field_query.field, field_query.key), field_query)
                    for field_query in (self.field_queries + other.field_queries)
                ).values()
            ]

            return ObjectQuery(
                type=self.type,
                field_queries=field_queries,
                create_object=self.create_object,
            )

    def for_type(self, target_type):
        if self.type == target_type:
            return self
        else:
            raise _query_coercion_error(self.type, target_type)

    def __repr__(self):
        return "ObjectQuery(type={}, field_queries={!r})".format(self.type, self.field_queries)


def field(name, type, params=None, description=None):
    if params is None:
        params = ()
    return Field(owner_type=None, name=name, type=type, params=params, description=description)


class Field(object):
    def __init__(self, owner_type, name, type, params, description=None):
        self.owner_type = owner_type
        self.name = name
        self._type = type
        self.params = Params(name, params)
        self.description = description

    @property
    def type(self):
        return resolve_type(self._type)

    def with_owner_type(self, owner_type):
        return Field(
            owner_type=owner_type,
            name=self.name,
            type=self._type,
            params=tuple(self.params),
            description=self.description,
        )

    def __call__(self, *args):
        field_queries, field_args = _partition_by_type(args, (FieldQuery, Argument))
        type_query = self.type(*field_queries)

        return self.query(key=self.name, type_query=type_query, args=field_args)

    def query(self, args, key, type_query):
        for arg in args:
            if arg.parameter not in self.params:
                raise ArgumentError("field {} has no param {}".format(self.name, arg.parameter.name))

        try:
            explicit_args = iterables.to_dict(
                (arg.parameter.name, arg.value)
                for arg in args
            )
        except KeyError:
            raise ArgumentError("field {} was passed the same argument more than once".format(self.name))

        def get_arg(param):
            value = explicit_args.get(param.name, param.default)

            if value is _undefined:
                raise ArgumentError("field {} is missing required argument {}".format(self.name, param.name))
            else:
                return value

        field_args = Object(iterables.to_dict(
            (param.name, get_arg(param))
            for param in self.params
        ))

        return FieldQuery(key=key, field=self, type_query=type_query.for_type(self.type), args=field_args)

    def __repr__(self):
        return "Field(name={!r}, type={!r})".format(self.name, self._type)

    def child_types(self):
        return (self.type, ) + tuple(
            param.type
            for param in self.params
        )


def _partition_by_type(values, types):
    results = tuple([] for type in types)

    for value in values:
        index = iterables.find(
            lambda index: isinstance(value, types[index]),
            range(len(types)),
            default=None,
        )
        if index is None:
            raise GraphError("unexpected argument: {!r}\nExpected arguments of type {} but had type {}".format(
                value,
                " or ".join(sorted(type.__name__ for type in types)),
                type(value).__name__,
            ))
        else:
            results[index].append(value)

    return results


class Params(object):
    def __init__(self, field_name, params):
        self._field_name = field_name
        self._params = tuple(params)

    def __iter__(self):
        return iter(self._params)

    def __getattr__(self, param_name):
        if param_name.startswith("__"):
            raise AttributeError(param_name)

        param = self._find_param(param_name)

        if param is None and param_name.endswith("_"):
            param = self._find_param(param_name[:-1])

        if param is None:
            raise ArgumentError("{} has no param {}".format(self._field_name, param_name))
        else:
            return param

    def _find_param(self, param_name):
        return iterables.find(lambda param: param.name == param_name, self._params, default=None)


class FieldQuery(object):
    def __init__(self, key, field, type_query, args):
        self.key = key
        self.field = field
        self.type_query = type_query
        self.args = args

    def __add__(self, other):
        if not isinstance(other, FieldQuery):
            return NotImplemented
        elif self.key != other.key or self.field is not other.field or self.args != other.args:
            raise TypeError("cannot add field queries for key {} with different fields or arguments".format(self.key))
        else:
            return FieldQuery(
                key=self.key,
                field=self.field,
                type_query=self.type_query + other.type_query,
                args=self.args,
            )

    def __repr__(self):
        return "FieldQuery(key={!r}, field={!r}, type_query={!r}, args={!r})".format(
            self.key,
            self.field,
            self.type_query,
            self.args,
        )


def key(key, field_query):
    return FieldQuery(
        key=key,
        field=field_query.field,
        type_query=field_query.type_query,
        args=field_query.args,
    )


def param(name, type, default=_undefined):
    return Parameter(name=name, type=type, default=default)


class Parameter(object):
    def __init__(self, name, type, default):
        self.name = name
        self.type = type
        self.default = default

    @property
    def has_default(self):
        return self.default is not _undefined

    def __call__(self, value):
        return Argument(parameter=self, value=self.type.coerce(value))

    def __repr__(self):
        return "Parameter(name={!r}, type={!r})".format(self.name, self.type)


class Argument(object):
    def __init__(self, parameter, value):
        self.parameter = parameter
        self.value = value


def collect_types(types):
    all_types = set()

    def collect(graph_type):
        if graph_type is not None and graph_type not in all_types:
            all_types.add(graph_type)
            for child in graph_type.child_types():
                collect(child)

    for graph_type in types:
        collect(graph_type)

    return all_types


def _coercion_error(value, target_type):
    return ArgumentError("cannot coerce {!r} to {}".format(value, target_type))


def _query_coercion_error(source_type, target_type):
    return TypeError("cannot coerce query for {} to query for {}".format(
        source_type,
        target_type,
    ))


typename_field = field("type_name", type=String)


def to_element_type(graph_type):
    if isinstance(graph_type, (ListType, NullableType)):
        return to_element_type(graph_type.element_type)
    else:
        return graph_type


def to_element_query(type_query):
    if isinstance(type_query, (ListQuery, NullableQuery)):
        return to_element_query(type_query.element_query)
    else:
        return type_query

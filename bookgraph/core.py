import logging

from . import iterables


_logger = logging.getLogger(__name__)


def create_graph(resolvers):
    return define_graph(resolvers).create_graph({})


def define_graph(resolvers):
    return GraphDefinition(resolvers)


class GraphDefinition(object):
    def __init__(self, resolvers):
        try:
            self._resolvers = iterables.to_dict(
                (resolver.type, resolver)
                for resolver in _flatten(resolvers)
            )
        except KeyError as error:
            raise GraphError("resolver registered more than once for the same type: {}".format(error))

    def create_graph(self, dependencies):
        return Graph(self._resolvers, dependencies)


class Graph(object):
    def __init__(self, resolvers, dependencies):
        self._resolvers = resolvers
        self._injector = Injector(dependencies)

    def resolve(self, *args, type=None):
        if type is None:
            type = args[0].type
        resolver = self._resolvers.get(type)
        if resolver is None:
            raise GraphError("could not find resolver for query of type: {}".format(_type_name(type)))
        else:
            _logger.debug("resolving query of type %s", _type_name(type))
            return self._injector.call_with_dependencies(resolver, self, *args)


class Injector(object):
    def __init__(self, dependencies):
        self._dependencies = dict(dependencies)
        self._dependencies[Injector] = self

    def get(self, key):
        try:
            return self._dependencies[key]
        except KeyError:
            raise GraphError("missing dependency: {}".format(_type_name(key)))

    def call_with_dependencies(self, func, *args, **kwargs):
        dependencies = getattr(func, "dependencies", {})
        dependency_kwargs = {
            arg_name: self.get(dependency_key)
            for arg_name, dependency_key in dependencies.items()
        }
        return func(*args, **kwargs, **dependency_kwargs)


def _flatten(value):
    if isinstance(value, (list, tuple)):
        return [
            subelement
            for element in value
            for subelement in _flatten(element)
        ]
    else:
        return [value]


def _type_name(type):
    return getattr(type, "__name__", type)


def resolver(type):
    def register_resolver(func):
        func.type = type
        return func

    return register_resolver


def dependencies(**kwargs):
    def register_dependency(func):
        func.dependencies = kwargs
        return func

    return register_dependency


class GraphError(Exception):
    code = "GRAPH_ERROR"

    def __init__(self, message, nodes=None):
        super().__init__(message)
        self.message = message
        self.nodes = nodes


class UnknownFieldError(GraphError):
    code = "UNKNOWN_FIELD"


class ArgumentError(GraphError):
    code = "BAD_ARGUMENT"

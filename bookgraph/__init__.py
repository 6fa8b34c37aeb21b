from .core import (
    ArgumentError,
    create_graph,
    dependencies,
    define_graph,
    GraphError,
    resolver,
    UnknownFieldError,
)
from .representations import Object
from .resolvers import build_records, create_object_builder, root_object_resolver
from .schema import (
    field,
    Int,
    key,
    ListType,
    NullableType,
    ObjectType,
    param,
    String,
    to_element_query,
    TypeRegistry,
)


__all__ = [
    "ArgumentError",
    "create_graph",
    "dependencies",
    "define_graph",
    "GraphError",
    "resolver",
    "UnknownFieldError",

    "build_records",
    "create_object_builder",
    "root_object_resolver",

    "Object",

    "field",
    "Int",
    "key",
    "ListType",
    "NullableType",
    "ObjectType",
    "param",
    "String",
    "to_element_query",
    "TypeRegistry",
]

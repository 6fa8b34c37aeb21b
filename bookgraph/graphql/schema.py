import graphql

from .. import iterables, schema
from .naming import snake_case_to_camel_case


class Schema(object):
    def __init__(self, query_type, mutation_type, graphql_schema):
        self.query_type = query_type
        self.mutation_type = mutation_type
        self.graphql_schema = graphql_schema


def create_graphql_schema(query_type, mutation_type=None):
    """
    Generate the graphql-core schema equivalent to the given graph types.

    Graph types are non-null unless wrapped in ``NullableType``, so each
    non-nullable graph type becomes a ``GraphQLNonNull`` around the
    corresponding named or list type.
    """
    named_types = {}

    def to_graphql_type(graph_type):
        if isinstance(graph_type, schema.NullableType):
            return to_nullable_graphql_type(graph_type.element_type)
        else:
            return graphql.GraphQLNonNull(to_nullable_graphql_type(graph_type))

    def to_nullable_graphql_type(graph_type):
        if isinstance(graph_type, schema.NullableType):
            return to_nullable_graphql_type(graph_type.element_type)

        elif isinstance(graph_type, schema.ListType):
            return graphql.GraphQLList(to_graphql_type(graph_type.element_type))

        elif graph_type == schema.Int:
            return graphql.GraphQLInt

        elif graph_type == schema.String:
            return graphql.GraphQLString

        elif isinstance(graph_type, schema.ObjectType):
            if graph_type.name not in named_types:
                named_types[graph_type.name] = graphql.GraphQLObjectType(
                    name=graph_type.name,
                    fields=to_graphql_fields(graph_type.fields),
                    description=graph_type.description,
                )

            return named_types[graph_type.name]

        else:
            raise ValueError("unsupported type: {}".format(graph_type))

    def to_graphql_fields(graph_fields):
        return lambda: iterables.to_dict(
            (snake_case_to_camel_case(field.name), to_graphql_field(field))
            for field in graph_fields
        )

    def to_graphql_field(graph_field):
        return graphql.GraphQLField(
            type_=to_graphql_type(graph_field.type),
            args=iterables.to_dict(
                (snake_case_to_camel_case(param.name), to_graphql_argument(param))
                for param in graph_field.params
            ),
            description=graph_field.description,
        )

    def to_graphql_argument(param):
        graphql_type = to_graphql_type(param.type)

        if param.has_default and isinstance(graphql_type, graphql.GraphQLNonNull):
            graphql_type = graphql_type.of_type

        return graphql.GraphQLArgument(type_=graphql_type)

    graphql_query_type = to_nullable_graphql_type(query_type)
    if mutation_type is None:
        graphql_mutation_type = None
    else:
        graphql_mutation_type = to_nullable_graphql_type(mutation_type)

    return Schema(
        query_type=query_type,
        mutation_type=mutation_type,
        graphql_schema=graphql.GraphQLSchema(
            query=graphql_query_type,
            mutation=graphql_mutation_type,
            types=tuple(named_types.values()),
        ),
    )

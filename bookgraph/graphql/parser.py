from copy import copy
from functools import reduce

from graphql import GraphQLError
from graphql.execution.values import get_argument_values, get_variable_values
from graphql.language import ast as graphql_ast, parser as graphql_parser
from graphql.type.directives import GraphQLIncludeDirective, GraphQLSkipDirective
from graphql.validation import (
    FieldsOnCorrectTypeRule,
    KnownArgumentNamesRule,
    ProvidedRequiredArgumentsRule,
    ValuesOfCorrectTypeRule,
    VariablesInAllowedPositionRule,
    validate as graphql_validate,
)

from .. import schema
from ..core import ArgumentError, UnknownFieldError
from ..iterables import find, partition, to_dict
from .naming import snake_case_to_camel_case


_introspection_field_names = frozenset(["__schema", "__type"])

# Each tier is checked before full validation so that the errors the graph
# itself can raise keep their own type when graphql-core finds them first.
_validation_tiers = (
    ((FieldsOnCorrectTypeRule, ), UnknownFieldError),
    (
        (
            KnownArgumentNamesRule,
            ProvidedRequiredArgumentsRule,
            ValuesOfCorrectTypeRule,
            VariablesInAllowedPositionRule,
        ),
        ArgumentError,
    ),
)


class GraphQLQuery(object):
    def __init__(self, operation, graph_query, graphql_schema_document, variables):
        self.operation = operation
        self.graph_query = graph_query
        self.graphql_schema_document = graphql_schema_document
        self.variables = variables


def document_text_to_query(document_text, graphql_schema, variables=None, operation_name=None):
    if variables is None:
        variables = {}

    document_ast = graphql_parser.parse(document_text)

    _validate(graphql_schema.graphql_schema, document_ast)

    operation_index, operation = _find_operation(document_ast, operation_name=operation_name)

    if operation.operation == graphql_ast.OperationType.QUERY:
        root_type = graphql_schema.query_type
    elif operation.operation == graphql_ast.OperationType.MUTATION and graphql_schema.mutation_type is not None:
        root_type = graphql_schema.mutation_type
    else:
        raise GraphQLError(
            "unsupported operation: {}".format(operation.operation.value),
            nodes=[operation],
        )

    coerced_variables = get_variable_values(
        graphql_schema.graphql_schema,
        operation.variable_definitions or [],
        variables,
    )
    if isinstance(coerced_variables, list):
        raise ArgumentError(coerced_variables[0].message, nodes=coerced_variables[0].nodes)

    fragments = to_dict(
        (fragment.name.value, fragment)
        for fragment in filter(
            lambda definition: isinstance(definition, graphql_ast.FragmentDefinitionNode),
            document_ast.definitions,
        )
    )

    # Introspection is delegated to graphql-core, so those selections are
    # split out into their own document
    schema_selections, graph_selections = partition(
        lambda selection: (
            isinstance(selection, graphql_ast.FieldNode) and
            selection.name.value in _introspection_field_names
        ),
        operation.selection_set.selections,
    )

    if schema_selections:
        schema_definitions = list(document_ast.definitions)
        schema_definitions[operation_index] = _copy_with(
            operation,
            selection_set=_copy_with(operation.selection_set, selections=tuple(schema_selections)),
        )
        schema_document = _copy_with(document_ast, definitions=tuple(schema_definitions))
    else:
        schema_document = None

    if graph_selections:
        all_types_by_name = to_dict(
            (graph_type.name, graph_type)
            for graph_type in schema.collect_types(
                (graphql_schema.query_type, graphql_schema.mutation_type),
            )
            if isinstance(graph_type, schema.ObjectType)
        )
        parser = Parser(fragments=fragments, types=all_types_by_name, variables=coerced_variables)
        graph_query = parser.read_selection_set(
            _copy_with(operation.selection_set, selections=tuple(graph_selections)),
            graph_type=root_type,
        )
    else:
        graph_query = None

    return GraphQLQuery(
        operation=operation.operation,
        graph_query=graph_query,
        graphql_schema_document=schema_document,
        variables=coerced_variables,
    )


def _validate(graphql_schema, document_ast):
    for rules, error_type in _validation_tiers:
        errors = graphql_validate(graphql_schema, document_ast, rules)
        if errors:
            raise error_type(errors[0].message, nodes=errors[0].nodes)

    errors = graphql_validate(graphql_schema, document_ast)
    if errors:
        raise errors[0]


def _find_operation(document_ast, operation_name):
    operations = [
        (index, definition)
        for index, definition in enumerate(document_ast.definitions)
        if isinstance(definition, graphql_ast.OperationDefinitionNode)
    ]

    if operation_name is None:
        if len(operations) == 1:
            return operations[0]
        else:
            raise GraphQLError("Must provide operation name if query contains multiple operations.")
    else:
        operation = find(
            lambda operation: operation[1].name is not None and operation[1].name.value == operation_name,
            operations,
            default=None,
        )
        if operation is None:
            raise GraphQLError("Unknown operation named '{}'.".format(operation_name))
        else:
            return operation


class Parser(object):
    def __init__(self, fragments, types, variables):
        self._fragments = fragments
        self._types = types
        self._variables = variables

    def read_selection_set(self, selection_set, graph_type):
        if selection_set is None:
            return graph_type()
        else:
            return reduce(
                lambda left, right: left + right,
                (
                    self._read_graphql_selection(graphql_selection, graph_type=graph_type)
                    for graphql_selection in selection_set.selections
                ),
            )

    def _read_graphql_selection(self, selection, graph_type):
        if not self._should_include_selection(selection):
            return graph_type.query(field_queries=(), create_object=_create_object)

        elif isinstance(selection, graphql_ast.FieldNode):
            field_query = self._read_graphql_field(selection, graph_type=graph_type)
            return graph_type.query(field_queries=(field_query, ), create_object=_create_object)

        elif isinstance(selection, graphql_ast.InlineFragmentNode):
            return self._read_graphql_fragment(selection, graph_type=graph_type)

        elif isinstance(selection, graphql_ast.FragmentSpreadNode):
            return self._read_graphql_fragment(self._fragments[selection.name.value], graph_type=graph_type)

        else:
            raise GraphQLError("unhandled selection type: {}".format(type(selection).__name__), nodes=[selection])

    def _should_include_selection(self, selection):
        for directive in selection.directives:
            name = directive.name.value
            if name == "include":
                args = get_argument_values(GraphQLIncludeDirective, directive, self._variables)
                if args.get("if") is False:
                    return False

            elif name == "skip":
                args = get_argument_values(GraphQLSkipDirective, directive, self._variables)
                if args.get("if") is True:
                    return False

            else:
                raise GraphQLError("unknown directive: {}".format(name), nodes=[directive])

        return True

    def _read_graphql_fragment(self, fragment, graph_type):
        element_type = schema.to_element_type(graph_type)

        if fragment.type_condition is None:
            type_condition_type = element_type
        else:
            type_condition_type = self._types[fragment.type_condition.name.value]

        query = self.read_selection_set(
            fragment.selection_set,
            graph_type=type_condition_type,
        ).for_type(element_type)

        return graph_type.query(field_queries=query.field_queries, create_object=_create_object)

    def _read_graphql_field(self, graphql_field, graph_type):
        key = _field_key(graphql_field)
        field = self._get_field(graph_type, graphql_field.name.value)

        args = [
            self._read_graphql_argument(field, arg)
            for arg in graphql_field.arguments
            if not self._is_unset_variable(arg.value)
        ]
        type_query = self.read_selection_set(
            graphql_field.selection_set,
            graph_type=field.type,
        )
        return field.query(key=key, args=args, type_query=type_query)

    def _read_graphql_argument(self, field, arg):
        param = self._lookup_camel_case_name(
            field.params,
            arg.name.value,
            error=lambda name: ArgumentError("field {} has no param {}".format(field.name, name), nodes=[arg]),
        )
        value = self._convert_graphql_value(self._read_graphql_value(arg.value), value_type=param.type)
        return param(value)

    def _is_unset_variable(self, value):
        # An argument given a variable that wasn't supplied is treated as absent
        return isinstance(value, graphql_ast.VariableNode) and value.name.value not in self._variables

    def _get_field(self, graph_type, field_name):
        if field_name == "__typename":
            return schema.typename_field
        else:
            object_type = schema.to_element_type(graph_type)

            return self._lookup_camel_case_name(
                object_type.fields,
                field_name,
                error=lambda name: UnknownFieldError("{} has no field {}".format(object_type.name, name)),
            )

    def _convert_graphql_value(self, graphql_value, value_type):
        if isinstance(value_type, schema.NullableType):
            if graphql_value is None:
                return None
            else:
                return self._convert_graphql_value(graphql_value, value_type=value_type.element_type)

        elif isinstance(value_type, schema.ListType):
            return [
                self._convert_graphql_value(element, value_type=value_type.element_type)
                for element in graphql_value
            ]

        elif isinstance(value_type, schema.ScalarType):
            return graphql_value

        else:
            raise ValueError("unhandled type: {}".format(value_type))

    def _read_graphql_value(self, value):
        if isinstance(value, graphql_ast.IntValueNode):
            return int(value.value)
        elif isinstance(value, graphql_ast.StringValueNode):
            return value.value
        elif isinstance(value, graphql_ast.BooleanValueNode):
            return value.value
        elif isinstance(value, graphql_ast.FloatValueNode):
            return float(value.value)
        elif isinstance(value, graphql_ast.EnumValueNode):
            return value.value
        elif isinstance(value, graphql_ast.NullValueNode):
            return None
        elif isinstance(value, graphql_ast.ListValueNode):
            return [
                self._read_graphql_value(element)
                for element in value.values
            ]
        elif isinstance(value, graphql_ast.VariableNode):
            return self._variables.get(value.name.value)
        else:
            raise ValueError("unhandled value: {}".format(type(value).__name__))

    def _lookup_camel_case_name(self, collection, camel_case_name, error):
        element = find(
            lambda element: snake_case_to_camel_case(element.name) == camel_case_name,
            collection,
            default=None,
        )
        if element is None:
            raise error(camel_case_name)
        else:
            return element


def _field_key(selection):
    if selection.alias is None:
        return selection.name.value
    else:
        return selection.alias.value


def _copy_with(node, **kwargs):
    result = copy(node)
    for key, value in kwargs.items():
        setattr(result, key, value)
    return result


def _create_object(value):
    return value

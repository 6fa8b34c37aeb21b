import logging

from graphql import GraphQLError
from graphql.execution import execute as graphql_execute, ExecutionResult
from graphql.language.ast import OperationType

from ..core import GraphError
from . import parser
from .schema import create_graphql_schema


_logger = logging.getLogger(__name__)


def execute(
    document_text,
    *,
    graph,
    query_type,
    mutation_type=None,
    variables=None,
    operation_name=None,
):
    return executor(
        query_type=query_type,
        mutation_type=mutation_type,
    )(document_text, graph=graph, variables=variables, operation_name=operation_name)


def executor(*, query_type, mutation_type=None):
    """
    Create a function that executes GraphQL documents against a graph.

    The returned function never raises for a bad request: syntax errors,
    validation errors and errors raised while resolving the graph are
    all reported in the ``errors`` of the ``ExecutionResult``, with ``data``
    set to ``None``. Errors raised by the graph carry their code in the
    ``code`` extension.
    """
    graphql_schema = create_graphql_schema(query_type=query_type, mutation_type=mutation_type)

    def execute(document_text, *, graph, variables=None, operation_name=None, allow_mutations=True):
        try:
            query = parser.document_text_to_query(
                document_text=document_text,
                variables=variables,
                graphql_schema=graphql_schema,
                operation_name=operation_name,
            )

            if query.operation == OperationType.MUTATION and not allow_mutations:
                raise GraphQLError("mutations are not allowed for this request")

            if query.graph_query is None:
                result = {}
            else:
                result = graph.resolve(query.graph_query)

            if query.graphql_schema_document is not None:
                schema_result = _execute_graphql_schema(
                    graphql_schema_document=query.graphql_schema_document,
                    graphql_schema=graphql_schema.graphql_schema,
                    variables=variables,
                    operation_name=operation_name,
                )
                result = result.copy()
                result.update(schema_result)

            return ExecutionResult(
                data=result,
                errors=None,
            )
        except GraphError as error:
            _logger.info("request failed with %s: %s", error.code, error.message)
            return ExecutionResult(
                data=None,
                errors=[_to_graphql_error(error)],
            )
        except GraphQLError as error:
            _logger.info("request failed: %s", error.message)
            return ExecutionResult(
                data=None,
                errors=[error],
            )

    execute.graphql_schema = graphql_schema.graphql_schema

    return execute


def _to_graphql_error(error):
    return GraphQLError(
        error.message,
        nodes=error.nodes,
        original_error=error,
        extensions={"code": error.code},
    )


def _execute_graphql_schema(graphql_schema_document, graphql_schema, variables, operation_name):
    result = graphql_execute(
        graphql_schema,
        graphql_schema_document,
        variable_values=variables,
        operation_name=operation_name,
    )
    if result.errors:
        raise result.errors[0]
    else:
        return result.data

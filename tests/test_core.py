from precisely import assert_that, equal_to
import pytest

import bookgraph.core as g


def test_resolver_is_dispatched_using_type_of_query():
    @g.resolver("one")
    def resolve_one(graph, query):
        return 1

    @g.resolver("two")
    def resolve_two(graph, query):
        return 2

    resolvers = [resolve_one, resolve_two]

    class Query(object):
        type = "one"

    result = g.create_graph(resolvers).resolve(Query)

    assert_that(result, equal_to(1))


def test_when_resolve_is_called_then_resolver_is_passed_the_graph():
    @g.resolver("root")
    def resolve_root(graph, query):
        return graph.resolve(Query("leaf"))

    @g.resolver("leaf")
    def resolve_leaf(graph, query):
        return 42

    class Query(object):
        def __init__(self, type):
            self.type = type

    resolvers = [resolve_root, resolve_leaf]

    result = g.create_graph(resolvers).resolve(Query("root"))

    assert_that(result, equal_to(42))


def test_nested_resolvers_are_flattened():
    @g.resolver("one")
    def resolve_one(graph, query):
        return 1

    @g.resolver("two")
    def resolve_two(graph, query):
        return 2

    graph = g.create_graph(((resolve_one, ), [resolve_two]))

    assert_that(graph.resolve(None, type="two"), equal_to(2))


def test_when_there_is_no_resolver_for_type_then_graph_error_is_raised():
    graph = g.create_graph([])

    error = pytest.raises(g.GraphError, lambda: graph.resolve(None, type="one"))

    assert_that(str(error.value), equal_to("could not find resolver for query of type: one"))


def test_when_two_resolvers_have_same_type_then_graph_error_is_raised():
    @g.resolver("one")
    def resolve_first(graph, query):
        return 1

    @g.resolver("one")
    def resolve_second(graph, query):
        return 2

    pytest.raises(g.GraphError, lambda: g.define_graph([resolve_first, resolve_second]))


def test_dependencies_are_injected_into_resolvers():
    class Store(object):
        pass

    store = Store()

    @g.resolver("one")
    @g.dependencies(store=Store)
    def resolve_one(graph, query, *, store):
        return store

    graph = g.define_graph([resolve_one]).create_graph({Store: store})

    assert_that(graph.resolve(None, type="one"), equal_to(store))


def test_when_dependency_is_missing_then_graph_error_is_raised():
    class Store(object):
        pass

    @g.resolver("one")
    @g.dependencies(store=Store)
    def resolve_one(graph, query, *, store):
        return store

    graph = g.define_graph([resolve_one]).create_graph({})

    error = pytest.raises(g.GraphError, lambda: graph.resolve(None, type="one"))

    assert_that(str(error.value), equal_to("missing dependency: Store"))


def test_error_kinds_are_graph_errors_with_codes():
    assert_that(issubclass(g.UnknownFieldError, g.GraphError), equal_to(True))
    assert_that(issubclass(g.ArgumentError, g.GraphError), equal_to(True))
    assert_that(g.UnknownFieldError("bad").code, equal_to("UNKNOWN_FIELD"))
    assert_that(g.ArgumentError("bad").code, equal_to("BAD_ARGUMENT"))

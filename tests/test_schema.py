from precisely import assert_that, contains_exactly, equal_to, has_attrs, is_instance
import pytest

import bookgraph as g
from bookgraph import schema


def test_fields_can_be_looked_up_by_name():
    User = g.ObjectType("User", fields=(
        g.field("name", type=g.String),
    ))

    assert_that(User.fields.name, has_attrs(name="name", type=g.String, owner_type=User))


def test_when_field_is_not_defined_then_unknown_field_error_is_raised():
    User = g.ObjectType("User", fields=(
        g.field("name", type=g.String),
    ))

    error = pytest.raises(g.UnknownFieldError, lambda: User.fields.email_address)

    assert_that(str(error.value), equal_to("User has no field email_address"))


def test_trailing_underscore_is_ignored_when_looking_up_fields():
    Range = g.ObjectType("Range", fields=(
        g.field("from", type=g.Int),
    ))

    assert_that(Range.fields.from_, has_attrs(name="from"))


class TestTypeRegistry(object):
    def test_types_can_refer_to_types_declared_later(self):
        registry = g.TypeRegistry()

        Book = registry.object_type("Book", fields=(
            g.field("author", type=g.NullableType(registry.ref("Author"))),
        ))
        Author = registry.object_type("Author", fields=(
            g.field("books", type=g.ListType(registry.ref("Book"))),
        ))

        assert_that(Book.fields.author.type, equal_to(g.NullableType(Author)))
        assert_that(Author.fields.books.type.element_type, equal_to(Book))

    def test_registered_types_can_be_looked_up_by_name(self):
        registry = g.TypeRegistry()
        Book = registry.object_type("Book", fields=())

        assert_that(registry.get("Book"), equal_to(Book))
        assert_that("Book" in registry, equal_to(True))
        assert_that(list(registry), contains_exactly(Book))

    def test_when_name_is_registered_twice_then_graph_error_is_raised(self):
        registry = g.TypeRegistry()
        registry.object_type("Book", fields=())

        error = pytest.raises(g.GraphError, lambda: registry.object_type("Book", fields=()))

        assert_that(str(error.value), equal_to("type is already registered: Book"))

    def test_reference_to_unregistered_type_fails_when_type_is_read(self):
        registry = g.TypeRegistry()
        Book = registry.object_type("Book", fields=(
            g.field("author", type=registry.ref("Author")),
        ))

        error = pytest.raises(g.GraphError, lambda: Book.fields.author.type)

        assert_that(str(error.value), equal_to("no type registered with name: Author"))

    def test_queries_can_be_built_through_references(self):
        registry = g.TypeRegistry()
        Book = registry.object_type("Book", fields=(
            g.field("author", type=registry.ref("Author")),
        ))
        Author = registry.object_type("Author", fields=(
            g.field("name", type=g.String),
        ))

        query = Book(
            g.key("author", Book.fields.author(
                g.key("name", Author.fields.name()),
            )),
        )

        assert_that(query.field_queries[0].type_query, has_attrs(type=Author))


class TestArguments(object):
    def test_args_are_coerced_and_passed_to_field_query(self):
        Root = g.ObjectType("Root", fields=(
            g.field("book", type=g.String, params=(
                g.param("id", type=g.Int),
            )),
        ))

        field_query = Root.fields.book(Root.fields.book.params.id(42))

        assert_that(field_query.args, has_attrs(id=42))

    def test_when_arg_is_not_set_then_default_is_used(self):
        Root = g.ObjectType("Root", fields=(
            g.field("book", type=g.String, params=(
                g.param("id", type=g.NullableType(g.Int), default=None),
            )),
        ))

        field_query = Root.fields.book()

        assert_that(field_query.args, has_attrs(id=None))

    def test_when_required_arg_is_missing_then_argument_error_is_raised(self):
        Root = g.ObjectType("Root", fields=(
            g.field("add_author", type=g.String, params=(
                g.param("name", type=g.String),
            )),
        ))

        error = pytest.raises(g.ArgumentError, lambda: Root.fields.add_author())

        assert_that(str(error.value), equal_to("field add_author is missing required argument name"))

    def test_when_arg_has_wrong_type_then_argument_error_is_raised(self):
        Root = g.ObjectType("Root", fields=(
            g.field("book", type=g.String, params=(
                g.param("id", type=g.Int),
            )),
        ))

        error = pytest.raises(g.ArgumentError, lambda: Root.fields.book.params.id("1"))

        assert_that(str(error.value), equal_to("cannot coerce '1' to Int"))

    def test_booleans_are_not_ints(self):
        pytest.raises(g.ArgumentError, lambda: g.Int.coerce(True))

    def test_strings_are_coerced_to_strings(self):
        assert_that(g.String.coerce("Bob"), equal_to("Bob"))
        pytest.raises(g.ArgumentError, lambda: g.String.coerce(42))

    def test_nullable_types_accept_none(self):
        assert_that(g.NullableType(g.Int).coerce(None), equal_to(None))
        assert_that(g.NullableType(g.Int).coerce(1), equal_to(1))

    def test_list_types_coerce_each_element(self):
        assert_that(g.ListType(g.Int).coerce((1, 2)), equal_to([1, 2]))
        pytest.raises(g.ArgumentError, lambda: g.ListType(g.Int).coerce("12"))

    def test_when_param_is_not_defined_then_argument_error_is_raised(self):
        Root = g.ObjectType("Root", fields=(
            g.field("books", type=g.String),
        ))

        error = pytest.raises(g.ArgumentError, lambda: Root.fields.books.params.limit)

        assert_that(str(error.value), equal_to("books has no param limit"))

    def test_when_arg_is_for_another_field_then_argument_error_is_raised(self):
        Root = g.ObjectType("Root", fields=(
            g.field("book", type=g.String, params=(
                g.param("id", type=g.Int),
            )),
            g.field("author", type=g.String, params=(
                g.param("id", type=g.Int),
            )),
        ))

        pytest.raises(
            g.ArgumentError,
            lambda: Root.fields.author(Root.fields.book.params.id(1)),
        )


class TestQueryMerging(object):
    def test_object_queries_with_different_fields_are_combined(self):
        Book = g.ObjectType("Book", fields=(
            g.field("id", type=g.Int),
            g.field("name", type=g.String),
        ))

        query = Book(g.key("id", Book.fields.id())) + Book(g.key("name", Book.fields.name()))

        assert_that(query.field_queries, contains_exactly(
            has_attrs(key="id", field=Book.fields.id),
            has_attrs(key="name", field=Book.fields.name),
        ))

    def test_same_field_with_same_key_is_merged(self):
        Author = g.ObjectType("Author", fields=(
            g.field("id", type=g.Int),
            g.field("name", type=g.String),
        ))
        Book = g.ObjectType("Book", fields=(
            g.field("author", type=Author),
        ))

        query = (
            Book(g.key("author", Book.fields.author(g.key("id", Author.fields.id())))) +
            Book(g.key("author", Book.fields.author(g.key("name", Author.fields.name()))))
        )

        assert_that(query.field_queries, contains_exactly(
            has_attrs(
                key="author",
                type_query=has_attrs(field_queries=contains_exactly(
                    has_attrs(key="id"),
                    has_attrs(key="name"),
                )),
            ),
        ))

    def test_queries_for_different_object_types_cannot_be_added(self):
        Book = g.ObjectType("Book", fields=())
        Author = g.ObjectType("Author", fields=())

        pytest.raises(TypeError, lambda: Book() + Author())


def test_collect_types_follows_fields_and_references():
    registry = g.TypeRegistry()
    Book = registry.object_type("Book", fields=(
        g.field("author", type=g.NullableType(registry.ref("Author"))),
    ))
    Author = registry.object_type("Author", fields=(
        g.field("books", type=g.ListType(registry.ref("Book"))),
    ))

    types = schema.collect_types((Book, ))

    assert_that(Author in types, equal_to(True))
    assert_that(Book in types, equal_to(True))


def test_element_type_and_query_are_unwrapped():
    Book = g.ObjectType("Book", fields=(
        g.field("id", type=g.Int),
    ))

    assert_that(schema.to_element_type(g.ListType(g.NullableType(Book))), equal_to(Book))
    assert_that(
        g.to_element_query(g.ListType(Book)(g.key("id", Book.fields.id()))),
        is_instance(schema.ObjectQuery),
    )

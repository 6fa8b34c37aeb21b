import bookgraph as g

from ..store import RecordStore
from . import authors
from .registry import registry


Book = registry.object_type(
    "Book",
    description="This represents a book written by an author",
    fields=(
        g.field("id", type=g.Int),
        g.field("name", type=g.String),
        g.field("author_id", type=g.Int),
        g.field("author", type=g.NullableType(registry.ref("Author"))),
    ),
)


class BookQuery(object):
    @staticmethod
    def select(type_query):
        return BookQuery(type_query=type_query, fetch=lambda store: store.list_books())

    @staticmethod
    def select_by_id(type_query, book_id):
        return BookQuery(type_query=type_query, fetch=lambda store: store.find_book_by_id(book_id))

    @staticmethod
    def select_by_author_id(type_query, author_id):
        return BookQuery(type_query=type_query, fetch=lambda store: store.books_by_author(author_id))

    @staticmethod
    def select_record(type_query, book):
        return BookQuery(type_query=type_query, fetch=lambda store: book)

    def __init__(self, type_query, fetch):
        self.type = BookQuery
        self.type_query = type_query
        self.fetch = fetch


@g.resolver(BookQuery)
@g.dependencies(store=RecordStore)
def book_resolver(graph, query, *, store):
    build_book = g.create_object_builder(g.to_element_query(query.type_query))

    build_book.attr(Book.fields.id, "id")
    build_book.attr(Book.fields.name, "name")
    build_book.attr(Book.fields.author_id, "author_id")

    @build_book.field(Book.fields.author)
    def resolve_author(field_query):
        return lambda book: graph.resolve(
            authors.AuthorQuery.select_by_id(field_query.type_query, book.author_id),
        )

    return g.build_records(query.type_query, query.fetch(store), build_book)


resolvers = (book_resolver, )

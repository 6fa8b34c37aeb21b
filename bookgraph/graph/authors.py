import bookgraph as g

from ..store import RecordStore
from . import books
from .registry import registry


Author = registry.object_type(
    "Author",
    description="This represents an author of a book",
    fields=(
        g.field("id", type=g.Int),
        g.field("name", type=g.String),
        g.field("books", type=g.ListType(registry.ref("Book"))),
    ),
)


class AuthorQuery(object):
    @staticmethod
    def select(type_query):
        return AuthorQuery(type_query=type_query, fetch=lambda store: store.list_authors())

    @staticmethod
    def select_by_id(type_query, author_id):
        return AuthorQuery(type_query=type_query, fetch=lambda store: store.find_author_by_id(author_id))

    @staticmethod
    def select_record(type_query, author):
        return AuthorQuery(type_query=type_query, fetch=lambda store: author)

    def __init__(self, type_query, fetch):
        self.type = AuthorQuery
        self.type_query = type_query
        self.fetch = fetch


@g.resolver(AuthorQuery)
@g.dependencies(store=RecordStore)
def author_resolver(graph, query, *, store):
    build_author = g.create_object_builder(g.to_element_query(query.type_query))

    build_author.attr(Author.fields.id, "id")
    build_author.attr(Author.fields.name, "name")

    @build_author.field(Author.fields.books)
    def resolve_books(field_query):
        return lambda author: graph.resolve(
            books.BookQuery.select_by_author_id(field_query.type_query, author.id),
        )

    return g.build_records(query.type_query, query.fetch(store), build_author)


resolvers = (author_resolver, )

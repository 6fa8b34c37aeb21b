import bookgraph as g

from ..store import RecordStore
from . import authors, books
from .registry import registry


Query = registry.object_type(
    "Query",
    description="Root query",
    fields=(
        g.field(
            "book",
            type=g.NullableType(books.Book),
            params=(
                g.param("id", type=g.NullableType(g.Int), default=None),
            ),
            description="A single book",
        ),
        g.field("books", type=g.ListType(books.Book), description="List of books"),
        g.field(
            "author",
            type=g.NullableType(authors.Author),
            params=(
                g.param("id", type=g.NullableType(g.Int), default=None),
            ),
            description="A single author",
        ),
        g.field("authors", type=g.ListType(authors.Author), description="List of authors"),
    ),
)


query_resolver = g.root_object_resolver(Query)


@query_resolver.field(Query.fields.book)
def query_resolve_book(graph, query, args):
    return graph.resolve(books.BookQuery.select_by_id(query, args.id))


@query_resolver.field(Query.fields.books)
def query_resolve_books(graph, query, args):
    return graph.resolve(books.BookQuery.select(query))


@query_resolver.field(Query.fields.author)
def query_resolve_author(graph, query, args):
    return graph.resolve(authors.AuthorQuery.select_by_id(query, args.id))


@query_resolver.field(Query.fields.authors)
def query_resolve_authors(graph, query, args):
    return graph.resolve(authors.AuthorQuery.select(query))


Mutation = registry.object_type(
    "Mutation",
    description="Root mutation",
    fields=(
        g.field(
            "add_book",
            type=books.Book,
            params=(
                g.param("name", type=g.String),
                g.param("author_id", type=g.Int),
            ),
            description="Add a new book",
        ),
        g.field(
            "add_author",
            type=authors.Author,
            params=(
                g.param("name", type=g.String),
            ),
            description="Add a new author",
        ),
    ),
)


mutation_resolver = g.root_object_resolver(Mutation)


@mutation_resolver.field(Mutation.fields.add_book)
@g.dependencies(store=RecordStore)
def mutation_add_book(graph, query, args, *, store):
    book = store.insert_book(name=args.name, author_id=args.author_id)
    return graph.resolve(books.BookQuery.select_record(query, book))


@mutation_resolver.field(Mutation.fields.add_author)
@g.dependencies(store=RecordStore)
def mutation_add_author(graph, query, args, *, store):
    author = store.insert_author(name=args.name)
    return graph.resolve(authors.AuthorQuery.select_record(query, author))


resolvers = (query_resolver, mutation_resolver)

"""
In-memory record store for books and authors.

Records are immutable and are only ever created through the insert
operations, which assign each record the next sequential id for its
collection. Inserts into a collection are serialized so that concurrent
requests can't hand out the same id twice; reads take a snapshot of the
collection.
"""

import collections
import logging
import threading

from . import iterables


_logger = logging.getLogger(__name__)


BookRecord = collections.namedtuple("BookRecord", ["id", "name", "author_id"])

AuthorRecord = collections.namedtuple("AuthorRecord", ["id", "name"])


class RecordStore(object):
    def __init__(self):
        self._books = []
        self._authors = []
        self._books_lock = threading.Lock()
        self._authors_lock = threading.Lock()

    def find_book_by_id(self, book_id):
        return iterables.find(lambda book: book.id == book_id, self.list_books(), default=None)

    def find_author_by_id(self, author_id):
        return iterables.find(lambda author: author.id == author_id, self.list_authors(), default=None)

    def list_books(self):
        return tuple(self._books)

    def list_authors(self):
        return tuple(self._authors)

    def books_by_author(self, author_id):
        return [
            book
            for book in self.list_books()
            if book.author_id == author_id
        ]

    def insert_book(self, name, author_id):
        with self._books_lock:
            book = BookRecord(id=len(self._books) + 1, name=name, author_id=author_id)
            self._books.append(book)

        _logger.debug("inserted book %s", book.id)
        return book

    def insert_author(self, name):
        with self._authors_lock:
            author = AuthorRecord(id=len(self._authors) + 1, name=name)
            self._authors.append(author)

        _logger.debug("inserted author %s", author.id)
        return author


SEED_AUTHORS = (
    "Patrick Rothfuss",
    "J. R. R. Tolkien",
    "Brent Weeks",
)

# (name, author id)
SEED_BOOKS = (
    ("Name of the Rose", 1),
    ("The Wise Man's Fear", 1),
    ("The Fellowship of the Ring", 2),
    ("The Two Towers", 2),
    ("The Return of the King", 2),
    ("The Way of Shadows", 3),
    ("Beyond the Shadows", 3),
)


def create_seeded_store():
    store = RecordStore()

    for name in SEED_AUTHORS:
        store.insert_author(name=name)

    for name, author_id in SEED_BOOKS:
        store.insert_book(name=name, author_id=author_id)

    return store

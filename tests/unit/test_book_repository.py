"""
Unit tests for the book repository: author/genre enrichment, slugs and the
genre association.
"""

import pytest
from sqlalchemy import insert

from bookstore.core.exceptions import EntityNotFoundException, ValidationException
from bookstore.domain.models.book import Book, BookGenre
from bookstore.domain.schemas.book import BookWrite


@pytest.fixture
def add_book(books, catalogue):
    def _add_book(title: str, author: str = "Terry Pratchett", genres=()) -> int:
        return books.insert(BookWrite(
            title=title,
            author_id=catalogue["authors"][author],
            publication_year=1990,
            description=f"About {title}",
            genre_ids=[catalogue["genres"][g] for g in genres],
        ))
    return _add_book


class TestInsert:

    def test_slug_is_derived_from_title(self, books, add_book):
        book_id = add_book("My Title")

        assert books.get_one_by_id(book_id).slug == "my-title"

    def test_slug_drops_punctuation(self, books, add_book):
        book_id = add_book("Good Omens: The Nice and Accurate Prophecies!")

        assert books.get_one_by_id(book_id).slug == "good-omens-the-nice-and-accurate-prophecies"

    def test_unknown_author_is_rejected(self, books, catalogue):
        with pytest.raises(ValidationException):
            books.insert(BookWrite(title="Nobody Wrote This", author_id=999))

        assert books.get_all() == []

    def test_unknown_genre_rolls_back_the_new_book(self, books, catalogue):
        with pytest.raises(ValidationException):
            books.insert(BookWrite(
                title="Half Written",
                author_id=catalogue["authors"]["Terry Pratchett"],
                genre_ids=[catalogue["genres"]["Fantasy"], 999],
            ))

        assert books.get_all() == []

    def test_genres_written_with_the_book(self, books, add_book, catalogue):
        book_id = add_book("Small Gods", genres=["Humour", "Fantasy"])

        assert [g.genre_name for g in books.get_one_by_id(book_id).genres] == ["Fantasy", "Humour"]

    def test_author_is_joined(self, books, add_book):
        book = books.get_one_by_id(add_book("Mort"))

        assert book.author.author_name == "Terry Pratchett"
        assert book.author.id == book.author_id

    def test_missing_author_is_zero_valued(self, books, database, catalogue):
        # A dangling author_id can only come from outside the app, so write it with FKs off
        with database.engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
            conn.execute(insert(Book).values(
                title="Orphan", author_id=999, publication_year=2000, slug="orphan", description="",
            ))
            conn.commit()
            conn.exec_driver_sql("PRAGMA foreign_keys=ON")

        book = books.get_one_by_slug("orphan")

        assert book.author.id == 0
        assert book.author.author_name == ""


class TestLookups:

    def test_get_by_slug(self, books, add_book):
        book_id = add_book("The Dispossessed", author="Ursula K. Le Guin")

        assert books.get_one_by_slug("the-dispossessed").id == book_id

    def test_not_found(self, books):
        with pytest.raises(EntityNotFoundException):
            books.get_one_by_id(404)
        with pytest.raises(EntityNotFoundException):
            books.get_one_by_slug("no-such-book")

    def test_get_all_orders_by_title(self, books, add_book):
        for title in ["Mort", "Eric", "Sourcery"]:
            add_book(title)

        assert [b.title for b in books.get_all()] == ["Eric", "Mort", "Sourcery"]

    def test_get_all_filter_matches_book_ids(self, books, add_book):
        mort = add_book("Mort")
        add_book("Eric")
        sourcery = add_book("Sourcery")

        found = books.get_all([sourcery, mort])

        assert [b.id for b in found] == [mort, sourcery]

    def test_get_all_in_genres(self, books, add_book, catalogue):
        add_book("The Lathe of Heaven", author="Ursula K. Le Guin", genres=["Science Fiction"])
        add_book("Eric", genres=["Fantasy", "Humour"])
        add_book("A Wizard of Earthsea", author="Ursula K. Le Guin", genres=["Fantasy"])

        found = books.get_all_in_genres([catalogue["genres"]["Fantasy"]])

        assert [b.title for b in found] == ["A Wizard of Earthsea", "Eric"]


class TestUpdate:

    def test_scalars_and_slug_recomputed(self, books, add_book, catalogue):
        book_id = add_book("Mort")

        books.update(BookWrite(
            id=book_id,
            title="Reaper Man",
            author_id=catalogue["authors"]["Terry Pratchett"],
            publication_year=1991,
        ))

        book = books.get_one_by_id(book_id)
        assert (book.title, book.slug, book.publication_year) == ("Reaper Man", "reaper-man", 1991)

    def test_genre_set_is_replaced_exactly(self, books, add_book, catalogue):
        genres = catalogue["genres"]
        book_id = add_book("Eric", genres=["Fantasy", "Humour"])

        books.update(BookWrite(
            id=book_id,
            title="Eric",
            author_id=catalogue["authors"]["Terry Pratchett"],
            genre_ids=[genres["Science Fiction"], genres["Humour"]],
        ))

        assert {g.id for g in books.get_one_by_id(book_id).genres} == {genres["Science Fiction"], genres["Humour"]}

    def test_empty_genre_list_keeps_existing_genres(self, books, add_book, catalogue):
        book_id = add_book("Eric", genres=["Fantasy"])

        books.update(BookWrite(id=book_id, title="Eric", author_id=catalogue["authors"]["Terry Pratchett"]))

        assert [g.genre_name for g in books.get_one_by_id(book_id).genres] == ["Fantasy"]

    def test_unknown_genre_leaves_book_untouched(self, books, add_book, catalogue):
        book_id = add_book("Mort", genres=["Fantasy"])

        with pytest.raises(ValidationException):
            books.update(BookWrite(
                id=book_id,
                title="Reaper Man",
                author_id=catalogue["authors"]["Terry Pratchett"],
                genre_ids=[catalogue["genres"]["Humour"], 999],
            ))

        book = books.get_one_by_id(book_id)
        assert (book.title, book.slug) == ("Mort", "mort")
        assert [g.genre_name for g in book.genres] == ["Fantasy"]

    def test_update_missing_book(self, books, catalogue):
        with pytest.raises(EntityNotFoundException):
            books.update(BookWrite(id=77, title="Ghost", author_id=catalogue["authors"]["Terry Pratchett"]))


class TestDelete:

    def test_delete_removes_book_and_associations(self, books, session, add_book):
        book_id = add_book("Eric", genres=["Fantasy", "Humour"])

        books.delete_by_id(book_id)

        with pytest.raises(EntityNotFoundException):
            books.get_one_by_id(book_id)
        assert session.query(BookGenre).filter(BookGenre.book_id == book_id).count() == 0

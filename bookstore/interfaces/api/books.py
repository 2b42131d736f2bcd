"""Book API routes — public catalogue lookups and authenticated edits."""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from bookstore.application.services import book_service
from bookstore.domain.repositories.book_repository import (
    AuthorRepository,
    BookRepository,
    GenreRepository,
)
from bookstore.domain.schemas.auth import IdRequest
from bookstore.domain.schemas.book import AuthorRead, BookWrite, GenreRead
from bookstore.interfaces.api.deps import get_current_user
from bookstore.interfaces.api.envelope import envelope
from bookstore.interfaces.deps import (
    get_author_repository,
    get_book_repository,
    get_genre_repository,
)

router = APIRouter(tags=["Books"])


@router.get("/books")
def all_books(
    genre_id: List[int] = Query(default=[]),
    repo: BookRepository = Depends(get_book_repository),
):
    return envelope("success", {"books": book_service.list_books(repo, genre_id)})


@router.get("/books/id/{book_id}", dependencies=[Depends(get_current_user)])
def get_book_by_id(book_id: int, repo: BookRepository = Depends(get_book_repository)):
    return envelope("success", repo.get_one_by_id(book_id))


@router.get("/books/{slug}")
def get_book_by_slug(slug: str, repo: BookRepository = Depends(get_book_repository)):
    return envelope("success", repo.get_one_by_slug(slug))


@router.post("/books", status_code=status.HTTP_202_ACCEPTED, dependencies=[Depends(get_current_user)])
def edit_book(body: BookWrite, repo: BookRepository = Depends(get_book_repository)):
    book_id = book_service.save_book(repo, body)
    return envelope("Changes saved", {"id": book_id})


@router.delete("/books", dependencies=[Depends(get_current_user)])
def delete_book(body: IdRequest, repo: BookRepository = Depends(get_book_repository)):
    repo.delete_by_id(body.id)
    return envelope("Book deleted")


@router.get("/authors")
def all_authors(repo: AuthorRepository = Depends(get_author_repository)):
    return envelope("success", {"authors": [AuthorRead.model_validate(a) for a in repo.get_all()]})


@router.get("/genres")
def all_genres(repo: GenreRepository = Depends(get_genre_repository)):
    return envelope("success", {"genres": [GenreRead.model_validate(g) for g in repo.get_all()]})

"""
Book endpoints for API v1.

These routes expose the CRUD API for books.  Each HTTP method is bound
to its own handler; any other method on these paths is answered with
405 by the router.  Handlers obtain a ``BookService`` through the
``get_book_service`` dependency, which wraps the repository stored on
``app.state`` by ``create_app``.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from library_api.app.schemas.book import (
    BookCreate,
    BookCreated,
    BookRead,
    BookUpdate,
    MessageResponse,
)
from library_api.app.services.book_service import BookService

router = APIRouter()


def get_book_service(request: Request) -> BookService:
    """Build a service bound to the application's repository."""
    return BookService(request.app.state.repository)


@router.get("/", response_model=List[BookRead])
async def list_books(service: BookService = Depends(get_book_service)) -> List[BookRead]:
    """Return every book in creation order."""
    return await service.list_books()


@router.post("/", response_model=BookCreated, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_in: BookCreate,
    service: BookService = Depends(get_book_service),
) -> BookCreated:
    """Create a new book.

    ``title``, ``author``, ``published_date`` and ``isbn`` are
    required; ``available`` defaults to true.  Returns 409 when the
    isbn is already taken.
    """
    book = await service.create_book(book_in)
    return BookCreated(id=book.id, message="Book created successfully")


@router.get("/{book_id}/", response_model=BookRead)
async def get_book(book_id: int, service: BookService = Depends(get_book_service)) -> BookRead:
    """Retrieve a single book by its ID.  Raises 404 if it does not exist."""
    return await service.get_book(book_id)


@router.put("/{book_id}/", response_model=MessageResponse)
async def update_book(
    book_id: int,
    book_in: BookUpdate,
    service: BookService = Depends(get_book_service),
) -> MessageResponse:
    """Update a book.

    Fields missing from the payload keep their current values.
    """
    await service.update_book(book_id, book_in)
    return MessageResponse(message="Book updated successfully")


@router.patch("/{book_id}/", response_model=MessageResponse)
async def partial_update_book(
    book_id: int,
    book_in: BookUpdate,
    service: BookService = Depends(get_book_service),
) -> MessageResponse:
    await service.partial_update_book(book_id, book_in)
    return MessageResponse(message="Book partially updated successfully")


@router.delete("/{book_id}/", response_model=MessageResponse)
async def delete_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> MessageResponse:
    """Delete a book permanently."""
    await service.delete_book(book_id)
    return MessageResponse(message="Book deleted successfully")

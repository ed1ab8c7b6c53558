"""FastAPI endpoints for the catalog domain.

Write endpoints take the raw body so the admin check runs before any payload
validation. Endpoints are plain functions: FastAPI runs them in its
threadpool, off the event loop.
"""

from fastapi import APIRouter, Depends, Query, Response
from protean.exceptions import ValidationError

from authentication.api.dependencies import require_identity
from catalog import catalog as catalog_service
from catalog.responses import BookResponse, PaginatedBooksResponse, PresignedURLResponse
from shared.http import parse_json_object, raw_body

router = APIRouter(tags=["catalog"], dependencies=[Depends(require_identity)])


def _images(payload: dict):
    images = payload.get("images")
    if images is not None and (
        not isinstance(images, list) or not all(isinstance(image, dict) for image in images)
    ):
        raise ValidationError({"images": ["Images must be a list of objects with id and description"]})
    return images


@router.get("/books", response_model=PaginatedBooksResponse)
def get_books(
    title: str | None = None,
    description: str | None = None,
    author_name: str | None = Query(None, alias="authorName"),
    page: int | None = Query(None, ge=1),
    per_page: int | None = Query(None, alias="perPage", ge=1),
) -> PaginatedBooksResponse:
    search = catalog_service.SearchBooks(
        title=title,
        description=description,
        author_name=author_name,
        page=page,
        per_page=per_page,
    )
    return catalog_service.find_books(search)


@router.get("/books/{book_id}", response_model=BookResponse)
def get_book(book_id: str) -> BookResponse:
    return catalog_service.find_book_by_id(book_id)


@router.post("/books", status_code=201, response_model=BookResponse)
def create_book(body: bytes = Depends(raw_body)) -> BookResponse:
    catalog_service.require_admin("CreateBook")
    payload = parse_json_object(body)
    return catalog_service.create_book(
        title=payload.get("title"),
        description=payload.get("description"),
        author_name=payload.get("authorName"),
        content_id=payload.get("contentId"),
        price=payload.get("price"),
        release_date=payload.get("releaseDate"),
        images=_images(payload),
    )


@router.patch("/books/{book_id}", status_code=204)
def update_book(book_id: str, body: bytes = Depends(raw_body)) -> Response:
    catalog_service.require_admin("UpdateBook")
    payload = parse_json_object(body)
    catalog_service.update_book(
        book_id,
        title=payload.get("title"),
        description=payload.get("description"),
        author_name=payload.get("authorName"),
        images=_images(payload),
    )
    return Response(status_code=204)


@router.delete("/books/{book_id}", status_code=204)
def delete_book(book_id: str) -> Response:
    catalog_service.delete_book(book_id)
    return Response(status_code=204)


@router.post("/presign-url", response_model=PresignedURLResponse)
def presign_url() -> PresignedURLResponse:
    return catalog_service.generate_put_presigned_url()

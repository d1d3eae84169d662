import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from book import Book
from config import Settings, settings as default_settings
from library import Library, StorageError
from validators import BookPayloadValidator

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields"
NOT_FOUND = "Book not found"


# --- Models ---
class BookModel(BaseModel):
    id: str
    title: str
    author: str
    publishedYear: int


class BookPayload(BaseModel):
    # Values must arrive with their declared JSON type.
    model_config = ConfigDict(strict=True)

    title: Optional[str] = Field(default=None, description="Book title")
    author: Optional[str] = Field(default=None, description="Book author")
    publishedYear: Optional[int] = Field(default=None, description="Year of publication")


class MessageModel(BaseModel):
    message: str


class DeletedModel(BaseModel):
    message: str
    id: str


# --- Dependencies ---
def get_library(request: Request) -> Library:
    """Dependency returning the storage client attached to the running app."""
    return request.app.state.library


def _require_fields(payload: Optional[BookPayload]) -> BookPayload:
    data = payload.model_dump() if payload is not None else None
    if not BookPayloadValidator.has_required_fields(data):
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)
    return payload


# --- API Endpoints ---
router = APIRouter()


@router.get("/books", response_model=List[BookModel])
async def list_books(library: Library = Depends(get_library)):
    try:
        books = await library.list_books()
    except StorageError as e:
        logger.error(f"list_books failed: {e}")
        raise HTTPException(status_code=500, detail="Error retrieving books")
    return [book.to_dict() for book in books]


@router.get("/books/{book_id}", response_model=BookModel, responses={404: {"model": MessageModel}})
async def get_book(book_id: str, library: Library = Depends(get_library)):
    try:
        book = await library.find_book(book_id)
    except StorageError as e:
        # Storage failures on lookups are reported the same way as unknown ids.
        logger.error(f"find_book failed for id={book_id}: {e}")
        book = None
    if book is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return book.to_dict()


@router.post(
    "/books",
    status_code=201,
    response_model=BookModel,
    responses={400: {"model": MessageModel}, 500: {"model": MessageModel}},
)
async def create_book(payload: Optional[BookPayload] = None, library: Library = Depends(get_library)):
    payload = _require_fields(payload)
    book = Book(title=payload.title, author=payload.author, published_year=payload.publishedYear)
    try:
        await library.add_book(book)
    except StorageError as e:
        logger.error(f"add_book failed for id={book.id}: {e}")
        raise HTTPException(status_code=500, detail="Error adding book")
    return book.to_dict()


@router.put(
    "/books/{book_id}",
    response_model=BookModel,
    responses={400: {"model": MessageModel}, 404: {"model": MessageModel}},
)
async def update_book(
    book_id: str,
    payload: Optional[BookPayload] = None,
    library: Library = Depends(get_library),
):
    payload = _require_fields(payload)
    try:
        updated = await library.update_book(
            book_id,
            title=payload.title,
            author=payload.author,
            published_year=payload.publishedYear,
        )
    except StorageError as e:
        logger.error(f"update_book failed for id={book_id}: {e}")
        updated = False
    if not updated:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Book(
        id=book_id,
        title=payload.title,
        author=payload.author,
        published_year=payload.publishedYear,
    ).to_dict()


@router.delete("/books/{book_id}", response_model=DeletedModel, responses={404: {"model": MessageModel}})
async def delete_book(book_id: str, library: Library = Depends(get_library)):
    try:
        removed = await library.remove_book(book_id)
    except StorageError as e:
        logger.error(f"remove_book failed for id={book_id}: {e}")
        removed = False
    if not removed:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Book deleted", "id": book_id}


# --- Error shaping ---
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": MISSING_FIELDS})


# --- Application factory ---
def create_app(app_settings: Optional[Settings] = None, library: Optional[Library] = None) -> FastAPI:
    """Build the FastAPI application.

    When ``library`` is given it is used as-is and the caller manages its
    lifetime. Otherwise a Library is created from the settings, opened at
    startup and closed at shutdown.
    """
    app_settings = app_settings or default_settings
    owns_library = library is None
    if owns_library:
        library = Library(app_settings.database_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if owns_library:
            await library.open()
        try:
            yield
        finally:
            if owns_library:
                await library.close()

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.library = library
    app.state.settings = app_settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)
    return app


app = create_app()

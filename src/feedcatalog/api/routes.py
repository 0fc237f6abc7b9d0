"""API routes for the feed catalog.

Provides REST API endpoints to list, look up and register feeds. Every
response is JSON; errors are rendered as {"error": "<message>"}.
"""

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedcatalog.exceptions import FeedCatalogError, FeedNotFoundError
from feedcatalog.models.feed import Feed
from feedcatalog.storage.feed_list import FeedListStore

logger = structlog.get_logger()

# Service instances (will be initialized on app startup)
_feed_list_store: FeedListStore | None = None


def init_services(feed_list_store: FeedListStore) -> None:
    """Initialize API services.

    Must be called before API routes can be used.

    Args:
        feed_list_store: An initialized feed list store.
    """
    global _feed_list_store
    _feed_list_store = feed_list_store


def get_feed_list_store() -> FeedListStore:
    """Get feed list store instance."""
    if _feed_list_store is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _feed_list_store


async def require_json_content_type(request: Request) -> None:
    """Reject request bodies that are not declared as JSON.

    The Content-Type header may list several media types separated by
    commas; one of them must be application/json.

    Raises:
        HTTPException(415): If no listed media type is application/json.
    """
    if request.method not in ("POST", "PUT", "PATCH"):
        return

    content_type = request.headers.get("content-type", "")
    for value in content_type.split(","):
        media_type = value.split(";", 1)[0].strip().lower()
        if media_type.count("/") != 1 or not all(media_type.split("/")):
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail=f"Media type ({value}) not parseable",
            )
        if media_type == "application/json":
            return

    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail=f"Media type ({content_type}) not supported",
    )


router = APIRouter(
    prefix="/api",
    tags=["feeds"],
    dependencies=[Depends(require_json_content_type)],
)


# Routes


@router.get("/feeds", response_model=list[Feed])
async def list_feeds(
    store: FeedListStore = Depends(get_feed_list_store),
) -> list[Feed]:
    """List the default catalog followed by all user-added feeds."""
    return await store.list_all()


@router.get("/feeds/{feed_id}", response_model=Feed)
async def get_feed(
    feed_id: str,
    store: FeedListStore = Depends(get_feed_list_store),
) -> Feed:
    """Get one feed by identifier.

    Raises:
        FeedNotFoundError: Rendered as 404.
    """
    return await store.get_by_id(feed_id)


@router.post("/feeds", response_model=str)
async def add_feed(
    feed: Feed,
    store: FeedListStore = Depends(get_feed_list_store),
) -> str:
    """Register a feed and return its identifier.

    Any ID in the request body is ignored. Posting a URL that is already in
    the catalog returns the existing feed's ID.
    """
    return await store.add(feed)


@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def endpoint_not_found(path: str) -> None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Endpoint not found")


# Error rendering


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def _feed_catalog_exception_handler(
    request: Request, exc: FeedCatalogError
) -> JSONResponse:
    if isinstance(exc, FeedNotFoundError):
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    logger.error(
        "Feed catalog request failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Render all API errors as JSON error bodies."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(FeedCatalogError, _feed_catalog_exception_handler)

"""
FastAPI Endpoints for URL Shortener Service

This module defines all HTTP endpoints with minimal logic.
Endpoints only handle:
- Reading and decoding request bodies
- Delegating to the service layer
- Formatting responses

Errors are raised as URLShortenerException subclasses and turned into
responses by the handlers registered in urlpresser.main.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from pydantic import ValidationError

from urlpresser.api.schemas import ShortenRequest, ShortenResponse
from urlpresser.core.exceptions import InvalidRequestError
from urlpresser.services.redirect_service import RedirectService
from urlpresser.services.url_service import URLShorteningService
from urlpresser.services.url_store import URLStore


router = APIRouter()


def get_store(request: Request) -> URLStore:
    """Dependency returning the store created by create_app()."""
    return request.app.state.store


def get_url_service(request: Request, store: URLStore = Depends(get_store)) -> URLShorteningService:
    return URLShorteningService(store, base_url=request.app.state.settings.BASE_URL)


def get_redirect_service(store: URLStore = Depends(get_store)) -> RedirectService:
    return RedirectService(store)


async def _read_text_body(request: Request) -> str:
    body = await request.body()
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidRequestError("Request body must be UTF-8 text")


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_class=PlainTextResponse,
    summary="Create a short URL",
    description="Takes the original URL as the raw request body and returns the short URL as text"
)
async def create_short_url(
    request: Request,
    url_service: URLShorteningService = Depends(get_url_service)
) -> PlainTextResponse:
    original_url = await _read_text_body(request)
    short_url = await url_service.shorten(original_url)
    return PlainTextResponse(short_url, status_code=status.HTTP_201_CREATED)


@router.post(
    "/api/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short URL (JSON)",
    description='Takes {"url": "..."} and returns {"result": "<short url>"}'
)
async def create_short_url_json(
    request: Request,
    url_service: URLShorteningService = Depends(get_url_service)
) -> ShortenResponse:
    """
    JSON variant of the shortening endpoint.

    The body is validated by hand so malformed input yields the same
    400 "Invalid request" as the plain-text endpoint instead of a 422.
    """
    try:
        body = ShortenRequest.model_validate_json(await request.body())
    except ValidationError:
        raise InvalidRequestError()

    short_url = await url_service.shorten(body.url)
    return ShortenResponse(result=short_url)


@router.get(
    "/{short_code}",
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
async def redirect_to_url(
    short_code: str,
    redirect_service: RedirectService = Depends(get_redirect_service)
) -> Response:
    """
    Redirect to the original URL for a given short code.

    The Location header carries the original URL byte for byte. URLs that
    cannot go into a header as-is (non-ASCII or control characters) are
    percent-encoded by RedirectResponse instead.

    Raises:
        ShortCodeNotFoundError: If the code was never issued (400)
    """
    original_url = await redirect_service.get_redirect_url(short_code)
    if original_url.isascii() and original_url.isprintable():
        return Response(
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            headers={"location": original_url}
        )
    return RedirectResponse(
        url=original_url,
        status_code=status.HTTP_307_TEMPORARY_REDIRECT
    )

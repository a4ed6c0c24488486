"""URL association API routes.

This module contains all endpoints for URL operations:
- List all associations (GET /)
- Create an association (POST /)
- Redirect to original URL (GET /{uuid})
- Update URL (PUT /{uuid})
- Delete association (DELETE /{uuid})

Service calls block on the store, so they run in the thread pool.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .. import convertors  # noqa: F401  registers the "shortid" path convertor
from ...core.exceptions import InvalidRequestBodyError
from ...dependencies import get_association_service
from ...models import URLAssociation, URLRequest
from ...services import AssociationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["URLs"])

_BAD_REQUEST = {"description": "Invalid request or unknown id (plain text)"}
_STORE_ERROR = {"description": "Store unavailable (plain text)"}

_URL_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": URLRequest.model_json_schema()}},
    }
}


async def read_url_request(request: Request) -> str:
    """Parse a ``{"url": "..."}`` body.

    Args:
        request: FastAPI request object.

    Returns:
        The url field, empty string if absent.

    Raises:
        InvalidRequestBodyError: If the body is not a JSON object with a string url.
    """
    body = await request.body()
    try:
        return URLRequest.model_validate_json(body).url
    except ValidationError as e:
        logger.info(f"Rejected request body: {e.errors()[0]['msg']}")
        raise InvalidRequestBodyError() from e


@router.get(
    "/",
    response_model=list[URLAssociation],
    responses={500: _STORE_ERROR},
    summary="List all associations",
)
async def list_associations(
    service: AssociationService = Depends(get_association_service),
) -> list[URLAssociation]:
    return await run_in_threadpool(service.list)


@router.get(
    "/{uuid:shortid}",
    response_class=RedirectResponse,
    status_code=301,
    responses={
        301: {"description": "Redirect to original URL"},
        400: _BAD_REQUEST,
    },
    summary="Redirect to original URL",
)
async def redirect_to_url(
    uuid: str,
    service: AssociationService = Depends(get_association_service),
) -> RedirectResponse:
    """Redirect to the URL associated with a short id.

    Args:
        uuid: The short id.
        service: Association service.

    Returns:
        Permanent redirect to the original URL.
    """
    association = await run_in_threadpool(service.get, uuid)
    return RedirectResponse(url=association.url, status_code=301)


@router.post(
    "/",
    response_model=URLAssociation,
    responses={400: _BAD_REQUEST, 500: _STORE_ERROR},
    openapi_extra=_URL_BODY,
    summary="Create a short id for a URL",
)
async def associate_url(
    request: Request,
    service: AssociationService = Depends(get_association_service),
) -> URLAssociation:
    """Create a new association for the URL in the body.

    Args:
        request: FastAPI request object.
        service: Association service.

    Returns:
        The created association.
    """
    url = await read_url_request(request)
    return await run_in_threadpool(service.create, url)


@router.put(
    "/{uuid:shortid}",
    response_class=Response,
    responses={200: {"description": "Empty body"}, 400: _BAD_REQUEST, 500: _STORE_ERROR},
    openapi_extra=_URL_BODY,
    summary="Update the URL of a short id",
)
async def update_url(
    uuid: str,
    request: Request,
    service: AssociationService = Depends(get_association_service),
) -> Response:
    url = await read_url_request(request)
    await run_in_threadpool(service.update, uuid, url)
    return Response(status_code=200)


@router.delete(
    "/{uuid:shortid}",
    response_class=Response,
    responses={200: {"description": "Empty body"}, 400: _BAD_REQUEST, 500: _STORE_ERROR},
    summary="Delete a short id",
)
async def disassociate_url(
    uuid: str,
    service: AssociationService = Depends(get_association_service),
) -> Response:
    await run_in_threadpool(service.delete, uuid)
    return Response(status_code=200)
